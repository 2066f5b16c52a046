"""
CLI entry point using Typer.

Provides commands for logging and recommendations:
- init: Initialize user profile and history
- log: Log a set
- history / edit / exclude / include / delete: Manage logged entries
- recommend: Recommend the next session for an exercise
"""

from .app import app
from .commands import entries, profile, recommend  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()

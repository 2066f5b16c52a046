"""
Exercise configuration for lift-advisor.

Each exercise is described by an ExerciseConfig object that parameterises
the shared recommendation engine.
"""

from .base import ExerciseConfig
from .registry import EXERCISE_REGISTRY, get_exercise_config

__all__ = [
    "ExerciseConfig",
    "EXERCISE_REGISTRY",
    "get_exercise_config",
]

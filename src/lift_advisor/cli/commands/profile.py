"""Profile commands: init."""

from typing import Annotated

import typer

from ...core.config import PHASE_PARAMS
from ...core.models import UserProfile
from .. import views
from ..app import HistoryPathOption, app, get_store


@app.command()
def init(
    age: Annotated[
        int,
        typer.Option("--age", "-a", help="Age in years (scales the set count)"),
    ] = 30,
    phase: Annotated[
        str,
        typer.Option("--phase", help="Training phase: hypertrophy | strength | peaking | explosive"),
    ] = "hypertrophy",
    history_path: HistoryPathOption = None,
) -> None:
    """
    Initialize user profile and history file.

    An existing history is kept; only the profile is rewritten.

      lift-advisor init --age 42 --phase strength
    """
    if phase not in PHASE_PARAMS:
        views.print_error(f"Unknown phase {phase!r}. Choose one of: {', '.join(PHASE_PARAMS)}")
        raise typer.Exit(1)

    try:
        profile = UserProfile(age=age, phase=phase)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store = get_store(history_path)
    existed = store.exists()
    store.init()
    store.save_profile(profile)

    views.print_success(f"Initialized profile at {store.profile_path}")
    if existed:
        views.print_info(f"Keeping existing history: {store.history_path}")
    else:
        views.print_success(f"History file: {store.history_path}")
    views.print_info(f"Age {age}, phase {phase}")

"""Recommendation command."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_PHASE
from ...core.legacy import to_legacy
from ...core.models import parse_date
from ...core.recommender import generate_recommendation
from ...io.serializers import ValidationError, legacy_to_dict, recommendation_to_dict
from .. import views
from ..app import HistoryPathOption, app, get_store


@app.command()
def recommend(
    exercise: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Squat'")],
    age: Annotated[
        Optional[int],
        typer.Option("--age", "-a", help="Age in years (default: from profile)"),
    ] = None,
    phase: Annotated[
        Optional[str],
        typer.Option("--phase", help="Training phase (default: from profile)"),
    ] = None,
    today: Annotated[
        Optional[str],
        typer.Option("--today", help="Reference date YYYY-MM-DD (default: today)"),
    ] = None,
    legacy: Annotated[
        bool,
        typer.Option("--legacy", help="Show the simplified progress/maintain/deload view"),
    ] = False,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Recommend load, reps and sets for the next session of an exercise.

      lift-advisor recommend Squat
      lift-advisor recommend "Bench Press" --phase strength --json
    """
    store = get_store(history_path)
    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create profile and history.")
        raise typer.Exit(1)

    try:
        entries = store.load_entries()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    profile = store.load_profile()
    if age is None:
        age = profile.age if profile is not None else 30
    if phase is None:
        phase = profile.phase if profile is not None else DEFAULT_PHASE

    ref_date = None
    if today is not None:
        try:
            ref_date = parse_date(today)
        except ValueError:
            views.print_error(f"Invalid date: {today}. Expected YYYY-MM-DD")
            raise typer.Exit(1)

    rec = generate_recommendation(exercise, entries, age, phase, today=ref_date)

    if legacy:
        old = to_legacy(rec)
        if json_out:
            print(json.dumps(legacy_to_dict(old), indent=2))
        else:
            views.print_legacy(old)
        return

    if json_out:
        print(json.dumps(recommendation_to_dict(rec), indent=2))
        return

    views.print_recommendation(rec)

"""Entry commands: log, history, edit, exclude, include, delete."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...io.history_store import HistoryStore
from ...io.serializers import ValidationError, entry_to_dict
from .. import views
from ..app import HistoryPathOption, app, get_store


def _open_store(history_path) -> HistoryStore:
    store = get_store(history_path)
    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create profile and history.")
        raise typer.Exit(1)
    return store


@app.command()
def log(
    exercise: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Squat'")],
    weight_kg: Annotated[float, typer.Option("--weight", "-w", help="Weight in kg")],
    reps: Annotated[int, typer.Option("--reps", "-r", help="Reps performed")],
    sets: Annotated[
        Optional[int],
        typer.Option("--sets", "-s", help="Number of sets at this weight"),
    ] = None,
    rir: Annotated[
        Optional[int],
        typer.Option("--rir", help="Reps in reserve (0 = failure)"),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
    ] = None,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Log one set (or a group of identical sets).

      lift-advisor log Squat --weight 100 --reps 8 --sets 4 --rir 2
    """
    store = _open_store(history_path)
    if date is None:
        date = datetime.now().strftime("%Y-%m-%d")

    try:
        entry = store.append_entry(exercise, date, weight_kg, reps, sets_logged=sets, rir=rir)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(
        f"Logged {entry.exercise_name}: {entry.weight_kg:g}kg × {entry.reps} on {entry.date} (id {entry.id})"
    )


@app.command()
def history(
    exercise: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Only show this exercise"),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Limit number of entries to show"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Display logged entries as a table.
    """
    store = _open_store(history_path)

    try:
        entries = store.load_entries()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if exercise is not None:
        entries = [e for e in entries if e.exercise_name == exercise]
    if limit is not None:
        entries = entries[-limit:]

    if json_out:
        print(json.dumps([entry_to_dict(e) for e in entries], indent=2))
        return

    views.print_history(entries)


@app.command()
def edit(
    entry_id: Annotated[str, typer.Argument(help="Entry ID (see 'history')")],
    weight_kg: Annotated[Optional[float], typer.Option("--weight", "-w", help="New weight in kg")] = None,
    reps: Annotated[Optional[int], typer.Option("--reps", "-r", help="New rep count")] = None,
    rir: Annotated[Optional[int], typer.Option("--rir", help="New reps in reserve")] = None,
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="New date (YYYY-MM-DD)")] = None,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Edit weight, reps, RIR or date of an entry.
    """
    if weight_kg is None and reps is None and rir is None and date is None:
        views.print_error("Nothing to change. Pass --weight, --reps, --rir or --date.")
        raise typer.Exit(1)

    store = _open_store(history_path)
    try:
        entry = store.update_entry(entry_id, date=date, weight_kg=weight_kg, reps=reps, rir=rir)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Updated {entry.id}: {entry.date} {entry.weight_kg:g}kg × {entry.reps}")


def _set_active(entry_id: str, active: bool, history_path) -> None:
    store = _open_store(history_path)
    try:
        entry = store.set_active(entry_id, active)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    state = "included in" if active else "excluded from"
    views.print_success(f"Entry {entry.id} {state} recommendations.")


@app.command()
def exclude(
    entry_id: Annotated[str, typer.Argument(help="Entry ID (see 'history')")],
    history_path: HistoryPathOption = None,
) -> None:
    """
    Exclude an entry from recommendations without deleting it.
    """
    _set_active(entry_id, False, history_path)


@app.command()
def include(
    entry_id: Annotated[str, typer.Argument(help="Entry ID (see 'history')")],
    history_path: HistoryPathOption = None,
) -> None:
    """
    Re-include a previously excluded entry.
    """
    _set_active(entry_id, True, history_path)


@app.command()
def delete(
    entry_id: Annotated[str, typer.Argument(help="Entry ID (see 'history')")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Delete without confirmation"),
    ] = False,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Delete an entry permanently.
    """
    store = _open_store(history_path)

    if not force and not views.confirm_action(f"Delete entry {entry_id}?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    try:
        removed = store.delete_entry(entry_id)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(
        f"Deleted {removed.id}: {removed.exercise_name} {removed.date} {removed.weight_kg:g}kg × {removed.reps}"
    )

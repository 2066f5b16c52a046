"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of entries and recommendations.
"""

from rich.console import Console
from rich.table import Table

from ..core.max_estimator import entry_estimate
from ..core.models import LegacyRecommendation, Recommendation, WorkoutEntry

console = Console()

_STATUS_STYLE = {
    "progressing": "green",
    "progressive": "green",
    "plateau": "yellow",
    "regressing": "red",
    "insufficient_data": "blue",
    "benchmark_mode": "magenta",
}


def format_entries_table(entries: list[WorkoutEntry]) -> Table:
    """
    Create a Rich table displaying logged entries.

    Excluded entries are shown dimmed with an "x" in the Active column.

    Args:
        entries: Entries to display

    Returns:
        Rich Table object
    """
    table = Table(title="Training History")

    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Exercise", style="magenta")
    table.add_column("Weight(kg)", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Sets", justify="right")
    table.add_column("RIR", justify="right")
    table.add_column("e1RM", justify="right", style="bold")
    table.add_column("Active", justify="center")

    for e in entries:
        est = entry_estimate(e)
        table.add_row(
            e.id,
            e.date,
            e.exercise_name,
            f"{e.weight_kg:g}",
            str(e.reps),
            str(e.sets_logged) if e.sets_logged else "-",
            str(e.rir) if e.rir is not None else "-",
            f"{est:.1f}" if est > 0 else "-",
            "✓" if e.active else "x",
            style=None if e.active else "dim",
        )

    return table


def print_history(entries: list[WorkoutEntry]) -> None:
    """Print the history table, or a note when it is empty."""
    if not entries:
        console.print("[dim]No entries logged yet.[/dim]")
        return
    console.print(format_entries_table(entries))


def print_recommendation(rec: Recommendation) -> None:
    """
    Print a recommendation: prescription table, rationale, reasoning, flags.

    Args:
        rec: Recommendation to display
    """
    p = rec.prescription
    style = _STATUS_STYLE.get(rec.training_status, "white")

    console.print()
    console.print(
        f"[bold]{rec.exercise}[/bold]  "
        f"[{style}]{rec.training_status}[/{style}]"
        + (f"  e1RM [bold]{rec.calculated_estimate_kg:g}kg[/bold]" if rec.calculated_estimate_kg else "")
    )

    table = Table(title="Next session", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Weight", f"{p.weight_kg:g} kg" if p.weight_kg is not None else "choose by feel")
    table.add_row("Sets", str(p.sets))
    table.add_row("Reps", str(p.reps))
    if p.target_reps is not None:
        table.add_row("Target reps", str(p.target_reps))
    table.add_row("RIR target", str(p.rir_target))
    table.add_row("Rest (s)", p.rest_seconds)
    if rec.intensity_percent is not None:
        table.add_row("Intensity", f"{rec.intensity_percent}% e1RM")
    console.print(table)

    console.print(f"\n{rec.rationale}")

    if p.benchmark_instructions:
        console.print("\n[bold]Benchmark protocol[/bold]")
        for i, step in enumerate(p.benchmark_instructions, 1):
            console.print(f"  {i}. {step}")

    r = rec.reasoning
    console.print()
    console.print(f"[dim]Last session:[/dim] {r.last_session}")
    console.print(f"[dim]Trend:[/dim]        {r.trend}")
    console.print(f"[dim]Next step:[/dim]    {r.next_step}")
    console.print(f"[dim]Calculation:[/dim]  {r.calculation}")

    if rec.flags:
        console.print(f"\n[dim]Flags: {', '.join(rec.flags)}[/dim]")


def print_legacy(legacy: LegacyRecommendation) -> None:
    """Print the simplified progress / maintain / deload view."""
    nw = legacy.next_workout
    weight = f"{nw.weight:g}kg" if nw.weight is not None else "benchmark"
    console.print(
        f"[bold]{legacy.exercise_name}[/bold]: [cyan]{legacy.status}[/cyan] "
        f"→ {nw.sets} × {nw.target_reps} @ {weight}"
    )
    console.print(legacy.message)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")

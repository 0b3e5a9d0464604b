"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of planned mesocycles.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.evaluation import OverloadAdjustment
from ..core.models import Mesocycle, Microcycle, NextCycleConfig, PlannedSession, StructureType

console = Console()

_STRUCTURE_STYLES = {
    StructureType.REST: "dim",
    StructureType.NORMAL: "",
    StructureType.LOW_LOAD: "green",
    StructureType.LOW_LOAD_PIVOT: "green",
}


def _fmt_notes(session: PlannedSession) -> str:
    context = session.scheduled.context
    parts: list[str] = []
    if context.adjustment_applied:
        parts.append(f"[yellow]{context.adjustment_applied}[/yellow]")
    if context.exclude_axial:
        parts.append("no axial")
    if session.content is not None:
        core = session.content.core
        parts.append(f"core: {core.focus} ({core.timing})")
        if session.content.cardio.included:
            cardio = session.content.cardio
            parts.append(f"{cardio.type} {cardio.duration_minutes}min")
    return ", ".join(parts)


def format_week_table(micro: Microcycle) -> Table:
    """
    Create a Rich table for one week of the plan.

    Args:
        micro: Microcycle to display

    Returns:
        Rich Table object
    """
    table = Table(
        title=f"Week {micro.week_number}: {micro.phase}  ·  {micro.weekly_sets_per_muscle} sets/muscle"
    )

    table.add_column("Day", style="cyan")
    table.add_column("Session", style="bold")
    table.add_column("RPE", justify="right")
    table.add_column("RIR", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Notes")

    for session in micro.sessions:
        scheduled = session.scheduled
        style = _STRUCTURE_STYLES.get(scheduled.structure_type, "")
        intensity = session.intensity
        focus = escape(scheduled.session_focus)
        table.add_row(
            escape(scheduled.day_of_week),
            f"[{style}]{focus}[/{style}]" if style else focus,
            f"{intensity.target_rpe:.1f}" if intensity else "-",
            f"{session.target_rir:g}" if session.target_rir is not None else "-",
            intensity.structure_category.value if intensity else "-",
            _fmt_notes(session),
        )

    return table


def format_plan_summary(mesocycle: Mesocycle) -> str:
    """
    Format the plan-level decisions as a text block.

    Args:
        mesocycle: Planned mesocycle

    Returns:
        Formatted string
    """
    lines = [
        "Mesocycle",
        f"- Objective: {mesocycle.objective.value}  ({mesocycle.objective_reason})",
        f"- Split: {mesocycle.split_type.value}",
        f"- Training days/week: {mesocycle.training_days_per_week}",
        f"- Systemic stress: {mesocycle.systemic_stress}",
        f"- Volume tier: {mesocycle.volume_tier} sets/muscle/week",
    ]
    if mesocycle.overload_factor != 1.0:
        lines.append(f"- Overload factor: ×{mesocycle.overload_factor:g}")
    return "\n".join(lines)


def print_mesocycle(mesocycle: Mesocycle) -> None:
    """
    Print a planned mesocycle to console.

    Args:
        mesocycle: Mesocycle to display
    """
    console.print(format_plan_summary(mesocycle))
    for micro in mesocycle.microcycles:
        console.print()
        console.print(format_week_table(micro))


def format_next_cycle(config: NextCycleConfig, adjustment: OverloadAdjustment) -> str:
    """Format an end-of-cycle evaluation as a text block."""
    lines = ["Next cycle"]
    if adjustment.avg_rpe > 0:
        lines.append(f"- Average RPE: {adjustment.avg_rpe:.2f}")
    lines.extend(
        [
            f"- RPE verdict: {adjustment.action}  ({adjustment.reason})",
            f"- Overload factor: ×{config.overload_factor:g}",
            f"- Focus suggestion: {config.focus_suggestion}",
            f"- Sessions reported: {config.previous_adherence}",
        ]
    )
    return "\n".join(lines)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")
"""Planning commands: plan and explain."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_MESOCYCLE_WEEKS
from ...core.models import Mesocycle
from ...core.planner import explain_plan, plan_mesocycle
from ...io.inputs import load_plan_request
from ...io.serializers import ValidationError, mesocycle_to_json
from .. import views
from ..app import VerboseOption, app, configure_logging

InputArgument = Annotated[
    Path,
    typer.Argument(help="Plan request file (YAML or JSON)"),
]


def _build_mesocycle(input_path: Path, weeks: int) -> Mesocycle:
    """Load a request file and plan it; print the error and exit 1 on failure."""
    try:
        request = load_plan_request(input_path)
    except FileNotFoundError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(f"Invalid data: {e}")
        raise typer.Exit(1)

    try:
        return plan_mesocycle(
            request.profile,
            request.weekly_schedule,
            prior_feedback=request.prior_feedback,
            next_cycle_config=request.next_cycle_config,
            weeks=weeks,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command()
def plan(
    input_path: InputArgument,
    weeks: Annotated[
        int,
        typer.Option("--weeks", "-w", help=f"Mesocycle length in weeks (default: {DEFAULT_MESOCYCLE_WEEKS})"),
    ] = DEFAULT_MESOCYCLE_WEEKS,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Also write the plan as JSON to this file"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """
    Plan a mesocycle from a request file.

    Shows the chosen objective, split, and volume, then one table per week.
    """
    configure_logging(verbose)
    mesocycle = _build_mesocycle(input_path, weeks)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(mesocycle_to_json(mesocycle) + "\n", encoding="utf-8")

    if json_out:
        print(mesocycle_to_json(mesocycle))
        return

    views.print_mesocycle(mesocycle)
    if output is not None:
        views.console.print()
        views.print_success(f"Plan written to {output}")


@app.command()
def explain(
    input_path: InputArgument,
    weeks: Annotated[
        int,
        typer.Option("--weeks", "-w", help="Mesocycle length in weeks"),
    ] = DEFAULT_MESOCYCLE_WEEKS,
    verbose: VerboseOption = False,
) -> None:
    """Show step by step how the mesocycle was derived."""
    configure_logging(verbose)
    mesocycle = _build_mesocycle(input_path, weeks)
    views.console.print()
    views.console.print(explain_plan(mesocycle))
    views.console.print()

"""Evaluation command: turn a finished cycle's RPEs into next-cycle hints."""

import json
from typing import Annotated, Optional

import typer

from ...core.evaluation import calculate_overload_adjustment, evaluate_cycle
from ...io.serializers import next_cycle_config_to_dict
from .. import views
from ..app import VerboseOption, app, configure_logging


@app.command()
def evaluate(
    rpe: Annotated[
        Optional[list[float]],
        typer.Option("--rpe", "-r", help="RPE of a completed session (repeat per session)"),
    ] = None,
    difficulty: Annotated[
        Optional[int],
        typer.Option("--difficulty", "-d", min=1, max=5, help="Overall difficulty, 1 (very easy) to 5 (very hard)"),
    ] = None,
    pain: Annotated[
        Optional[list[str]],
        typer.Option("--pain", help="Body area where pain was felt (repeatable)"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output next_cycle_config as JSON"),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """
    Evaluate a finished mesocycle.

    The JSON output can be pasted as next_cycle_config into the next plan request.
    """
    configure_logging(verbose)
    session_rpes = list(rpe or [])
    config = evaluate_cycle(session_rpes, difficulty, pain or [])

    if json_out:
        print(json.dumps(next_cycle_config_to_dict(config), indent=2))
        return

    if not session_rpes:
        views.print_warning("No session RPEs given; volume will be maintained.")
    views.console.print(views.format_next_cycle(config, calculate_overload_adjustment(session_rpes)))

"""Shared Typer app object, shared option types, and logging setup."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

# Shared --verbose option type used across all commands
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log planning decisions to stderr"),
]

app = typer.Typer(
    name="mesocycle-planner",
    help="Deterministic mesocycle planner: split, calendar, intensity, and volume from a profile.",
    no_args_is_help=True,
)


def configure_logging(verbose: bool) -> None:
    """Route library logs through Rich at DEBUG when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )

"""
CLI entry point using Typer.

Provides commands for mesocycle planning:
- plan: Plan a mesocycle from a request file and display or export it
- explain: Show how the plan's decisions were derived
- evaluate: Turn a finished cycle's RPEs into next-cycle hints
"""

from .app import app
from .commands import evaluation, planning  # noqa: F401  (registers commands on app)

if __name__ == "__main__":
    app()

"""CLI interface for Proyectate using Typer.

Usage:
    proyectate user select u-leticia   # Choose who is acting
    proyectate project list            # Projects with progress
    proyectate project open p-1        # Open a project
    proyectate task tree               # Show the open project's tasks
    proyectate task toggle <id>        # Complete or reopen a task

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (user, project, task, ai)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from proyectate import __version__
from proyectate.interfaces.cli.commands import ai, project, task, user
from proyectate.logging_config import setup_logging

app = typer.Typer(
    name="proyectate",
    help="Hierarchical project and task tracker",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"proyectate version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Proyectate - projects broken down into nested tasks."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


app.add_typer(user.app, name="user")
app.add_typer(project.app, name="project")
app.add_typer(task.app, name="task")
app.add_typer(ai.app, name="ai")


@app.command("status")
def status(
    project_id: Optional[str] = typer.Option(None, "--project", "-p", envvar="PROYECTATE_PROJECT"),
) -> None:
    """Shortcut for 'task tree'."""
    task.tree(query="", project=project_id)


__all__ = ["app"]

"""Shared utilities for Proyectate CLI commands.

This module provides common utilities used across CLI commands:
- Building the controller from config, persisted state and session
- Formatted output helpers (error, success, info)
- Rendering of the task forest
"""

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.tree import Tree as RichTree

from proyectate.application import AppController
from proyectate.config import Session, get_config, get_session, save_session
from proyectate.domain.shared import DomainError, Err, Result
from proyectate.domain.task import Task, compute_progress, iter_tasks
from proyectate.domain.user import display_name
from proyectate.infrastructure.storage import StateRepository, UserRepository

console = Console()

# Reusable options for CLI commands
# Usage: def my_command(project: ProjectOption = None) -> None:
ProjectOption = Annotated[Optional[str], typer.Option(
    "--project", "-p",
    help="Project ID (or set PROYECTATE_PROJECT env var)",
    envvar="PROYECTATE_PROJECT",
)]

UserOption = Annotated[Optional[str], typer.Option(
    "--user", "-u",
    help="User ID (or set PROYECTATE_USER env var)",
    envvar="PROYECTATE_USER",
)]


def load_controller(
    user: str | None = None,
    project: str | None = None,
) -> AppController:
    """Build a controller and restore the saved session.

    Explicit --user/--project values take precedence over the session.
    """
    config = get_config()
    data_dir = config.resolve_data_dir()
    controller = AppController.load(StateRepository(data_dir), UserRepository(data_dir))

    session = get_session()
    user_id = user or session.current_user_id
    if user_id:
        result = controller.select_user(user_id)
        if isinstance(result, Err):
            print_warning(result.error.message)

    project_id = project or session.active_project_id
    if project_id:
        result = controller.open_project(project_id)
        if isinstance(result, Err):
            print_warning(result.error.message)

    return controller


def remember_session(controller: AppController) -> None:
    """Persist the current user and open project for the next invocation."""
    save_session(
        Session(
            current_user_id=controller.current_user.id if controller.current_user else None,
            active_project_id=controller.active_project_id,
        )
    )


def require_user(controller: AppController) -> None:
    """Exit unless a user is selected."""
    if controller.current_user is None:
        print_error("No user selected.")
        typer.echo("Select one with: proyectate user select <id>")
        raise typer.Exit(1)


def require_project(controller: AppController) -> None:
    """Exit unless a user is selected and a project is open."""
    require_user(controller)
    if controller.active_project is None:
        print_error("No project open.")
        typer.echo("Open one with: proyectate project open <id>")
        raise typer.Exit(1)


def exit_on_error(result: Result) -> None:
    """Print the error of a failed result and exit with status 1."""
    if isinstance(result, Err):
        error = result.error
        print_error(error.message if isinstance(error, DomainError) else str(error))
        raise typer.Exit(1)


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_header(title: str, width: int = 60) -> None:
    """Print a title between two separator lines."""
    typer.echo("=" * width)
    typer.echo(title)
    typer.echo("=" * width)


def task_label(task: Task, controller: AppController) -> str:
    """One-line label for a task: status box, title, progress, id, owner."""
    if task.is_leaf():
        box = "[green]☑[/green]" if task.is_completed() else "[dim]☐[/dim]"
        progress = ""
    else:
        box = "[yellow]▸[/yellow]" if not task.expanded else "[yellow]▾[/yellow]"
        progress = f" [cyan]{compute_progress(task)}%[/cyan]"
    owner = display_name(controller.users, task.created_by)
    extras = []
    if task.attachments:
        extras.append(f"{len(task.attachments)} att")
    comments = len(task.activity) - 1
    if comments > 0:
        extras.append(f"{comments} act")
    suffix = f" ({', '.join(extras)})" if extras else ""
    return f"{box} {task.title}{progress} [dim]#{task.id[:8]} @{owner}{suffix}[/dim]"


def render_forest(title: str, forest: list[Task], controller: AppController) -> RichTree:
    """Build a rich tree for the forest, honoring each task's expanded flag."""
    root = RichTree(title)

    def add(branch: RichTree, tasks: list[Task]) -> None:
        for task in tasks:
            node = branch.add(task_label(task, controller))
            if task.expanded:
                add(node, task.subtasks)

    add(root, forest)
    return root


def resolve_task_id(controller: AppController, prefix: str) -> str:
    """Expand a task id prefix (as shown by ``task tree``) to the full id."""
    project = controller.active_project
    if project is None:
        return prefix
    candidates = [t.id for t in iter_tasks(project.tasks) if t.id.startswith(prefix)]
    if len(candidates) == 1:
        return candidates[0]
    if len(candidates) > 1:
        print_error(f"Ambiguous task id '{prefix}' ({len(candidates)} matches)")
        raise typer.Exit(1)
    print_error(f"Task not found: {prefix}")
    raise typer.Exit(1)


__all__ = [
    "ProjectOption",
    "UserOption",
    "console",
    "exit_on_error",
    "load_controller",
    "print_error",
    "print_header",
    "print_info",
    "print_success",
    "print_warning",
    "remember_session",
    "render_forest",
    "require_project",
    "require_user",
    "resolve_task_id",
    "task_label",
]

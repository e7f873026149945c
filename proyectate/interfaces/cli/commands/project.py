"""Project management CLI commands.

Commands for listing, creating, opening, editing and deleting projects.
"""

from pathlib import Path

import typer

from proyectate.application import find_project, get_app_stats, get_project_summary
from proyectate.config import get_config
from proyectate.domain.shared import Err
from proyectate.infrastructure.media import BlobEncoder
from proyectate.interfaces.cli.common import (
    exit_on_error,
    load_controller,
    print_error,
    print_info,
    print_success,
    remember_session,
    require_user,
)

app = typer.Typer(help="Project management commands")


@app.command("list")
def list_projects() -> None:
    """List projects with their progress."""
    controller = load_controller()
    if not controller.state.projects:
        print_info("No projects yet. Create one with: proyectate project add <title>")
        return

    for project in controller.state.projects:
        summary = get_project_summary(project)
        marker = "*" if project.id == controller.active_project_id else " "
        typer.echo(
            f"{marker} {summary.id:<34} {summary.progress_percent:>3}%  "
            f"{summary.title} - {summary.subtitle} "
            f"({summary.completed_tasks}/{summary.total_tasks} tasks)"
        )


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Project title"),
    subtitle: str = typer.Option("", "--subtitle", "-s", help="Project subtitle"),
) -> None:
    """Create a new project owned by the selected user."""
    controller = load_controller()
    require_user(controller)
    result = controller.create_project(title, subtitle)
    exit_on_error(result)
    project = result.value.projects[-1]
    print_success(f"Created project: {project.id}")
    typer.echo(f"  Open it with: proyectate project open {project.id}")


@app.command("open")
def open_project(project_id: str = typer.Argument(..., help="Project ID")) -> None:
    """Open a project; task commands apply to it."""
    controller = load_controller()
    result = controller.open_project(project_id)
    if isinstance(result, Err):
        print_error(result.error.message)
        raise typer.Exit(1)
    remember_session(controller)
    print_success(f"Opened {result.value.title}")


@app.command("close")
def close() -> None:
    """Go back to the project list."""
    controller = load_controller()
    controller.close_project()
    remember_session(controller)


@app.command("rename")
def rename(
    project_id: str = typer.Argument(..., help="Project ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    subtitle: str | None = typer.Option(None, "--subtitle", "-s", help="New subtitle"),
) -> None:
    """Edit a project's title or subtitle."""
    controller = load_controller()
    require_user(controller)
    fields = {k: v for k, v in {"title": title, "subtitle": subtitle}.items() if v is not None}
    if not fields:
        print_error("Nothing to change (use --title or --subtitle)")
        raise typer.Exit(1)
    exit_on_error(controller.update_project(project_id, **fields))
    print_success("Project updated")


@app.command("image")
def image(
    project_id: str = typer.Argument(..., help="Project ID"),
    path: Path = typer.Argument(..., help="Image file", exists=True, dir_okay=False),
) -> None:
    """Set a project's cover image."""
    controller = load_controller()
    require_user(controller)
    if find_project(controller.state.projects, project_id) is None:
        print_error(f"Project not found: {project_id}")
        raise typer.Exit(1)
    encoder = BlobEncoder(max_bytes=get_config().max_attachment_bytes)
    exit_on_error(controller.set_project_image(project_id, path, encoder))
    print_success(f"Cover image updated from {path.name}")


@app.command("delete")
def delete(
    project_id: str = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project and every task in it."""
    controller = load_controller()
    require_user(controller)
    project = find_project(controller.state.projects, project_id)
    if project is None:
        print_error(f"Project not found: {project_id}")
        raise typer.Exit(1)
    if not yes:
        typer.confirm(f"Delete '{project.title}' and all its tasks?", abort=True)
    exit_on_error(controller.delete_project(project_id))
    remember_session(controller)
    print_success(f"Deleted {project.title}")


@app.command("stats")
def stats() -> None:
    """Show totals across every project."""
    controller = load_controller()
    totals = get_app_stats(controller.state.projects)
    typer.echo(f"Projects:        {totals.total_projects}")
    typer.echo(f"Tasks:           {totals.total_tasks}")
    typer.echo(f"Completed:       {totals.completed_tasks}")
    typer.echo(f"Completion rate: {totals.completion_rate}%")

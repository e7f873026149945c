"""Task management CLI commands.

Commands for the task forest of the open project: viewing the tree,
adding, completing, moving and annotating tasks. Task ids may be given
as the short prefix shown by ``task tree``.
"""

from datetime import datetime
from pathlib import Path

import typer

from proyectate.config import get_config
from proyectate.domain.project import compute_project_progress
from proyectate.domain.task import AttachmentType, DropPosition, compute_progress
from proyectate.domain.user import display_name
from proyectate.infrastructure.media import BlobEncoder
from proyectate.interfaces.cli.common import (
    ProjectOption,
    UserOption,
    console,
    exit_on_error,
    load_controller,
    print_header,
    print_info,
    print_success,
    render_forest,
    require_project,
    resolve_task_id,
)

app = typer.Typer(help="Task management commands")


@app.command("tree")
def tree(
    query: str = typer.Option("", "--search", "-s", help="Only show matches and their ancestors"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Show the task tree of the open project."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    controller.set_search(query)

    active = controller.active_project
    forest = controller.visible_tasks()
    header = f"[bold]{active.title}[/bold] - {active.subtitle} [cyan]{compute_project_progress(active)}%[/cyan]"
    if query and not forest:
        print_info(f"No tasks match '{query}'")
        return
    console.print(render_forest(header, forest, controller))


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    parent: str | None = typer.Option(None, "--parent", help="Parent task ID (root task if omitted)"),
    description: str | None = typer.Option(None, "--description", "-d", help="Task description"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Add a task at the root or under a parent task."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    parent_id = resolve_task_id(controller, parent) if parent else None
    exit_on_error(controller.add_task(title, parent_id=parent_id, description=description))
    print_success(f"Added: {title.strip()}")


@app.command("toggle")
def toggle(
    task_id: str = typer.Argument(..., help="Task ID"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Mark a task completed, or reopen it. Only its owner may do this."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    full_id = resolve_task_id(controller, task_id)
    exit_on_error(controller.toggle_status(full_id))
    task = controller.resolve_task(full_id)
    print_success(f"{task.title}: {task.status.value}")


@app.command("delete")
def delete(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Delete a task and all its subtasks. Only its owner may do this."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    full_id = resolve_task_id(controller, task_id)
    task = controller.resolve_task(full_id)
    if not yes:
        typer.confirm(f"Delete '{task.title}' and its subtasks?", abort=True)
    exit_on_error(controller.delete_task(full_id))
    print_success(f"Deleted: {task.title}")


@app.command("edit")
def edit(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(None, "--description", "-d", help="New description"),
    ai_context: str | None = typer.Option(None, "--ai-context", help="Hidden context for suggestions"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Edit a task's title, description or assistant context."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    full_id = resolve_task_id(controller, task_id)
    fields = {
        key: value
        for key, value in {"title": title, "description": description, "ai_context": ai_context}.items()
        if value is not None
    }
    if not fields:
        print_info("Nothing to change")
        return
    exit_on_error(controller.update_task(full_id, **fields))
    print_success("Task updated")


@app.command("move")
def move(
    dragged: str = typer.Argument(..., help="ID of the task to move"),
    target: str = typer.Argument(..., help="ID of the task to drop on"),
    position: DropPosition = typer.Option(DropPosition.AFTER, "--position", help="before, after or inside"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Move a task (with its subtasks) next to or inside another task."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    dragged_id = resolve_task_id(controller, dragged)
    target_id = resolve_task_id(controller, target)
    controller.start_drag(dragged_id)
    exit_on_error(controller.drop(target_id, position))
    print_success("Moved")


@app.command("expand")
def expand(
    task_id: str = typer.Argument(..., help="Task ID"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Collapse or expand a task in the tree view."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    exit_on_error(controller.toggle_expand(resolve_task_id(controller, task_id)))


@app.command("comment")
def comment(
    task_id: str = typer.Argument(..., help="Task ID"),
    text: str = typer.Argument(..., help="Comment text"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Add a comment to a task's activity."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    exit_on_error(controller.add_activity(resolve_task_id(controller, task_id), text))
    print_success("Comment added")


@app.command("attach")
def attach(
    task_id: str = typer.Argument(..., help="Task ID"),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to attach"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Attach a file (image, document, audio or video) to a task."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    encoder = BlobEncoder(max_bytes=get_config().max_attachment_bytes)
    exit_on_error(controller.attach_file(resolve_task_id(controller, task_id), path, encoder))
    print_success(f"Attached {path.name}")


@app.command("link")
def link(
    task_id: str = typer.Argument(..., help="Task ID"),
    url: str = typer.Argument(..., help="URL to attach"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Attach a link to a task."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    exit_on_error(
        controller.add_attachment(resolve_task_id(controller, task_id), AttachmentType.LINK, url, url)
    )
    print_success("Link attached")


@app.command("show")
def show(
    task_id: str = typer.Argument(..., help="Task ID"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Show a task's details, attachments and activity."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    task = controller.resolve_task(resolve_task_id(controller, task_id))

    print_header(task.title)
    state = task.status.value if task.is_leaf() else f"{compute_progress(task)}% (from subtasks)"
    typer.echo(f"Status:  {state}")
    typer.echo(f"Owner:   {display_name(controller.users, task.created_by)}")
    typer.echo(f"ID:      {task.id}")
    if task.description:
        typer.echo(f"\n{task.description}")

    if task.attachments:
        typer.echo("\n## Attachments")
        for attachment in task.attachments:
            target = attachment.url if attachment.type == AttachmentType.LINK else f"{len(attachment.url):,} chars"
            typer.echo(f"- [{attachment.type.value}] {attachment.name} ({target})")

    typer.echo("\n## Activity")
    for log in task.activity:
        when = datetime.fromtimestamp(log.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        author = display_name(controller.users, log.created_by)
        typer.echo(f"- {when} {author} [{log.type.value}] {log.content}")

    if task.suggested_steps:
        typer.echo("\n## Suggested steps")
        typer.echo(task.suggested_steps)

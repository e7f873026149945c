"""Assistant CLI commands.

Ask the configured advisor about the open project, or have it suggest
next steps for a task.
"""

import asyncio

import typer

from proyectate.config import get_config
from proyectate.infrastructure.ai import build_advisor
from proyectate.interfaces.cli.common import (
    ProjectOption,
    UserOption,
    exit_on_error,
    load_controller,
    print_header,
    print_success,
    require_project,
    require_user,
    resolve_task_id,
)

app = typer.Typer(help="AI assistant commands")


@app.command("ask")
def ask(
    question: str = typer.Argument(..., help="Question for the advisor"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Ask the strategic advisor a question about the open project."""
    controller = load_controller(user=user, project=project)
    require_user(controller)
    advisor = build_advisor(get_config())
    result = asyncio.run(controller.ask_advisor(question, advisor))
    exit_on_error(result)
    print_header("ADVISOR")
    typer.echo(result.value)


@app.command("suggest")
def suggest(
    task_id: str = typer.Argument(..., help="Task ID"),
    project: ProjectOption = None,
    user: UserOption = None,
) -> None:
    """Suggest next steps for a task and store them on it."""
    controller = load_controller(user=user, project=project)
    require_project(controller)
    full_id = resolve_task_id(controller, task_id)
    advisor = build_advisor(get_config())
    result = asyncio.run(controller.suggest_next_steps(full_id, advisor))
    exit_on_error(result)
    task = controller.resolve_task(full_id)
    print_header("SUGGESTED STEPS")
    typer.echo(task.suggested_steps)
    print_success("Saved on the task")

"""User selection CLI commands.

No user is selected at startup; one of the roster must be chosen
before any project-scoped command is accepted.
"""

from pathlib import Path

import typer

from proyectate.config import get_config
from proyectate.domain.shared import Err
from proyectate.infrastructure.media import BlobEncoder
from proyectate.interfaces.cli.common import (
    exit_on_error,
    load_controller,
    print_error,
    print_success,
    remember_session,
    require_user,
)

app = typer.Typer(help="User selection commands")


@app.command("list")
def list_users() -> None:
    """List the user roster."""
    controller = load_controller()
    for user in controller.users:
        marker = "*" if controller.current_user and controller.current_user.id == user.id else " "
        typer.echo(f"{marker} {user.id:<12} {user.name}")


@app.command("select")
def select(user_id: str = typer.Argument(..., help="User ID from 'user list'")) -> None:
    """Select the user acting in subsequent commands."""
    controller = load_controller()
    result = controller.select_user(user_id)
    if isinstance(result, Err):
        print_error(result.error.message)
        raise typer.Exit(1)
    remember_session(controller)
    print_success(f"Hello, {result.value.name}")


@app.command("logout")
def logout() -> None:
    """Clear the selected user and open project."""
    controller = load_controller()
    controller.logout()
    remember_session(controller)
    print_success("Logged out")


@app.command("rename")
def rename(name: str = typer.Argument(..., help="New display name")) -> None:
    """Change the selected user's display name."""
    controller = load_controller()
    require_user(controller)
    result = controller.update_current_user(name=name)
    exit_on_error(result)
    print_success(f"Renamed to {result.value.name}")


@app.command("avatar")
def avatar(path: Path = typer.Argument(..., help="Image file", exists=True, dir_okay=False)) -> None:
    """Set the selected user's avatar from an image file."""
    controller = load_controller()
    require_user(controller)
    encoder = BlobEncoder(max_bytes=get_config().max_attachment_bytes)
    exit_on_error(controller.update_avatar(path, encoder))
    print_success(f"Avatar updated from {path.name}")

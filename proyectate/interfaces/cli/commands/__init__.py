"""CLI command groups for Proyectate.

Command groups:
- user: Select the acting user
- project: Project list and management
- task: Task tree management (tree, add, toggle, move, etc.)
- ai: Strategic advisor and next-step suggestions

Each command group is a Typer app registered with the main app using
app.add_typer().
"""

from proyectate.interfaces.cli.commands import ai, project, task, user

__all__ = ["user", "project", "task", "ai"]

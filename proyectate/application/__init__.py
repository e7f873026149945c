"""Application service layer for Proyectate.

This package orchestrates domain operations.

Services:
    task_service - Project-scoped task mutations (the project store)
    project_service - Project CRUD, summaries and stats
    controller - AppController: session state plus persistence

Example usage:
    >>> from proyectate.application import add_task
    >>> from proyectate.domain.shared import Ok
    >>>
    >>> result = add_task(projects, "p-1", None, "Buy milk", "u-daniel")
    >>> if isinstance(result, Ok):
    ...     projects = result.value
"""

from proyectate.application.controller import AppController
from proyectate.application.project_service import (
    create_project,
    delete_project,
    find_project,
    get_app_stats,
    get_project_summary,
    update_project,
)
from proyectate.application.task_service import (
    add_activity,
    add_attachment,
    add_task,
    delete_task,
    move_task,
    toggle_expand,
    toggle_status,
    update_task,
)

__all__ = [
    # Controller
    "AppController",
    # Task service
    "add_task",
    "toggle_status",
    "delete_task",
    "update_task",
    "add_attachment",
    "add_activity",
    "toggle_expand",
    "move_task",
    # Project service
    "create_project",
    "update_project",
    "delete_project",
    "find_project",
    "get_project_summary",
    "get_app_stats",
]

"""Task application service (the project store).

Project-scoped task operations. Each function takes the current list of
projects plus the active project id, delegates to the tree primitives,
keeps the activity log, and returns the new list of projects.
All functions are pure - no I/O, no side effects.

Error policy:
    - Missing active project, blank titles, self/cyclic moves and
      toggling a grouping task are rejected with an INVALID_INPUT error.
    - Status changes and deletion are reserved to the task owner and
      rejected with an AUTHORIZATION_DENIED error otherwise.
    - A task id that no longer exists is a silent no-op: the projects
      are returned unchanged inside Ok, so stale references held by
      the UI never crash it.
"""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from proyectate.application.project_service import find_project, update_forest
from proyectate.domain.project import Project
from proyectate.domain.shared import DomainError, Err, Ok, Result
from proyectate.domain.task import (
    ActivityLog,
    ActivityType,
    Attachment,
    AttachmentType,
    DropPosition,
    Task,
    TaskStatus,
    TaskUpdate,
    append_root,
    delete_subtree,
    find_task,
    insert_child,
    is_invalid_move,
    locate_and_transform,
    relocate,
)

logger = logging.getLogger(__name__)

CREATION_MESSAGE = "Created"
COMPLETED_MESSAGE = "Completed the task"
REOPENED_MESSAGE = "Reopened the task"

EDITABLE_TASK_FIELDS = frozenset(TaskUpdate.model_fields)

StoreResult = Result[list[Project], DomainError]


def _require_project(
    projects: list[Project],
    active_project_id: str | None,
) -> Result[Project, DomainError]:
    project = find_project(projects, active_project_id)
    if project is None:
        return Err(DomainError.invalid_input("No active project selected"))
    return Ok(project)


def _transform(
    projects: list[Project],
    project_id: str,
    task_id: str,
    transform: Callable[[Task], Task],
) -> list[Project]:
    return update_forest(
        projects,
        project_id,
        lambda forest: locate_and_transform(forest, task_id, transform),
    )


def new_task(title: str, author_id: str, description: str | None = None) -> Task:
    """Build a fresh pending leaf task with its creation log entry."""
    return Task(
        title=title,
        description=description,
        status=TaskStatus.PENDING,
        expanded=True,
        created_by=author_id,
        activity=[
            ActivityLog(
                type=ActivityType.CREATION,
                content=CREATION_MESSAGE,
                created_by=author_id,
            )
        ],
    )


def add_task(
    projects: list[Project],
    active_project_id: str | None,
    parent_id: str | None,
    title: str,
    author_id: str,
    description: str | None = None,
) -> StoreResult:
    """Create a task at the root of the active project or under a parent.

    Args:
        projects: Current projects.
        active_project_id: Project receiving the task.
        parent_id: Parent task id, or None for a root task.
        title: Task title; trimmed, must not be blank.
        author_id: Owner of the new task.
        description: Optional description.

    Returns:
        Ok(projects) - unchanged if the parent no longer exists - or
        Err(DomainError) when there is no active project or the title
        is blank.
    """
    result = _require_project(projects, active_project_id)
    if isinstance(result, Err):
        return result
    project = result.value

    title = title.strip()
    if not title:
        return Err(DomainError.invalid_input("Task title cannot be empty"))

    task = new_task(title, author_id, description)
    if parent_id is None:
        updated = update_forest(projects, project.id, lambda f: append_root(f, task))
    else:
        updated = update_forest(projects, project.id, lambda f: insert_child(f, parent_id, task))

    if updated is projects:
        logger.warning(f"Parent task {parent_id} not found in project {project.id}")
    else:
        logger.debug(f"Added task {task.id} to project {project.id}")
    return Ok(updated)


def check_owner(
    projects: list[Project],
    active_project_id: str | None,
    task_id: str,
    author_id: str,
) -> Result[Task | None, DomainError]:
    """Check that ``author_id`` owns the task.

    Returns:
        Ok(task), Ok(None) when the task does not exist, or
        Err(DomainError) when the project is missing or the author is
        not the owner.
    """
    result = _require_project(projects, active_project_id)
    if isinstance(result, Err):
        return result

    task = find_task(result.value.tasks, task_id)
    if task is None:
        return Ok(None)
    if task.created_by != author_id:
        return Err(DomainError.denied(f"Only {task.created_by} can modify '{task.title}'"))
    return Ok(task)


def toggle_status(
    projects: list[Project],
    active_project_id: str | None,
    task_id: str,
    author_id: str,
) -> StoreResult:
    """Flip a leaf task between PENDING and COMPLETED.

    Appends a status_change entry to the task's activity. Only the owner
    may toggle, and only leaves have a meaningful status.
    """
    result = check_owner(projects, active_project_id, task_id, author_id)
    if isinstance(result, Err):
        return result
    task = result.value
    if task is None:
        return Ok(projects)

    if not task.is_leaf():
        return Err(
            DomainError.invalid_input(
                f"'{task.title}' has subtasks; its status follows their progress"
            )
        )

    completed = task.status != TaskStatus.COMPLETED
    new_status = TaskStatus.COMPLETED if completed else TaskStatus.PENDING
    log = ActivityLog(
        type=ActivityType.STATUS_CHANGE,
        content=COMPLETED_MESSAGE if completed else REOPENED_MESSAGE,
        created_by=author_id,
    )

    def flip(node: Task) -> Task:
        return node.model_copy(update={"status": new_status, "activity": [*node.activity, log]})

    logger.debug(f"Task {task_id} -> {new_status.value}")
    return Ok(_transform(projects, active_project_id, task_id, flip))


def delete_task(
    projects: list[Project],
    active_project_id: str | None,
    task_id: str,
    author_id: str,
) -> StoreResult:
    """Delete a task with its whole subtree. Only the owner may delete."""
    result = check_owner(projects, active_project_id, task_id, author_id)
    if isinstance(result, Err):
        return result
    if result.value is None:
        return Ok(projects)

    logger.debug(f"Deleting task {task_id}")
    return Ok(update_forest(projects, active_project_id, lambda f: delete_subtree(f, task_id)))


def update_task(
    projects: list[Project],
    active_project_id: str | None,
    task_id: str,
    **fields,
) -> StoreResult:
    """Edit task fields (title, description, tags, ai_context, suggested_steps).

    Structural fields (id, subtasks, status, activity, attachments,
    ownership) are not editable through here.
    """
    result = _require_project(projects, active_project_id)
    if isinstance(result, Err):
        return result

    unknown = set(fields) - EDITABLE_TASK_FIELDS
    if unknown:
        return Err(DomainError.invalid_input(f"Cannot edit task fields: {', '.join(sorted(unknown))}"))

    try:
        changes = TaskUpdate.model_validate(fields).model_dump(exclude_unset=True)
    except ValidationError as e:
        return Err(DomainError.invalid_input(f"Invalid task fields: {e}"))

    if "title" in changes:
        changes["title"] = changes["title"].strip()
        if not changes["title"]:
            return Err(DomainError.invalid_input("Task title cannot be empty"))

    return Ok(_transform(projects, active_project_id, task_id, lambda t: t.model_copy(update=changes)))


def add_attachment(
    projects: list[Project],
    active_project_id: str | None,
    task_id: str,
    attachment_type: AttachmentType,
    name: str,
    url: str,
    author_id: str,
) -> StoreResult:
    """Append an attachment to a task."""
    result = _require_project(projects, active_project_id)
    if isinstance(result, Err):
        return result

    attachment = Attachment(
        name=name,
        type=AttachmentType(attachment_type),
        url=url,
        created_by=author_id,
    )
    return Ok(
        _transform(
            projects,
            active_project_id,
            task_id,
            lambda t: t.model_copy(update={"attachments": [*t.attachments, attachment]}),
        )
    )


def add_activity(
    projects: list[Project],
    active_project_id: str | None,
    task_id: str,
    content: str,
    activity_type: ActivityType,
    author_id: str,
) -> StoreResult:
    """Append an activity entry (typically a comment) to a task."""
    result = _require_project(projects, active_project_id)
    if isinstance(result, Err):
        return result

    content = content.strip()
    if not content:
        return Err(DomainError.invalid_input("Activity content cannot be empty"))

    log = ActivityLog(type=ActivityType(activity_type), content=content, created_by=author_id)
    return Ok(
        _transform(
            projects,
            active_project_id,
            task_id,
            lambda t: t.model_copy(update={"activity": [*t.activity, log]}),
        )
    )


def toggle_expand(
    projects: list[Project],
    active_project_id: str | None,
    task_id: str,
) -> StoreResult:
    """Flip the expanded flag of a task."""
    result = _require_project(projects, active_project_id)
    if isinstance(result, Err):
        return result

    return Ok(
        _transform(
            projects,
            active_project_id,
            task_id,
            lambda t: t.model_copy(update={"expanded": not t.expanded}),
        )
    )


def move_task(
    projects: list[Project],
    active_project_id: str | None,
    dragged_id: str,
    target_id: str,
    position: DropPosition,
) -> StoreResult:
    """Relocate a task (and its subtree) relative to another task."""
    result = _require_project(projects, active_project_id)
    if isinstance(result, Err):
        return result

    if is_invalid_move(result.value.tasks, dragged_id, target_id):
        return Err(DomainError.invalid_input("A task cannot be moved onto itself or into its own subtasks"))

    position = DropPosition(position)
    return Ok(
        update_forest(
            projects,
            active_project_id,
            lambda f: relocate(f, dragged_id, target_id, position),
        )
    )

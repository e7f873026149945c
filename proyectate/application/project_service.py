"""Project application service.

Orchestrates project-level operations over the list of projects.
All functions are pure - no I/O, no side effects. Every mutation
returns a new list; projects that did not change keep their identity.
"""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from proyectate.domain.project import (
    AppStats,
    Project,
    ProjectSummary,
    ProjectUpdate,
    compute_project_progress,
)
from proyectate.domain.shared import DomainError, Err, Ok, Result
from proyectate.domain.task import Forest, count_tasks, new_id, round_half_up

logger = logging.getLogger(__name__)

EDITABLE_PROJECT_FIELDS = frozenset(ProjectUpdate.model_fields)


def find_project(projects: list[Project], project_id: str | None) -> Project | None:
    """Find a project by id."""
    if project_id is None:
        return None
    for project in projects:
        if project.id == project_id:
            return project
    return None


def replace_project(
    projects: list[Project],
    project_id: str,
    update: Callable[[Project], Project],
) -> list[Project]:
    """Replace one project by ``update(project)``.

    Returns ``projects`` itself when the project is missing or the update
    returned the same object.
    """
    for index, project in enumerate(projects):
        if project.id != project_id:
            continue
        updated = update(project)
        if updated is project:
            return projects
        return [*projects[:index], updated, *projects[index + 1 :]]
    return projects


def update_forest(
    projects: list[Project],
    project_id: str,
    update: Callable[[Forest], Forest],
) -> list[Project]:
    """Apply a forest operation to one project's tasks, copy-on-write."""

    def apply(project: Project) -> Project:
        tasks = update(project.tasks)
        if tasks is project.tasks:
            return project
        return project.model_copy(update={"tasks": tasks})

    return replace_project(projects, project_id, apply)


def create_project(
    projects: list[Project],
    title: str,
    subtitle: str,
    author_id: str,
    project_id: str | None = None,
) -> Result[list[Project], DomainError]:
    """Append a new, empty project.

    Args:
        projects: Current projects.
        title: Project title; must not be blank.
        subtitle: Free-form subtitle.
        author_id: User creating the project (its owner).
        project_id: Explicit id, generated when omitted.

    Returns:
        Ok(new projects list) or Err(DomainError) on invalid input.
    """
    if not title.strip():
        return Err(DomainError.invalid_input("Project title cannot be empty"))

    project_id = project_id or new_id()
    if find_project(projects, project_id) is not None:
        return Err(DomainError.invalid_input(f"Project id already in use: {project_id}"))

    project = Project(
        id=project_id,
        title=title.strip(),
        subtitle=subtitle.strip(),
        created_by=author_id,
    )
    logger.debug(f"Created project {project.id} ({project.title})")
    return Ok([*projects, project])


def update_project(
    projects: list[Project],
    project_id: str,
    **fields,
) -> Result[list[Project], DomainError]:
    """Edit project metadata (title, subtitle, image_url, theme_color).

    A missing project is a no-op.
    """
    unknown = set(fields) - EDITABLE_PROJECT_FIELDS
    if unknown:
        return Err(DomainError.invalid_input(f"Cannot edit project fields: {', '.join(sorted(unknown))}"))

    try:
        changes = ProjectUpdate.model_validate(fields).model_dump(exclude_unset=True)
    except ValidationError as e:
        return Err(DomainError.invalid_input(f"Invalid project fields: {e}"))

    if "title" in changes:
        changes["title"] = changes["title"].strip()
        if not changes["title"]:
            return Err(DomainError.invalid_input("Project title cannot be empty"))

    return Ok(replace_project(projects, project_id, lambda p: p.model_copy(update=changes)))


def delete_project(
    projects: list[Project],
    project_id: str,
    author_id: str,
) -> Result[list[Project], DomainError]:
    """Delete a project and its whole forest. Only the creator may do it."""
    project = find_project(projects, project_id)
    if project is None:
        return Ok(projects)

    if project.created_by != author_id:
        return Err(DomainError.denied(f"Only the project owner can delete '{project.title}'"))

    return Ok([p for p in projects if p.id != project_id])


def get_project_summary(project: Project) -> ProjectSummary:
    """Create a list-view summary of a project."""
    counts = count_tasks(project.tasks)
    return ProjectSummary(
        id=project.id,
        title=project.title,
        subtitle=project.subtitle,
        root_tasks=len(project.tasks),
        total_tasks=counts.total,
        completed_tasks=counts.completed,
        progress_percent=compute_project_progress(project),
    )


def get_app_stats(projects: list[Project]) -> AppStats:
    """Aggregate leaf task totals across every project."""
    total = 0
    completed = 0
    for project in projects:
        counts = count_tasks(project.tasks)
        total += counts.total
        completed += counts.completed

    rate = round_half_up(completed * 100, total) if total > 0 else 0
    return AppStats(
        total_projects=len(projects),
        total_tasks=total,
        completed_tasks=completed,
        completion_rate=rate,
    )

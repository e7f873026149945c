"""Project-level progress."""

from proyectate.domain.task import compute_forest_progress

from .models import Project


def compute_project_progress(project: Project) -> int:
    """Rounded mean progress of the project's root tasks (0 when empty)."""
    return compute_forest_progress(project.tasks)

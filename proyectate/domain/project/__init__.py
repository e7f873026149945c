"""Project domain package.

This package contains the project aggregate - models, the application
state holding every project, and project-level progress.
"""

from proyectate.domain.project.models import (
    AppState,
    AppStats,
    Project,
    ProjectSummary,
    ProjectUpdate,
    default_app_state,
)
from proyectate.domain.project.progress import compute_project_progress

__all__ = [
    "AppState",
    "AppStats",
    "Project",
    "ProjectSummary",
    "ProjectUpdate",
    "compute_project_progress",
    "default_app_state",
]

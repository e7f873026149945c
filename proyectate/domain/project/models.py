"""Project domain models.

This module contains the project aggregate and the application state
that owns every project. These are pure data structures with no I/O.
"""

from pydantic import BaseModel, ConfigDict, Field

from proyectate.domain.task import Task, now_ms


class Project(BaseModel):
    """A top-level container owning one task forest."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    subtitle: str = ""
    created_at: int = Field(default_factory=now_ms)
    created_by: str = Field(description="User id of the owner")
    tasks: list[Task] = Field(default_factory=list)
    image_url: str | None = None
    theme_color: str | None = None


class ProjectUpdate(BaseModel):
    """Editable project metadata; only the fields passed are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str = ""
    subtitle: str = ""
    image_url: str | None = None
    theme_color: str | None = None


class AppState(BaseModel):
    """Every project on the device, in display order.

    Project ids are unique across the state.
    """

    model_config = ConfigDict(frozen=True)

    projects: list[Project] = Field(default_factory=list)


class ProjectSummary(BaseModel):
    """Summary of a project for list display.

    A lightweight view suitable for the project list without walking the
    full forest again.
    """

    id: str
    title: str
    subtitle: str = ""
    root_tasks: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    progress_percent: int = 0


class AppStats(BaseModel):
    """Totals across every project."""

    total_projects: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    completion_rate: int = 0


def default_app_state() -> AppState:
    """Built-in state used when nothing has been persisted yet."""
    return AppState(
        projects=[
            Project(
                id="p-1",
                title="Taoasis",
                subtitle="Proyecto de Inversión",
                created_by="u-leticia",
            )
        ]
    )

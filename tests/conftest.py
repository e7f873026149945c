"""Shared fixtures for the Proyectate test suite."""

from pathlib import Path

import pytest
from PIL import Image

from proyectate.application import AppController
from proyectate.domain.project import AppState, Project
from proyectate.domain.task import Task, TaskStatus
from proyectate.infrastructure.storage import StateRepository, UserRepository

LETICIA = "u-leticia"
DANIEL = "u-daniel"


def make_task(
    task_id: str,
    *subtasks: Task,
    status: TaskStatus = TaskStatus.PENDING,
    owner: str = LETICIA,
    title: str | None = None,
    description: str | None = None,
) -> Task:
    """Build a task with a readable id; the title defaults to the id."""
    return Task(
        id=task_id,
        title=title or task_id,
        description=description,
        status=status,
        subtasks=list(subtasks),
        created_by=owner,
    )


def write_png(path: Path, width: int, height: int, color: str = "teal") -> Path:
    """Write a solid-colour PNG, e.g. a phone photo stand-in."""
    Image.new("RGB", (width, height), color).save(path, format="PNG")
    return path


@pytest.fixture
def forest() -> list[Task]:
    """Two roots: A(A1, A2(A2a)) and B."""
    return [
        make_task(
            "A",
            make_task("A1"),
            make_task("A2", make_task("A2a")),
        ),
        make_task("B"),
    ]


@pytest.fixture
def projects(forest) -> list[Project]:
    return [
        Project(id="p-1", title="Taoasis", subtitle="Investment", created_by=LETICIA, tasks=forest),
        Project(id="p-2", title="Garden", created_by=DANIEL),
    ]


@pytest.fixture
def data_dir(tmp_path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def controller(data_dir, projects) -> AppController:
    """Controller with Leticia selected and p-1 open, persisting to tmp_path."""
    controller = AppController(
        StateRepository(data_dir),
        UserRepository(data_dir),
        state=AppState(projects=projects),
    )
    controller.select_user(LETICIA)
    controller.open_project("p-1")
    return controller


@pytest.fixture
def proyectate_home(tmp_path, monkeypatch) -> Path:
    """Point config, session and data at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir(parents=True)
    monkeypatch.setenv("PROYECTATE_HOME", str(home))
    monkeypatch.delenv("PROYECTATE_PROJECT", raising=False)
    monkeypatch.delenv("PROYECTATE_USER", raising=False)
    return home

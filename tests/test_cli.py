"""End-to-end tests for the Typer CLI."""

import json
import logging

import pytest
from typer.testing import CliRunner

from proyectate import __version__
from proyectate.interfaces.cli import app
from proyectate.logging_config import LOGGER_NAME
from tests.conftest import write_png

runner = CliRunner()


def invoke(*args):
    return runner.invoke(app, list(args))


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to the runner's captured streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True


def stored_tasks(home, project_id="p-1"):
    state = json.loads((home / "app_state.json").read_text(encoding="utf-8"))
    project = next(p for p in state["projects"] if p["id"] == project_id)
    return project["tasks"]


@pytest.fixture
def logged_in(proyectate_home):
    """Leticia selected with the default project open."""
    assert invoke("user", "select", "u-leticia").exit_code == 0
    assert invoke("project", "open", "p-1").exit_code == 0
    return proyectate_home


class TestBasics:
    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_user_list(self, proyectate_home):
        result = invoke("user", "list")
        assert "Leticia" in result.output
        assert "Daniel" in result.output

    def test_select_unknown_user(self, proyectate_home):
        result = invoke("user", "select", "u-nobody")
        assert result.exit_code == 1
        assert "Unknown user" in result.output

    def test_task_commands_require_user(self, proyectate_home):
        result = invoke("task", "tree")
        assert result.exit_code == 1
        assert "No user selected" in result.output

    def test_project_list_shows_default(self, proyectate_home):
        result = invoke("project", "list")
        assert "Taoasis" in result.output
        assert "0%" in result.output


class TestTaskWorkflow:
    def test_add_and_show_tree(self, logged_in):
        assert invoke("task", "add", "Buy land").exit_code == 0
        result = invoke("task", "tree")
        assert result.exit_code == 0
        assert "Buy land" in result.output

    def test_add_subtask_and_toggle(self, logged_in):
        invoke("task", "add", "Buy land")
        parent_id = stored_tasks(logged_in)[0]["id"]
        assert invoke("task", "add", "Visit plots", "--parent", parent_id[:8]).exit_code == 0

        child = stored_tasks(logged_in)[0]["subtasks"][0]
        result = invoke("task", "toggle", child["id"][:8])
        assert result.exit_code == 0

        child = stored_tasks(logged_in)[0]["subtasks"][0]
        assert child["status"] == "COMPLETED"
        assert [log["type"] for log in child["activity"]] == ["creation", "status_change"]

    def test_toggle_by_other_user_is_denied(self, logged_in):
        invoke("task", "add", "Buy land")
        task_id = stored_tasks(logged_in)[0]["id"]
        invoke("user", "select", "u-daniel")

        result = invoke("task", "toggle", task_id)
        assert result.exit_code == 1
        assert "Only u-leticia" in result.output
        assert stored_tasks(logged_in)[0]["status"] == "PENDING"

    def test_blank_title_is_rejected(self, logged_in):
        result = invoke("task", "add", "   ")
        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_search_without_matches(self, logged_in):
        invoke("task", "add", "Buy land")
        result = invoke("task", "tree", "--search", "zzz")
        assert "No tasks match" in result.output

    def test_move_inside(self, logged_in):
        invoke("task", "add", "Buy land")
        invoke("task", "add", "Permits")
        first, second = (t["id"] for t in stored_tasks(logged_in))
        result = invoke("task", "move", second, first, "--position", "inside")
        assert result.exit_code == 0
        tasks = stored_tasks(logged_in)
        assert [t["id"] for t in tasks] == [first]
        assert tasks[0]["subtasks"][0]["id"] == second

    def test_comment_and_show(self, logged_in):
        invoke("task", "add", "Buy land")
        task_id = stored_tasks(logged_in)[0]["id"]
        assert invoke("task", "comment", task_id, "Called the notary").exit_code == 0
        result = invoke("task", "show", task_id)
        assert "Called the notary" in result.output
        assert "Leticia" in result.output

    def test_attach_file(self, logged_in, tmp_path):
        invoke("task", "add", "Buy land")
        task_id = stored_tasks(logged_in)[0]["id"]
        plan = tmp_path / "plan.pdf"
        plan.write_bytes(b"%PDF-1.4")
        assert invoke("task", "attach", task_id, str(plan)).exit_code == 0
        attachment = stored_tasks(logged_in)[0]["attachments"][0]
        assert attachment["type"] == "document"
        assert attachment["url"].startswith("data:application/pdf;base64,")

    def test_delete_with_confirmation_flag(self, logged_in):
        invoke("task", "add", "Buy land")
        task_id = stored_tasks(logged_in)[0]["id"]
        assert invoke("task", "delete", task_id, "--yes").exit_code == 0
        assert stored_tasks(logged_in) == []

    def test_user_option_overrides_session(self, logged_in):
        invoke("task", "add", "Buy land")
        task_id = stored_tasks(logged_in)[0]["id"]
        result = invoke("task", "toggle", task_id, "--user", "u-daniel")
        assert result.exit_code == 1
        assert "Only u-leticia" in result.output

    def test_unknown_task_prefix(self, logged_in):
        result = invoke("task", "toggle", "nope")
        assert result.exit_code == 1
        assert "Task not found" in result.output


class TestProjects:
    def test_create_and_stats(self, logged_in):
        result = invoke("project", "add", "Kitchen", "--subtitle", "Remodel")
        assert result.exit_code == 0
        assert "Kitchen" in invoke("project", "list").output
        assert "Projects:        2" in invoke("project", "stats").output

    def test_delete_by_non_owner_is_denied(self, logged_in):
        invoke("user", "select", "u-daniel")
        result = invoke("project", "delete", "p-1", "--yes")
        assert result.exit_code == 1
        assert "Only the project owner" in result.output

    def test_project_image(self, logged_in, tmp_path):
        cover = write_png(tmp_path / "land.png", 1600, 900)
        assert invoke("project", "image", "p-1", str(cover)).exit_code == 0
        state = json.loads((logged_in / "app_state.json").read_text(encoding="utf-8"))
        assert state["projects"][0]["image_url"].startswith("data:image/jpeg;base64,")

    def test_project_image_for_unknown_project(self, logged_in, tmp_path):
        cover = write_png(tmp_path / "land.png", 10, 10)
        result = invoke("project", "image", "nope", str(cover))
        assert result.exit_code == 1
        assert "Project not found" in result.output


class TestUsers:
    def test_avatar(self, logged_in, tmp_path):
        photo = write_png(tmp_path / "me.png", 900, 900)
        assert invoke("user", "avatar", str(photo)).exit_code == 0
        roster = json.loads((logged_in / "users.json").read_text(encoding="utf-8"))
        assert roster[0]["avatar_url"].startswith("data:image/jpeg;base64,")

    def test_avatar_rejects_documents(self, logged_in, tmp_path):
        notes = tmp_path / "notes.pdf"
        notes.write_bytes(b"%PDF-1.4")
        result = invoke("user", "avatar", str(notes))
        assert result.exit_code == 1
        assert "Not an image" in result.output

"""Tests for progress aggregation and search."""

import pytest

from proyectate.domain.project import Project, compute_project_progress
from proyectate.domain.task import (
    TaskStatus,
    compute_forest_progress,
    compute_progress,
    count_tasks,
    round_half_up,
    search,
)
from tests.conftest import make_task

DONE = TaskStatus.COMPLETED


class TestComputeProgress:
    def test_leaf_is_zero_or_hundred(self):
        assert compute_progress(make_task("x")) == 0
        assert compute_progress(make_task("x", status=DONE)) == 100

    def test_parent_is_mean_of_children(self):
        parent = make_task("p", make_task("a", status=DONE), make_task("b"))
        assert compute_progress(parent) == 50

    def test_grouping_status_is_ignored(self):
        parent = make_task("p", make_task("a"), status=DONE)
        assert compute_progress(parent) == 0

    def test_two_of_three_rounds_to_67(self):
        parent = make_task(
            "p", make_task("a", status=DONE), make_task("b", status=DONE), make_task("c")
        )
        assert compute_progress(parent) == 67

    def test_half_rounds_up(self):
        # children at 100 and 1 average to 50.5
        one_percent = make_task("x", *[make_task(f"x{i}") for i in range(99)], make_task("y", status=DONE))
        assert compute_progress(one_percent) == 1
        parent = make_task("p", make_task("a", status=DONE), one_percent)
        assert compute_progress(parent) == 51

    def test_mean_of_immediate_children_not_leaves(self):
        # A has one leaf done out of three, but its children average (100 + 0) / 2
        a = make_task(
            "A",
            make_task("A1", status=DONE),
            make_task("A2", make_task("A2a"), make_task("A2b")),
        )
        assert compute_progress(a) == 50


@pytest.mark.parametrize(
    ("total", "count", "expected"),
    [(200, 3, 67), (101, 2, 51), (100, 3, 33), (0, 4, 0), (300, 3, 100)],
)
def test_round_half_up(total, count, expected):
    assert round_half_up(total, count) == expected


class TestForestProgress:
    def test_empty_forest_is_zero(self):
        assert compute_forest_progress([]) == 0

    def test_project_progress_over_roots(self):
        project = Project(
            id="p",
            title="P",
            created_by="u-leticia",
            tasks=[make_task("a", status=DONE), make_task("b")],
        )
        assert compute_project_progress(project) == 50

    def test_count_tasks_counts_leaves_only(self, forest):
        counts = count_tasks(forest)
        assert counts.total == 3
        assert counts.completed == 0
        assert counts.pending == 3


class TestSearch:
    @pytest.fixture
    def shopping(self):
        return [
            make_task(
                "shop",
                make_task("milk", title="Buy milk"),
                make_task("bread", title="Bake bread"),
                title="Groceries",
            ),
            make_task("paint", title="Paint fence"),
        ]

    def test_keeps_ancestors_of_matches(self, shopping):
        result = search(shopping, "buy")
        assert [t.id for t in result] == ["shop"]
        assert [t.id for t in result[0].subtasks] == ["milk"]

    def test_kept_nodes_are_expanded(self, shopping):
        collapsed = [shopping[0].model_copy(update={"expanded": False}), shopping[1]]
        result = search(collapsed, "milk")
        assert result[0].expanded is True

    def test_matching_parent_only_keeps_matching_children(self, shopping):
        result = search(shopping, "groceries")
        assert [t.id for t in result] == ["shop"]
        assert result[0].subtasks == []

    def test_matches_description_case_insensitive(self):
        forest = [make_task("x", description="Call the NOTARY")]
        assert [t.id for t in search(forest, "notary")] == ["x"]

    def test_buy_scenario(self):
        forest = [
            make_task("A", title="Buy milk"),
            make_task("B", make_task("C", title="Buy bread"), title="Call dentist"),
        ]
        result = search(forest, "buy")
        assert [t.id for t in result] == ["A", "B"]
        assert [t.id for t in result[1].subtasks] == ["C"]
        assert all(t.expanded for t in result)

    def test_no_match_returns_empty(self, shopping):
        assert search(shopping, "zzz") == []

    def test_input_is_not_mutated(self, shopping):
        search(shopping, "buy")
        assert len(shopping[0].subtasks) == 2

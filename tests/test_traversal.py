"""Tests for the pure tree primitives."""

from proyectate.domain.task import (
    DropPosition,
    append_root,
    contains,
    delete_subtree,
    find_task,
    fold_forest,
    insert_child,
    is_invalid_move,
    iter_tasks,
    locate_and_transform,
    relocate,
)
from tests.conftest import make_task


def ids(forest):
    """Nested (id, children) view of a forest for easy comparison."""
    return [(task.id, ids(task.subtasks)) for task in forest]


def rename(task):
    return task.model_copy(update={"title": "renamed"})


class TestLookup:
    def test_iter_tasks_is_depth_first_parent_first(self, forest):
        assert [t.id for t in iter_tasks(forest)] == ["A", "A1", "A2", "A2a", "B"]

    def test_fold_forest_passes_depth(self, forest):
        depths = fold_forest(forest, {}, lambda acc, node, depth: {**acc, node.id: depth})
        assert depths == {"A": 0, "A1": 1, "A2": 1, "A2a": 2, "B": 0}

    def test_find_task_nested(self, forest):
        assert find_task(forest, "A2a").id == "A2a"
        assert find_task(forest, "missing") is None

    def test_contains(self, forest):
        assert contains(forest, "B")
        assert not contains(forest[0].subtasks, "B")


class TestLocateAndTransform:
    def test_transforms_nested_task(self, forest):
        result = locate_and_transform(forest, "A2a", rename)
        assert find_task(result, "A2a").title == "renamed"

    def test_missing_id_returns_same_forest(self, forest):
        assert locate_and_transform(forest, "missing", rename) is forest

    def test_input_is_not_mutated(self, forest):
        locate_and_transform(forest, "A1", rename)
        assert find_task(forest, "A1").title == "A1"

    def test_untouched_subtrees_keep_identity(self, forest):
        result = locate_and_transform(forest, "A1", rename)
        # B and A2 are off the path
        assert result[1] is forest[1]
        assert result[0].subtasks[1] is forest[0].subtasks[1]
        # A is on the path and gets rebuilt
        assert result[0] is not forest[0]

    def test_only_first_match_is_transformed(self):
        duplicated = [make_task("X"), make_task("X")]
        result = locate_and_transform(duplicated, "X", rename)
        assert [t.title for t in result] == ["renamed", "X"]


class TestInsert:
    def test_append_root(self, forest):
        result = append_root(forest, make_task("C"))
        assert [t.id for t in result] == ["A", "B", "C"]
        assert len(forest) == 2

    def test_insert_child_appends_last_and_expands_parent(self, forest):
        collapsed = locate_and_transform(
            forest, "A2", lambda t: t.model_copy(update={"expanded": False})
        )
        result = insert_child(collapsed, "A2", make_task("A2b"))
        parent = find_task(result, "A2")
        assert [t.id for t in parent.subtasks] == ["A2a", "A2b"]
        assert parent.expanded is True

    def test_insert_child_missing_parent_is_noop(self, forest):
        assert insert_child(forest, "missing", make_task("C")) is forest


class TestDeleteSubtree:
    def test_removes_task_and_descendants(self, forest):
        result = delete_subtree(forest, "A2")
        assert ids(result) == [("A", [("A1", [])]), ("B", [])]
        assert not contains(result, "A2a")

    def test_removes_root(self, forest):
        assert [t.id for t in delete_subtree(forest, "A")] == ["B"]

    def test_sibling_count_drops_by_one(self, forest):
        result = delete_subtree(forest, "A1")
        assert len(find_task(result, "A").subtasks) == len(find_task(forest, "A").subtasks) - 1

    def test_missing_id_returns_same_forest(self, forest):
        assert delete_subtree(forest, "missing") is forest


class TestRelocate:
    def test_move_after_sibling(self, forest):
        result = relocate(forest, "A1", "A2", DropPosition.AFTER)
        assert [t.id for t in find_task(result, "A").subtasks] == ["A2", "A1"]

    def test_move_before_root(self, forest):
        result = relocate(forest, "A2a", "A", DropPosition.BEFORE)
        assert [t.id for t in result] == ["A2a", "A", "B"]
        assert find_task(result, "A2").subtasks == []

    def test_move_inside_appends_and_expands(self, forest):
        collapsed = locate_and_transform(
            forest, "B", lambda t: t.model_copy(update={"expanded": False})
        )
        result = relocate(collapsed, "A", "B", DropPosition.INSIDE)
        assert [t.id for t in result] == ["B"]
        b = result[0]
        assert b.expanded is True
        assert ids(b.subtasks) == [("A", [("A1", []), ("A2", [("A2a", [])])])]

    def test_subtree_moves_intact(self, forest):
        result = relocate(forest, "A2", "B", DropPosition.INSIDE)
        moved = find_task(result, "A2")
        assert [t.id for t in moved.subtasks] == ["A2a"]
        assert len(list(iter_tasks(result))) == len(list(iter_tasks(forest)))

    def test_move_back_restores_original_order(self, forest):
        moved = relocate(forest, "A1", "A2", DropPosition.AFTER)
        restored = relocate(moved, "A1", "A2", DropPosition.BEFORE)
        assert ids(restored) == ids(forest)

    def test_self_move_is_rejected(self, forest):
        for position in DropPosition:
            assert relocate(forest, "A", "A", position) is forest

    def test_move_into_own_descendant_is_rejected(self, forest):
        assert relocate(forest, "A", "A2a", DropPosition.INSIDE) is forest
        assert relocate(forest, "A", "A1", DropPosition.AFTER) is forest

    def test_missing_target_rolls_back(self, forest):
        result = relocate(forest, "A1", "missing", DropPosition.AFTER)
        assert result is forest
        assert contains(result, "A1")

    def test_missing_dragged_is_noop(self, forest):
        assert relocate(forest, "missing", "B", DropPosition.INSIDE) is forest

    def test_is_invalid_move(self, forest):
        assert is_invalid_move(forest, "A", "A")
        assert is_invalid_move(forest, "A", "A2a")
        assert not is_invalid_move(forest, "A2a", "A")
        assert not is_invalid_move(forest, "A1", "B")

"""Pure tree primitives over a task forest.

All functions in this module are pure - no I/O, no side effects.
A forest goes in, a forest comes out, and the input is never mutated.

Copy-on-write contract: a changed node gets a new object and so does
every ancestor on its path, while untouched subtrees keep their
identity. When nothing changes, the *same* list object is returned,
which lets callers detect a no-op with ``result is forest``.

Precondition for every lookup: ids are unique within the forest.
"""

from collections.abc import Callable, Iterator
from typing import TypeVar

from .models import DropPosition, Task

T = TypeVar("T")

Forest = list[Task]


# =============================================================================
# Fundamental Operations
# =============================================================================


def fold_forest(
    forest: Forest,
    initial: T,
    f: Callable[[T, Task, int], T],
) -> T:
    """Fold over every node depth-first, parent before children.

    Args:
        forest: The root tasks to fold over
        initial: Starting accumulator value
        f: Function (accumulator, node, depth) -> new_accumulator

    Returns:
        Final accumulated value after visiting all nodes
    """

    def fold_node(acc: T, node: Task, depth: int) -> T:
        acc = f(acc, node, depth)
        for child in node.subtasks:
            acc = fold_node(acc, child, depth + 1)
        return acc

    result = initial
    for root in forest:
        result = fold_node(result, root, 0)
    return result


def iter_tasks(forest: Forest) -> Iterator[Task]:
    """Yield every task depth-first, parent before children."""
    for task in forest:
        yield task
        yield from iter_tasks(task.subtasks)


def find_first(forest: Forest, predicate: Callable[[Task], bool]) -> Task | None:
    """Find the first task matching a predicate (depth-first)."""
    return next((task for task in iter_tasks(forest) if predicate(task)), None)


def find_task(forest: Forest, task_id: str) -> Task | None:
    """Find a task anywhere in the forest by id."""
    return find_first(forest, lambda task: task.id == task_id)


def contains(forest: Forest, task_id: str) -> bool:
    return find_task(forest, task_id) is not None


# =============================================================================
# Mutations (copy-on-write)
# =============================================================================


def locate_and_transform(
    forest: Forest,
    target_id: str,
    transform: Callable[[Task], Task],
) -> Forest:
    """Replace the task with ``target_id`` by ``transform(task)``.

    This is the building block for every field-level edit. Only the
    first match is transformed.

    Args:
        forest: The forest to update
        target_id: Id of the task to replace
        transform: Function (task) -> new_task

    Returns:
        New forest with ancestors rebuilt, or ``forest`` itself when the
        id is not present.
    """
    for index, node in enumerate(forest):
        if node.id == target_id:
            replaced = transform(node)
        elif node.subtasks:
            subtasks = locate_and_transform(node.subtasks, target_id, transform)
            if subtasks is node.subtasks:
                continue
            replaced = node.model_copy(update={"subtasks": subtasks})
        else:
            continue
        return [*forest[:index], replaced, *forest[index + 1 :]]
    return forest


def append_root(forest: Forest, new_node: Task) -> Forest:
    """Append a task at the root level of the forest."""
    return [*forest, new_node]


def insert_child(forest: Forest, parent_id: str, new_node: Task) -> Forest:
    """Append ``new_node`` as the last subtask of ``parent_id``.

    The parent is forced expanded so the new child is visible. A missing
    parent leaves the forest unchanged.
    """

    def add(parent: Task) -> Task:
        return parent.model_copy(
            update={"subtasks": [*parent.subtasks, new_node], "expanded": True}
        )

    return locate_and_transform(forest, parent_id, add)


def delete_subtree(forest: Forest, target_id: str) -> Forest:
    """Remove the task with ``target_id`` together with its whole subtree."""
    changed = False
    result: Forest = []
    for node in forest:
        if node.id == target_id:
            changed = True
            continue
        if node.subtasks:
            subtasks = delete_subtree(node.subtasks, target_id)
            if subtasks is not node.subtasks:
                node = node.model_copy(update={"subtasks": subtasks})
                changed = True
        result.append(node)
    return result if changed else forest


def _insert_sibling(
    forest: Forest,
    target_id: str,
    node: Task,
    position: DropPosition,
) -> Forest:
    """Insert ``node`` next to ``target_id`` at the target's level.

    Each level is scanned before descending into it, so the nearest
    occurrence of the target wins.
    """
    for index, candidate in enumerate(forest):
        if candidate.id == target_id:
            offset = index if position == DropPosition.BEFORE else index + 1
            return [*forest[:offset], node, *forest[offset:]]

    for index, candidate in enumerate(forest):
        if not candidate.subtasks:
            continue
        subtasks = _insert_sibling(candidate.subtasks, target_id, node, position)
        if subtasks is not candidate.subtasks:
            replaced = candidate.model_copy(update={"subtasks": subtasks})
            return [*forest[:index], replaced, *forest[index + 1 :]]
    return forest


def is_invalid_move(forest: Forest, dragged_id: str, target_id: str) -> bool:
    """Check whether moving ``dragged_id`` onto ``target_id`` is forbidden.

    Dropping a task onto itself, or anywhere inside its own subtree,
    would detach it from the forest or create a cycle.
    """
    if dragged_id == target_id:
        return True
    dragged = find_task(forest, dragged_id)
    return dragged is not None and contains(dragged.subtasks, target_id)


def relocate(
    forest: Forest,
    dragged_id: str,
    target_id: str,
    position: DropPosition,
) -> Forest:
    """Move a task (with its subtree) relative to another task.

    ``before``/``after`` insert the dragged task as a sibling of the
    target; ``inside`` appends it as the target's last child and expands
    the target.

    The move is all-or-nothing: self-moves, moves into the dragged
    task's own subtree, a missing dragged task and a missing target all
    return ``forest`` unchanged.
    """
    if is_invalid_move(forest, dragged_id, target_id):
        return forest

    dragged = find_task(forest, dragged_id)
    if dragged is None:
        return forest

    remaining = delete_subtree(forest, dragged_id)
    if position == DropPosition.INSIDE:
        moved = insert_child(remaining, target_id, dragged)
    else:
        moved = _insert_sibling(remaining, target_id, dragged, position)

    if moved is remaining:
        # Target vanished: roll back the removal
        return forest
    return moved

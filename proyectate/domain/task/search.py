"""Recursive text search producing a pruned forest."""

from .models import Task
from .traversal import Forest


def matches(task: Task, query: str) -> bool:
    """Case-insensitive substring match against title and description."""
    needle = query.lower()
    if needle in task.title.lower():
        return True
    return task.description is not None and needle in task.description.lower()


def search(forest: Forest, query: str) -> Forest:
    """Filter the forest down to matches and their ancestors.

    A task is kept when it matches or when any descendant matches. Kept
    tasks are copies whose subtasks are replaced by the filtered
    descendants, and every kept task is forced expanded so the matches
    are visible.

    Callers that want "empty query shows everything" must check for it
    themselves; an empty query matches every task here.
    """
    result: Forest = []
    for task in forest:
        filtered = search(task.subtasks, query)
        if filtered or matches(task, query):
            result.append(task.model_copy(update={"subtasks": filtered, "expanded": True}))
    return result

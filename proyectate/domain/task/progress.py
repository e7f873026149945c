"""Progress aggregation over the task forest.

Pure functions - progress is always derived on demand and never stored
on a task.
"""

from .models import Task, TaskCounts
from .traversal import Forest, fold_forest

COMPLETE = 100


def round_half_up(total: int, count: int) -> int:
    """Round ``total / count`` to the nearest integer, halves rounding up.

    Integer arithmetic keeps results like 50.5 exact.
    """
    return (2 * total + count) // (2 * count)


def compute_progress(task: Task) -> int:
    """Compute a task's completion percentage.

    A leaf is either 0 or 100 depending on its status. A grouping task
    is the rounded mean of its immediate children's progress.

    Returns:
        Integer percentage in [0, 100]
    """
    if task.is_leaf():
        return COMPLETE if task.is_completed() else 0
    total = sum(compute_progress(child) for child in task.subtasks)
    return round_half_up(total, len(task.subtasks))


def compute_forest_progress(forest: Forest) -> int:
    """Rounded mean progress of the root tasks, 0 for an empty forest."""
    if not forest:
        return 0
    total = sum(compute_progress(task) for task in forest)
    return round_half_up(total, len(forest))


def count_tasks(forest: Forest) -> TaskCounts:
    """Count leaf tasks, and how many of them are completed.

    Only leaves are counted: a grouping task's status is not meaningful.
    """

    def count(acc: TaskCounts, node: Task, depth: int) -> TaskCounts:
        if not node.is_leaf():
            return acc
        return TaskCounts(
            total=acc.total + 1,
            completed=acc.completed + (1 if node.is_completed() else 0),
        )

    return fold_forest(forest, TaskCounts(), count)

"""Task domain - the recursive task forest.

All exports are pure (no I/O, no side effects).

Key Types:
    Task - Node of the forest
    TaskStatus - PENDING / COMPLETED
    Attachment, AttachmentType - Files and links on a task
    ActivityLog, ActivityType - Append-only activity feed
    DropPosition - before / after / inside
    TaskCounts - Leaf totals
    TaskUpdate - Editable task fields

Tree Primitives:
    locate_and_transform - Replace one task, copy-on-write
    insert_child / append_root - Add a task
    delete_subtree - Remove a task and its descendants
    relocate - Drag-and-drop move
    find_task - Lookup by id

Derived Reads:
    compute_progress - Completion percentage of a task
    compute_forest_progress - Mean progress of root tasks
    count_tasks - Leaf totals
    search - Pruned forest of matches
"""

from .models import (
    ActivityLog,
    ActivityType,
    Attachment,
    AttachmentType,
    DropPosition,
    Task,
    TaskCounts,
    TaskStatus,
    TaskUpdate,
    new_id,
    now_ms,
)
from .progress import (
    compute_forest_progress,
    compute_progress,
    count_tasks,
    round_half_up,
)
from .search import matches, search
from .traversal import (
    Forest,
    append_root,
    contains,
    delete_subtree,
    find_first,
    find_task,
    fold_forest,
    insert_child,
    is_invalid_move,
    iter_tasks,
    locate_and_transform,
    relocate,
)

__all__ = [
    # Models
    "Task",
    "TaskStatus",
    "Attachment",
    "AttachmentType",
    "ActivityLog",
    "ActivityType",
    "DropPosition",
    "TaskCounts",
    "TaskUpdate",
    "new_id",
    "now_ms",
    # Traversal - fundamental
    "Forest",
    "fold_forest",
    "iter_tasks",
    "find_first",
    "find_task",
    "contains",
    # Traversal - mutations
    "locate_and_transform",
    "append_root",
    "insert_child",
    "delete_subtree",
    "is_invalid_move",
    "relocate",
    # Progress
    "compute_progress",
    "compute_forest_progress",
    "count_tasks",
    "round_half_up",
    # Search
    "matches",
    "search",
]

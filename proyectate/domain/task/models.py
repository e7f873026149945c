"""Task domain models.

Pure domain models for the recursive task forest. Uses Pydantic for
serialization compatibility with the storage layer.

Task ids must be unique within a project. Every tree primitive relies
on that and looks nodes up with "first match wins", so ids are always
generated with new_id() (random 128-bit values).
"""

import time
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    """Generate a collision-resistant identifier."""
    return uuid4().hex


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return int(time.time() * 1000)


class TaskStatus(str, Enum):
    """Completion status of a leaf task."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class AttachmentType(str, Enum):
    """Kind of content an attachment references."""

    IMAGE = "image"
    DOCUMENT = "document"
    AUDIO = "audio"
    VIDEO = "video"
    LINK = "link"


class ActivityType(str, Enum):
    """Kind of entry in a task's activity log."""

    COMMENT = "comment"
    STATUS_CHANGE = "status_change"
    CREATION = "creation"
    ATTACHMENT = "attachment"


class DropPosition(str, Enum):
    """Where a relocated task lands relative to the drop target."""

    BEFORE = "before"
    AFTER = "after"
    INSIDE = "inside"


class Attachment(BaseModel):
    """A file, recording or link attached to a task. Never edited."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    type: AttachmentType
    url: str = Field(description="Opaque reference, usually a data URI")
    created_at: int = Field(default_factory=now_ms)
    created_by: str


class ActivityLog(BaseModel):
    """An append-only entry in a task's activity feed."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    content: str
    type: ActivityType
    timestamp: int = Field(default_factory=now_ms)
    created_by: str


class Task(BaseModel):
    """A node in the task forest.

    Leaf tasks carry an authoritative status. A task with subtasks is a
    grouping whose completion is derived from its children (see
    compute_progress) and its own status field is ignored.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    subtasks: list["Task"] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    activity: list[ActivityLog] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    expanded: bool = True
    created_by: str
    ai_context: str | None = Field(
        default=None,
        description="Hidden context handed to the suggestion assistant",
    )
    suggested_steps: str | None = None

    def is_leaf(self) -> bool:
        """Check if this task is a leaf (has no subtasks)."""
        return len(self.subtasks) == 0

    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskUpdate(BaseModel):
    """Fields a task edit may change, typed like their Task counterparts.

    Only the fields actually passed are applied (exclude_unset).
    """

    model_config = ConfigDict(extra="forbid")

    title: str = ""
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    ai_context: str | None = None
    suggested_steps: str | None = None


class TaskCounts(BaseModel):
    """Leaf task totals for a forest."""

    total: int = 0
    completed: int = 0

    @property
    def pending(self) -> int:
        return self.total - self.completed

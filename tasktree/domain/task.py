"""Task domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Priority(StrEnum):
    """Task priority, declared in display order."""

    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort rank: Urgent(0) < High(1) < Medium(2) < Low(3)."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[Priority, int] = {priority: index for index, priority in enumerate(Priority)}


class Task(BaseModel):
    """Task data transfer object mirrored from the repository."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique task ID assigned by the repository")
    title: str = Field(..., description="Task title")
    description: str | None = Field(default=None, description="Detailed task description")
    category_id: int | None = Field(default=None, description="Category ID (None = uncategorized)")
    priority: Priority = Field(..., description="Urgent, High, Medium or Low")
    parent_id: int | None = Field(default=None, description="Parent task ID (None = top-level)")
    is_done: bool = Field(default=False, description="Completion flag")
    position: int = Field(default=0, description="Order among siblings, repository-assigned")
    due_date: int | None = Field(default=None, description="Due date (epoch seconds)")
    created_at: int = Field(..., description="Creation timestamp (epoch seconds)")
    updated_at: int = Field(..., description="Last update timestamp (epoch seconds)")
    completed_at: int | None = Field(default=None, description="Set when is_done transitions to true")


class TaskTree(Task):
    """Task node with its ordered children."""

    subtasks: list["TaskTree"] = Field(default_factory=list, description="Children whose parent_id is this id")

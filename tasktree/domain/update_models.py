"""Partial update models for repository operations.

Only fields explicitly provided by the caller are part of a patch. Presence is
read from pydantic's ``model_fields_set``, so ``parent_id=None`` (move to top
level) is distinguishable from "parent_id not given".
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from tasktree.core.config import Constants
from tasktree.domain.task import Priority, Task


class UpdateTaskInput(BaseModel):
    """Patch for a task. Every field is optional."""

    title: str | None = None
    description: str | None = None
    category_id: int | None = None
    priority: Priority | None = None
    parent_id: int | None = None
    is_done: bool | None = None
    position: int | None = Field(default=None, ge=0)
    due_date: int | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        """Validate title, when given, is non-empty and within the length limit."""
        if v is None:
            return v
        title = v.strip()
        if not title:
            msg = "Task title cannot be empty"
            raise ValueError(msg)
        if len(title) > Constants.TITLE_MAX_LENGTH:
            msg = f"Task title cannot exceed {Constants.TITLE_MAX_LENGTH} characters"
            raise ValueError(msg)
        return title

    @property
    def touches_hierarchy(self) -> bool:
        """True if parent_id was explicitly provided, even as None."""
        return "parent_id" in self.model_fields_set

    def changes(self) -> dict[str, Any]:
        """Return only the explicitly provided fields."""
        return self.model_dump(exclude_unset=True)

    @classmethod
    def from_task(cls, task: Task) -> "UpdateTaskInput":
        """Build a patch that reapplies every mutable field of ``task``."""
        return cls(
            title=task.title,
            description=task.description,
            category_id=task.category_id,
            priority=task.priority,
            parent_id=task.parent_id,
            is_done=task.is_done,
            position=task.position,
            due_date=task.due_date,
        )


class UpdateCategoryInput(BaseModel):
    """Patch for a category."""

    name: str | None = None
    color: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the explicitly provided fields."""
        return self.model_dump(exclude_unset=True)

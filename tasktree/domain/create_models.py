"""Pydantic models for creating records through a repository."""

import re

from pydantic import BaseModel, Field, field_validator

from tasktree.core.config import Constants
from tasktree.domain.task import Priority


class CreateTaskInput(BaseModel):
    """Pydantic model for creating a task record."""

    title: str = Field(..., description="Task title")
    description: str | None = Field(default=None, description="Detailed task description")
    category_id: int | None = Field(default=None, description="Category ID")
    priority: Priority = Field(..., description="Urgent, High, Medium or Low")
    parent_id: int | None = Field(default=None, description="Parent task ID (None = top-level)")
    due_date: int | None = Field(default=None, description="Due date (epoch seconds)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title is non-empty and within the length limit."""
        title = v.strip()
        if not title:
            msg = "Task title cannot be empty"
            raise ValueError(msg)
        if len(title) > Constants.TITLE_MAX_LENGTH:
            msg = f"Task title cannot exceed {Constants.TITLE_MAX_LENGTH} characters"
            raise ValueError(msg)
        return title


class CreateCategoryInput(BaseModel):
    """Pydantic model for creating a category record."""

    name: str = Field(..., description="Category name")
    color: str = Field(..., description="Hex color string")

    @field_validator("color")
    @classmethod
    def validate_color_hex(cls, v: str) -> str:
        """Validate color is a #rgb or #rrggbb hex string."""
        if not re.match(r"^#(?:[0-9a-fA-F]{3}){1,2}$", v):
            msg = "Color must be a hex string (e.g., #3b82f6)"
            raise ValueError(msg)
        return v

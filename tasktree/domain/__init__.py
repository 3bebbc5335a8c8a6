"""Domain models and DTOs."""

from tasktree.domain.cache_state import CategoryCacheState, TaskCacheState
from tasktree.domain.category import Category
from tasktree.domain.create_models import CreateCategoryInput, CreateTaskInput
from tasktree.domain.history import (
    CreateTaskAction,
    DeleteTaskAction,
    HistoryState,
    ToggleTaskAction,
    UndoableAction,
    UpdateTaskAction,
)
from tasktree.domain.task import Priority, Task, TaskTree
from tasktree.domain.update_models import UpdateCategoryInput, UpdateTaskInput


__all__ = [
    "Category",
    "CategoryCacheState",
    "CreateCategoryInput",
    "CreateTaskAction",
    "CreateTaskInput",
    "DeleteTaskAction",
    "HistoryState",
    "Priority",
    "Task",
    "TaskCacheState",
    "TaskTree",
    "ToggleTaskAction",
    "UndoableAction",
    "UpdateCategoryInput",
    "UpdateTaskAction",
    "UpdateTaskInput",
]

"""Immutable snapshots published by the caches.

A cache never mutates a snapshot; each transition builds a new one with
``model_copy(update=...)`` and swaps it in with a single assignment.
"""

from pydantic import BaseModel, ConfigDict

from tasktree.domain.category import Category
from tasktree.domain.task import Task, TaskTree


class TaskCacheState(BaseModel):
    """Flat task list, derived forest and load status."""

    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...] = ()
    task_tree: tuple[TaskTree, ...] = ()
    loading: bool = False
    error: str | None = None

    def find_task(self, task_id: int) -> Task | None:
        """Return the cached task with ``task_id``, if any."""
        return next((task for task in self.tasks if task.id == task_id), None)

    def children_of(self, task_id: int) -> list[Task]:
        """Return the cached tasks whose parent is ``task_id``."""
        return [task for task in self.tasks if task.parent_id == task_id]


class CategoryCacheState(BaseModel):
    """Category list and load status."""

    model_config = ConfigDict(frozen=True)

    categories: tuple[Category, ...] = ()
    loading: bool = False
    error: str | None = None

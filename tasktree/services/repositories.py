"""Repository protocols for the external persistence boundary.

The caches depend on these Protocols instead of a concrete store. The
implementation owns ids, positions, timestamps, cascading deletes and tree
materialization; it raises ``RepositoryError`` (or ``RecordNotFoundError``)
when a call is rejected.
"""

from typing import Protocol

from tasktree.domain.category import Category
from tasktree.domain.create_models import CreateCategoryInput, CreateTaskInput
from tasktree.domain.task import Task, TaskTree
from tasktree.domain.update_models import UpdateCategoryInput, UpdateTaskInput


class TaskRepository(Protocol):
    """Task store contract."""

    async def create_task(self, data: CreateTaskInput) -> Task:
        """Create a task; the repository assigns id, position and timestamps."""
        ...

    async def get_all_tasks(self) -> list[Task]:
        """Return every task as a flat list."""
        ...

    async def get_task_tree(self) -> list[TaskTree]:
        """Return the forest of top-level tasks with nested subtasks."""
        ...

    async def update_task(self, task_id: int, data: UpdateTaskInput) -> Task:
        """Apply the explicitly set fields of ``data`` and return the stored task."""
        ...

    async def delete_task(self, task_id: int) -> None:
        """Delete a task and its descendants."""
        ...

    async def reorder_task(self, task_id: int, new_position: int) -> None:
        """Move a task to ``new_position`` among its siblings."""
        ...


class CategoryRepository(Protocol):
    """Category store contract."""

    async def create_category(self, data: CreateCategoryInput) -> Category: ...

    async def get_all_categories(self) -> list[Category]: ...

    async def update_category(self, category_id: int, data: UpdateCategoryInput) -> Category: ...

    async def delete_category(self, category_id: int) -> None: ...

"""In-process task cache reconciled against a TaskRepository.

Every mutation goes to the repository first and is applied locally only after
the call succeeds. Structural changes (create, delete, toggle, reparenting
updates) are reconciled by refetching the whole tree.

Concurrency:
    Operations are not serialized. Two mutations in flight at once may finish
    in arrival order rather than issue order, and a ``before`` snapshot taken
    by one may already be stale when the other lands. Callers that can fire
    the same mutation twice (double clicks, key repeat) must block the trigger
    until the first call returns.
"""

import asyncio
import logging

from tasktree.core.errors import classify_error, error_message
from tasktree.core.logging import span
from tasktree.core.observable import StateHolder
from tasktree.domain.cache_state import TaskCacheState
from tasktree.domain.create_models import CreateTaskInput
from tasktree.domain.history import CreateTaskAction, DeleteTaskAction, ToggleTaskAction, UpdateTaskAction
from tasktree.domain.task import Priority, Task, TaskTree
from tasktree.domain.update_models import UpdateTaskInput
from tasktree.services import task_sorting
from tasktree.services.notification_service import Notifier
from tasktree.services.repositories import TaskRepository
from tasktree.services.undo_service import UndoHistory


logger = logging.getLogger(__name__)


class TaskCache(StateHolder[TaskCacheState]):
    """Authoritative local copy of ``{tasks, task_tree, loading, error}``."""

    def __init__(self, repository: TaskRepository, history: UndoHistory, notifier: Notifier) -> None:
        """Initialize an empty cache.

        Args:
            repository: External task store
            history: Undo history receiving one action per successful mutation
            notifier: Receives exactly one message per mutation outcome
        """
        super().__init__(TaskCacheState())
        self._repository = repository
        self._history = history
        self._notifier = notifier

    # Derived views

    @property
    def sorted_tree(self) -> list[TaskTree]:
        """Current forest with siblings sorted at every level."""
        return task_sorting.sort_task_tree(self.state.task_tree)

    @property
    def tasks_by_category(self) -> dict[int | None, list[Task]]:
        """Current top-level tasks grouped by category."""
        return task_sorting.group_by_category(self.state.tasks)

    @property
    def tasks_by_priority(self) -> dict[Priority, list[Task]]:
        """Current top-level tasks grouped by priority."""
        return task_sorting.group_by_priority(self.state.tasks)

    # Internal helpers

    def _update(self, **changes: object) -> None:
        self._set_state(self.state.model_copy(update=changes))

    def _replace_task(self, task: Task) -> None:
        self._update(tasks=tuple(task if existing.id == task.id else existing for existing in self.state.tasks))

    async def _refresh_tree(self) -> None:
        task_tree = await self._repository.get_task_tree()
        self._update(task_tree=tuple(task_tree))
        logger.debug("Task tree refetched", extra={"roots": len(task_tree)})

    def _report_failure(self, exception: Exception, fallback: str, **context: object) -> str:
        message = error_message(exception, fallback)
        logger.error(
            fallback,
            extra={"error": message, "category": classify_error(exception).value, **context},
        )
        self._notifier.error(message)
        return message

    # Operations

    async def load(self) -> None:
        """Fetch the flat list and the tree concurrently and replace both.

        Failures are absorbed into ``state.error`` and notified; this never raises.
        """
        with span("task_cache.load"):
            self._update(loading=True)
            try:
                tasks, task_tree = await asyncio.gather(
                    self._repository.get_all_tasks(),
                    self._repository.get_task_tree(),
                )
            except Exception as e:
                message = self._report_failure(e, "Failed to load tasks", operation="load")
                self._update(loading=False, error=message)
                return

            self._update(tasks=tuple(tasks), task_tree=tuple(task_tree), loading=False, error=None)
            logger.info("Loaded tasks", extra={"tasks": len(tasks), "roots": len(task_tree)})

    async def create_task(self, data: CreateTaskInput, *, record_history: bool = True) -> Task:
        """Create a task, append it locally and refetch the tree.

        Args:
            data: Validated creation payload
            record_history: Append a CreateTaskAction on success

        Returns:
            The task as stored by the repository

        Raises:
            RepositoryError: If the repository rejects the create or the tree refetch
        """
        with span("task_cache.create_task"):
            try:
                task = await self._repository.create_task(data)
                self._update(tasks=(*self.state.tasks, task))
                await self._refresh_tree()
            except Exception as e:
                self._report_failure(e, "Failed to create task", operation="create_task")
                raise

            if record_history:
                self._history.add_action(CreateTaskAction(task=task))
            self._notifier.success("Task created")
            logger.info("Created task", extra={"task_id": task.id, "parent_id": task.parent_id})
            return task

    async def update_task(self, task_id: int, data: UpdateTaskInput, *, record_history: bool = True) -> Task:
        """Apply a partial patch to a task.

        The tree is refetched only when ``data`` explicitly sets ``parent_id``;
        attribute-only patches leave the cached tree as it was. No history entry
        is recorded when the task was not in the local cache beforehand.

        Raises:
            RepositoryError: If the repository rejects the update or the tree refetch
        """
        with span("task_cache.update_task"):
            before = self.state.find_task(task_id)
            try:
                updated = await self._repository.update_task(task_id, data)
                self._replace_task(updated)
                if data.touches_hierarchy:
                    await self._refresh_tree()
            except Exception as e:
                self._report_failure(e, "Failed to update task", operation="update_task", task_id=task_id)
                raise

            if before is None:
                logger.info("No cached copy of task; skipping undo record", extra={"task_id": task_id})
            elif record_history:
                self._history.add_action(UpdateTaskAction(task_id=task_id, before=before, after=updated))
            self._notifier.success("Task updated")
            return updated

    async def delete_task(self, task_id: int, *, record_history: bool = True) -> None:
        """Delete a task and refetch the tree.

        The repository cascades the delete to descendants; the task and its
        cached descendants are dropped from the flat list. Direct children are
        kept on the history entry for reference.

        Raises:
            RepositoryError: If the repository rejects the delete or the tree refetch
        """
        with span("task_cache.delete_task"):
            task = self.state.find_task(task_id)
            subtasks = self.state.children_of(task_id)
            try:
                await self._repository.delete_task(task_id)
                removed = self._descendant_ids(task_id) | {task_id}
                self._update(tasks=tuple(t for t in self.state.tasks if t.id not in removed))
                await self._refresh_tree()
            except Exception as e:
                self._report_failure(e, "Failed to delete task", operation="delete_task", task_id=task_id)
                raise

            if task is None:
                logger.info("No cached copy of task; skipping undo record", extra={"task_id": task_id})
            elif record_history:
                self._history.add_action(DeleteTaskAction(task=task, subtasks=subtasks))
            self._notifier.success("Task deleted")

    async def toggle_done(self, task_id: int, is_done: bool, *, record_history: bool = True) -> Task:
        """Set a task's completion flag and refetch the tree.

        Recorded as a ToggleTaskAction. When the task is not cached, the prior
        state is assumed to be ``False``.

        Raises:
            RepositoryError: If the repository rejects the update or the tree refetch
        """
        with span("task_cache.toggle_done"):
            cached = self.state.find_task(task_id)
            before = cached.is_done if cached is not None else False
            try:
                updated = await self._repository.update_task(task_id, UpdateTaskInput(is_done=is_done))
                self._replace_task(updated)
                await self._refresh_tree()
            except Exception as e:
                self._report_failure(e, "Failed to toggle task", operation="toggle_done", task_id=task_id)
                raise

            if record_history:
                self._history.add_action(ToggleTaskAction(task_id=task_id, before=before, after=is_done))
            self._notifier.success("Task completed" if is_done else "Task marked incomplete")
            return updated

    def _descendant_ids(self, task_id: int) -> set[int]:
        found: set[int] = set()
        frontier = [task_id]
        while frontier:
            parent = frontier.pop()
            for child in self.state.children_of(parent):
                if child.id not in found:
                    found.add(child.id)
                    frontier.append(child.id)
        return found

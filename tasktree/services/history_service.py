"""Undo/redo flows that replay history entries through the task cache.

Replays go through the same TaskCache operations as user mutations, with
``record_history=False`` so replaying does not clear the redo stack.

Failure policy is asymmetric:
- a failed undo re-appends the original action, so it can be undone again
- a failed redo is not put back on the redo stack
"""

import logging

from tasktree.core.logging import log_with_context, span
from tasktree.domain.create_models import CreateTaskInput
from tasktree.domain.history import (
    CreateTaskAction,
    DeleteTaskAction,
    ToggleTaskAction,
    UndoableAction,
    UpdateTaskAction,
)
from tasktree.domain.task import Task
from tasktree.domain.update_models import UpdateTaskInput
from tasktree.services.task_cache import TaskCache
from tasktree.services.undo_service import UndoHistory


logger = logging.getLogger(__name__)


def _recreate_input(task: Task) -> CreateTaskInput:
    return CreateTaskInput(
        title=task.title,
        description=task.description,
        category_id=task.category_id,
        priority=task.priority,
        parent_id=task.parent_id,
        due_date=task.due_date,
    )


class HistoryService:
    """Applies history entries to a TaskCache."""

    def __init__(self, cache: TaskCache, history: UndoHistory) -> None:
        """Initialize service with the cache to mutate and the history to consume."""
        self._cache = cache
        self._history = history

    async def _recreate(self, task: Task) -> Task:
        """Create ``task`` again under a new id, restoring its completion flag."""
        recreated = await self._cache.create_task(_recreate_input(task), record_history=False)
        if task.is_done:
            recreated = await self._cache.toggle_done(recreated.id, True, record_history=False)
        return recreated

    async def apply_inverse(self, action: UndoableAction) -> None:
        """Apply the mutation that reverses ``action``.

        Deleted tasks are recreated under a new repository-assigned id.
        References to tasks that no longer exist fail in the repository.
        """
        match action:
            case CreateTaskAction(task=task):
                await self._cache.delete_task(task.id, record_history=False)
            case UpdateTaskAction(task_id=task_id, before=before):
                await self._cache.update_task(task_id, UpdateTaskInput.from_task(before), record_history=False)
            case DeleteTaskAction(task=task):
                await self._recreate(task)
            case ToggleTaskAction(task_id=task_id, before=before):
                await self._cache.toggle_done(task_id, before, record_history=False)

    async def apply_forward(self, action: UndoableAction) -> None:
        """Re-apply ``action`` after it has been undone."""
        match action:
            case CreateTaskAction(task=task):
                await self._recreate(task)
            case UpdateTaskAction(task_id=task_id, after=after):
                await self._cache.update_task(task_id, UpdateTaskInput.from_task(after), record_history=False)
            case DeleteTaskAction(task=task):
                await self._cache.delete_task(task.id, record_history=False)
            case ToggleTaskAction(task_id=task_id, after=after):
                await self._cache.toggle_done(task_id, after, record_history=False)

    async def undo(self) -> UndoableAction | None:
        """Undo the most recent action.

        Returns:
            The undone action, or None if there was nothing to undo

        Raises:
            RepositoryError: If the inverse mutation fails (the action is re-appended first)
        """
        action = self._history.undo()
        if action is None:
            return None

        with span("history_service.undo"):
            try:
                await self.apply_inverse(action)
            except Exception:
                logger.warning("Undo failed; restoring history entry", extra={"action": action.type})
                # Re-appended even when the repository write landed and only the
                # tree refetch failed; undoing a delete again then creates a second copy.
                self._history.add_action(action)
                raise

            log_with_context(logger, "info", "Undid action", action=action.type, can_redo=self._history.can_redo())
            return action

    async def redo(self) -> UndoableAction | None:
        """Redo the most recently undone action.

        Returns:
            The redone action, or None if there was nothing to redo

        Raises:
            RepositoryError: If the forward mutation fails (the action is not restored)
        """
        action = self._history.redo()
        if action is None:
            return None

        with span("history_service.redo"):
            try:
                await self.apply_forward(action)
            except Exception:
                logger.warning("Redo failed; entry not returned to redo stack", extra={"action": action.type})
                raise

            log_with_context(logger, "info", "Redid action", action=action.type, can_undo=self._history.can_undo())
            return action

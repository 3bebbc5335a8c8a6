"""Bounded undo/redo history of task mutations."""

import logging

from tasktree.core.config import settings
from tasktree.core.observable import StateHolder
from tasktree.domain.history import HistoryState, UndoableAction


logger = logging.getLogger(__name__)


class UndoHistory(StateHolder[HistoryState]):
    """Two-stack command history.

    ``past`` holds at most ``max_history`` actions, oldest evicted first.
    Appending a new action always empties ``future``. Callers apply the
    returned actions themselves; this class only moves entries between stacks.
    """

    def __init__(self, max_history: int | None = None) -> None:
        """Initialize an empty history.

        Args:
            max_history: Capacity of ``past``; defaults to settings.undo_history_limit
        """
        super().__init__(HistoryState())
        self.max_history = max_history if max_history is not None else settings.undo_history_limit
        if self.max_history < 1:
            msg = f"max_history must be at least 1, got {self.max_history}"
            raise ValueError(msg)

    def add_action(self, action: UndoableAction) -> None:
        """Append ``action`` to past, evict beyond capacity, and clear future."""
        past = (*self.state.past, action)[-self.max_history :]
        evicted = len(self.state.past) + 1 - len(past)
        if evicted:
            logger.debug("Evicted %d undo entries over capacity %d", evicted, self.max_history)
        self._set_state(HistoryState(past=past, future=()))

    def undo(self) -> UndoableAction | None:
        """Move the most recent past action to the front of future and return it.

        Returns None when there is nothing to undo. If applying the inverse
        fails, the caller must re-append the action with ``add_action``.
        """
        state = self.state
        if not state.past:
            return None

        action = state.past[-1]
        self._set_state(HistoryState(past=state.past[:-1], future=(action, *state.future)))
        return action

    def redo(self) -> UndoableAction | None:
        """Move the earliest future action to the end of past and return it.

        Returns None when there is nothing to redo. A failed redo is not put
        back into future.
        """
        state = self.state
        if not state.future:
            return None

        action = state.future[0]
        self._set_state(HistoryState(past=(*state.past, action), future=state.future[1:]))
        return action

    def can_undo(self) -> bool:
        return bool(self.state.past)

    def can_redo(self) -> bool:
        return bool(self.state.future)

    def clear(self) -> None:
        """Empty both stacks."""
        self._set_state(HistoryState())

"""Observable state holder shared by the caches and the undo history."""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar


logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")

Listener = Callable[[StateT], None]
Unsubscribe = Callable[[], None]


class StateHolder(Generic[StateT]):
    """Holds one immutable snapshot and notifies listeners when it is replaced.

    Subclasses change state only through ``_set_state``, so readers never see a
    half-applied transition.
    """

    def __init__(self, initial: StateT) -> None:
        """Initialize holder with the initial snapshot."""
        self._state = initial
        self._listeners: list[Listener[StateT]] = []

    @property
    def state(self) -> StateT:
        """Current snapshot."""
        return self._state

    def subscribe(self, listener: Listener[StateT]) -> Unsubscribe:
        """Register ``listener``, call it with the current snapshot, return an unsubscribe callable."""
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: StateT) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

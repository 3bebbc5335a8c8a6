"""Pytest configuration and fixtures for unit tests."""

import pytest

from tasktree.domain.task import Priority, Task
from tasktree.services.history_service import HistoryService
from tasktree.services.task_cache import TaskCache
from tasktree.services.undo_service import UndoHistory
from tests.unit.mocks import InMemoryCategoryRepository, InMemoryTaskRepository, RecordingNotifier


@pytest.fixture
def task_repo():
    """Provides a fresh InMemoryTaskRepository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def category_repo():
    """Provides a fresh InMemoryCategoryRepository for each test."""
    return InMemoryCategoryRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def history():
    """Provides an empty undo history with the default capacity."""
    return UndoHistory(max_history=50)


@pytest.fixture
def cache(task_repo, history, notifier):
    """TaskCache wired to in-memory fakes."""
    return TaskCache(task_repo, history, notifier)


@pytest.fixture
def history_service(cache, history):
    return HistoryService(cache, history)


@pytest.fixture
def make_task():
    """Factory for Task objects with sensible defaults."""

    def _make(task_id: int = 1, **overrides: object) -> Task:
        fields: dict[str, object] = {
            "id": task_id,
            "title": f"Task {task_id}",
            "description": None,
            "category_id": None,
            "priority": Priority.MEDIUM,
            "parent_id": None,
            "is_done": False,
            "position": 0,
            "due_date": None,
            "created_at": 1_700_000_000,
            "updated_at": 1_700_000_000,
            "completed_at": None,
        }
        fields.update(overrides)
        return Task.model_validate(fields)

    return _make

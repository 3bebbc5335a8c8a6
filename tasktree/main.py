"""tasktree - client-side cache and undo history for a hierarchical task list."""

import logging
from dataclasses import dataclass

from tasktree.core.config import settings
from tasktree.core.logging import configure_logfire, configure_logging
from tasktree.services.category_cache import CategoryCache
from tasktree.services.history_service import HistoryService
from tasktree.services.notification_service import Notifier, ToastQueue
from tasktree.services.repositories import CategoryRepository, TaskRepository
from tasktree.services.task_cache import TaskCache
from tasktree.services.undo_service import UndoHistory
from tasktree.services.view_service import ViewState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskTreeApp:
    """Explicitly composed services sharing one history and one notifier."""

    tasks: TaskCache
    categories: CategoryCache
    history: UndoHistory
    history_service: HistoryService
    notifier: Notifier
    view: ViewState

    async def load(self) -> None:
        """Load categories and tasks."""
        await self.categories.load()
        await self.tasks.load()

    def reset(self) -> None:
        """Forget undo history (logout or test isolation)."""
        self.history.clear()


def create_app(
    task_repository: TaskRepository,
    category_repository: CategoryRepository,
    *,
    notifier: Notifier | None = None,
    configure_observability: bool = False,
) -> TaskTreeApp:
    """Wire caches, history and notifier around the given repositories.

    Args:
        task_repository: External task store
        category_repository: External category store
        notifier: Notification sink (defaults to a new ToastQueue)
        configure_observability: Configure logging and Logfire before wiring

    Returns:
        The composed application services
    """
    if configure_observability:
        configure_logging()
        configure_logfire()

    sink = notifier if notifier is not None else ToastQueue()
    history = UndoHistory(max_history=settings.undo_history_limit)
    tasks = TaskCache(task_repository, history, sink)

    logger.info("tasktree services created", extra={"undo_history_limit": history.max_history})
    return TaskTreeApp(
        tasks=tasks,
        categories=CategoryCache(category_repository),
        history=history,
        history_service=HistoryService(tasks, history),
        notifier=sink,
        view=ViewState(),
    )

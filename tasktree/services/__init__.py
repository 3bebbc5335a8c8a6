from tasktree.services import (
    category_cache,
    history_service,
    notification_service,
    task_cache,
    task_sorting,
    undo_service,
    view_service,
)


__all__ = [
    "category_cache",
    "history_service",
    "notification_service",
    "task_cache",
    "task_sorting",
    "undo_service",
    "view_service",
]

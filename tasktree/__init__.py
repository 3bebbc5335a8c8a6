"""tasktree - client-side cache and undo history for a hierarchical task list."""

from tasktree.main import TaskTreeApp, create_app


__all__ = ["TaskTreeApp", "create_app"]

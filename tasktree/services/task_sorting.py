"""Sorting and grouping of tasks for display.

Every ordering uses the same key:

1. incomplete before complete
2. priority rank, Urgent first
3. ascending due date, with undated tasks after every dated one

Ties keep their input order (``list.sort`` is stable).
"""

from collections.abc import Iterable
from typing import TypeVar

from tasktree.domain.task import Priority, Task, TaskTree


TaskT = TypeVar("TaskT", bound=Task)


def task_sort_key(task: Task) -> tuple[bool, int, bool, int]:
    """Return the sort key for a task or tree node."""
    has_no_due_date = task.due_date is None
    return (task.is_done, task.priority.rank, has_no_due_date, task.due_date or 0)


def sort_tasks(tasks: list[TaskT]) -> list[TaskT]:
    """Sort ``tasks`` in place by completion, priority and due date, and return it."""
    tasks.sort(key=task_sort_key)
    return tasks


def _top_level(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if task.parent_id is None]


def group_by_category(tasks: Iterable[Task]) -> dict[int | None, list[Task]]:
    """Group top-level tasks by category_id.

    ``None`` is a valid key (uncategorized). Groups appear in first-seen order
    and each group is sorted.
    """
    grouped: dict[int | None, list[Task]] = {}
    for task in _top_level(tasks):
        grouped.setdefault(task.category_id, []).append(task)

    for members in grouped.values():
        sort_tasks(members)
    return grouped


def group_by_priority(tasks: Iterable[Task]) -> dict[Priority, list[Task]]:
    """Group top-level tasks by priority.

    All four priorities are always present, in Urgent, High, Medium, Low order.
    """
    grouped: dict[Priority, list[Task]] = {priority: [] for priority in Priority}
    for task in _top_level(tasks):
        grouped[task.priority].append(task)

    for members in grouped.values():
        sort_tasks(members)
    return grouped


def sort_task_tree(tree: Iterable[TaskTree]) -> list[TaskTree]:
    """Return a new forest with siblings sorted at every level.

    Children are sorted before their parent's level (post-order). The input is
    not modified.
    """
    nodes = [node.model_copy(update={"subtasks": sort_task_tree(node.subtasks)}) for node in tree]
    return sort_tasks(nodes)

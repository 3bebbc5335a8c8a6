"""View preferences and the grouped task view they select."""

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from tasktree.core.observable import StateHolder
from tasktree.domain.task import Priority, Task
from tasktree.services import task_sorting


class GroupBy(StrEnum):
    """How the task list is grouped for display."""

    NONE = "none"
    CATEGORY = "category"
    PRIORITY = "priority"


class ViewOptions(BaseModel):
    """Display preferences."""

    model_config = ConfigDict(frozen=True)

    group_by: GroupBy = GroupBy.CATEGORY
    show_completed: bool = True
    selected_task_id: int | None = None


class ViewState(StateHolder[ViewOptions]):
    """Observable holder for ViewOptions."""

    def __init__(self, options: ViewOptions | None = None) -> None:
        """Initialize with ``options`` or the defaults."""
        super().__init__(options or ViewOptions())

    def set_group_by(self, group_by: GroupBy) -> None:
        self._set_state(self.state.model_copy(update={"group_by": group_by}))

    def toggle_show_completed(self) -> None:
        self._set_state(self.state.model_copy(update={"show_completed": not self.state.show_completed}))

    def select_task(self, task_id: int | None) -> None:
        self._set_state(self.state.model_copy(update={"selected_task_id": task_id}))


def build_task_view(
    tasks: Iterable[Task],
    options: ViewOptions,
) -> dict[int | None, list[Task]] | dict[Priority, list[Task]]:
    """Group top-level tasks according to ``options``.

    ``GroupBy.NONE`` yields a single group keyed ``None``. Completed tasks are
    left out when ``options.show_completed`` is false.
    """
    visible = [task for task in tasks if options.show_completed or not task.is_done]

    if options.group_by == GroupBy.PRIORITY:
        return task_sorting.group_by_priority(visible)
    if options.group_by == GroupBy.CATEGORY:
        return task_sorting.group_by_category(visible)
    return {None: task_sorting.sort_tasks([task for task in visible if task.parent_id is None])}

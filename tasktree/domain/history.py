"""Undoable actions and history snapshots."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from tasktree.domain.task import Task


class CreateTaskAction(BaseModel):
    """A task was created. Inverse: delete ``task.id``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["CREATE_TASK"] = "CREATE_TASK"
    task: Task


class UpdateTaskAction(BaseModel):
    """A task was patched. Inverse: reapply ``before``'s mutable fields."""

    model_config = ConfigDict(frozen=True)

    type: Literal["UPDATE_TASK"] = "UPDATE_TASK"
    task_id: int
    before: Task
    after: Task


class DeleteTaskAction(BaseModel):
    """A task was deleted. Inverse: recreate ``task``.

    The repository assigns a new id on recreation; the original id is not
    recoverable, and ``subtasks`` are kept for reference only.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["DELETE_TASK"] = "DELETE_TASK"
    task: Task
    subtasks: list[Task] = Field(default_factory=list)


class ToggleTaskAction(BaseModel):
    """A task's completion flag was set. Inverse: set ``is_done = before``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["TOGGLE_TASK"] = "TOGGLE_TASK"
    task_id: int
    before: bool
    after: bool


UndoableAction = Annotated[
    CreateTaskAction | UpdateTaskAction | DeleteTaskAction | ToggleTaskAction,
    Field(discriminator="type"),
]


class HistoryState(BaseModel):
    """Snapshot of the undo history."""

    model_config = ConfigDict(frozen=True)

    past: tuple[UndoableAction, ...] = ()
    future: tuple[UndoableAction, ...] = ()

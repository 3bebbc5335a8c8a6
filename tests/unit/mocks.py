"""Pure Python in-memory repositories and notifier for unit testing."""

from dataclasses import dataclass, field

from tasktree.core.errors import RecordNotFoundError, RepositoryError
from tasktree.domain.category import Category
from tasktree.domain.create_models import CreateCategoryInput, CreateTaskInput
from tasktree.domain.task import Task, TaskTree
from tasktree.domain.update_models import UpdateCategoryInput, UpdateTaskInput


class _FailureInjection:
    """Mixin letting tests make named operations raise."""

    def __init__(self) -> None:
        self.failures: dict[str, Exception] = {}
        self.calls: list[str] = []

    def fail(self, operation: str, error: Exception | None = None) -> None:
        """Make ``operation`` raise ``error`` (a RepositoryError by default) until recovered."""
        self.failures[operation] = error or RepositoryError(f"{operation} failed")

    def recover(self, operation: str) -> None:
        self.failures.pop(operation, None)

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failures:
            raise self.failures[operation]

    def call_count(self, operation: str) -> int:
        return self.calls.count(operation)


class InMemoryTaskRepository(_FailureInjection):
    """In-memory TaskRepository.

    Mirrors the behaviour of the real store: sequential ids, sibling positions,
    timestamps, completed_at on completion, cascading deletes, and trees built
    from parent_id ordered by position.
    """

    def __init__(self, start_time: int = 1_700_000_000) -> None:
        """Initialize empty repository."""
        super().__init__()
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._clock = start_time

    def _now(self) -> int:
        self._clock += 1
        return self._clock

    def _get(self, task_id: int) -> Task:
        if task_id not in self._tasks:
            raise RecordNotFoundError("tasks", task_id)
        return self._tasks[task_id]

    def _siblings(self, parent_id: int | None, category_id: int | None) -> list[Task]:
        return [t for t in self._tasks.values() if t.parent_id == parent_id and t.category_id == category_id]

    def seed(self, **fields: object) -> Task:
        """Store a task directly, bypassing failure injection."""
        now = self._now()
        task = Task.model_validate(
            {"id": self._next_id, "position": 0, "created_at": now, "updated_at": now, **fields},
        )
        self._next_id = max(self._next_id, task.id) + 1
        self._tasks[task.id] = task
        return task

    async def create_task(self, data: CreateTaskInput) -> Task:
        self._enter("create_task")
        siblings = self._siblings(data.parent_id, data.category_id)
        now = self._now()
        task = Task(
            id=self._next_id,
            title=data.title,
            description=data.description,
            category_id=data.category_id,
            priority=data.priority,
            parent_id=data.parent_id,
            is_done=False,
            position=max((t.position for t in siblings), default=-1) + 1,
            due_date=data.due_date,
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1
        self._tasks[task.id] = task
        return task

    async def get_all_tasks(self) -> list[Task]:
        self._enter("get_all_tasks")
        return sorted(self._tasks.values(), key=lambda t: t.position)

    async def get_task_tree(self) -> list[TaskTree]:
        self._enter("get_task_tree")
        ordered = sorted(self._tasks.values(), key=lambda t: t.position)

        def build(parent_id: int | None) -> list[TaskTree]:
            return [
                TaskTree(**task.model_dump(), subtasks=build(task.id)) for task in ordered if task.parent_id == parent_id
            ]

        return build(None)

    async def update_task(self, task_id: int, data: UpdateTaskInput) -> Task:
        self._enter("update_task")
        current = self._get(task_id)
        now = self._now()
        changes = data.changes()
        if "is_done" in changes:
            changes["completed_at"] = now if changes["is_done"] else None
        updated = current.model_copy(update={**changes, "updated_at": now})
        self._tasks[task_id] = updated
        return updated

    async def delete_task(self, task_id: int) -> None:
        self._enter("delete_task")
        self._get(task_id)
        doomed = [task_id]
        while doomed:
            current = doomed.pop()
            self._tasks.pop(current, None)
            doomed.extend(t.id for t in self._tasks.values() if t.parent_id == current)

    async def reorder_task(self, task_id: int, new_position: int) -> None:
        self._enter("reorder_task")
        task = self._get(task_id)
        old_position = task.position
        if old_position == new_position:
            return

        for sibling in self._siblings(task.parent_id, task.category_id):
            if sibling.id == task_id:
                continue
            if old_position < new_position and old_position < sibling.position <= new_position:
                self._tasks[sibling.id] = sibling.model_copy(update={"position": sibling.position - 1})
            elif new_position < old_position and new_position <= sibling.position < old_position:
                self._tasks[sibling.id] = sibling.model_copy(update={"position": sibling.position + 1})
        self._tasks[task_id] = task.model_copy(update={"position": new_position})


class InMemoryCategoryRepository(_FailureInjection):
    """In-memory CategoryRepository."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        super().__init__()
        self._categories: dict[int, Category] = {}
        self._next_id = 1

    async def create_category(self, data: CreateCategoryInput) -> Category:
        self._enter("create_category")
        category = Category(id=self._next_id, name=data.name, color=data.color, created_at=0, updated_at=0)
        self._next_id += 1
        self._categories[category.id] = category
        return category

    async def get_all_categories(self) -> list[Category]:
        self._enter("get_all_categories")
        return sorted(self._categories.values(), key=lambda c: c.name)

    async def update_category(self, category_id: int, data: UpdateCategoryInput) -> Category:
        self._enter("update_category")
        if category_id not in self._categories:
            raise RecordNotFoundError("categories", category_id)
        updated = self._categories[category_id].model_copy(update=data.changes())
        self._categories[category_id] = updated
        return updated

    async def delete_category(self, category_id: int) -> None:
        self._enter("delete_category")
        if self._categories.pop(category_id, None) is None:
            raise RecordNotFoundError("categories", category_id)


@dataclass
class RecordingNotifier:
    """Notifier that records every message for assertions."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def success(self, message: str, duration: int | None = None) -> None:
        self.messages.append(("success", message))

    def error(self, message: str, duration: int | None = None) -> None:
        self.messages.append(("error", message))

    def info(self, message: str, duration: int | None = None) -> None:
        self.messages.append(("info", message))

    def of_kind(self, kind: str) -> list[str]:
        return [message for recorded_kind, message in self.messages if recorded_kind == kind]

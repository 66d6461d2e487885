"""
Task Registry

In-memory owner of the task collection for one invocation. All lifecycle
operations go through here: id assignment, status changes, description
updates, deletion and filtered listing.

The registry never touches the filesystem; task_store.py loads the
collection before a command runs and saves it afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone

STATUSES: tuple[str, ...] = ("todo", "in-progress", "done")
DEFAULT_STATUS = "todo"


class TaskError(Exception):
    """Base class for task tracker errors."""


class NotFoundError(TaskError):
    """No task has the requested id."""

    def __init__(self, task_id: int):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class InvalidArgumentError(TaskError):
    """A command argument (id, status, description) is unusable."""


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_iso(value: str) -> datetime:
    """Parse an ISO timestamp, accepting a trailing 'Z' for UTC.

    Naive timestamps are taken as UTC so they compare with aware ones.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_id(raw: int | str | None) -> int:
    """Convert a user supplied task id to its canonical int form."""
    if raw is None:
        raise InvalidArgumentError("Missing task id")
    if isinstance(raw, bool):
        raise InvalidArgumentError(f"Invalid task id: {raw}")
    if isinstance(raw, int):
        task_id = raw
    else:
        text = str(raw).strip()
        if not text.isdecimal():
            raise InvalidArgumentError(f"Invalid task id: {raw}")
        task_id = int(text)
    if task_id < 1:
        raise InvalidArgumentError(f"Invalid task id: {raw}")
    return task_id


def normalize_status(raw: str | None) -> str:
    if raw not in STATUSES:
        raise InvalidArgumentError(
            f"Invalid status: {raw}. Must be one of {list(STATUSES)}"
        )
    return raw


def _require_description(description: str | None) -> str:
    if description is None or not description.strip():
        raise InvalidArgumentError("Task description must not be empty")
    return description


@dataclass
class Task:
    """A single trackable unit of work."""

    id: int
    description: str
    status: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        """Persisted record layout (camelCase timestamp keys)."""
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        return cls(
            id=int(data["id"]),
            description=data["description"],
            status=data["status"],
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


class TaskRegistry:
    """Task lifecycle operations over an explicit, ordered collection.

    Args:
        tasks: Collection supplied by the store, in insertion order. The
            registry mutates this list in place.
        clock: Returns the current time as an ISO string.
    """

    def __init__(
        self,
        tasks: list[Task] | None = None,
        clock: Callable[[], str] = now_iso,
    ) -> None:
        self._tasks: list[Task] = tasks if tasks is not None else []
        self._clock = clock

    @property
    def tasks(self) -> list[Task]:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def next_id(self) -> int:
        """Current maximum id + 1, or 1 for an empty collection."""
        return max((task.id for task in self._tasks), default=0) + 1

    def _touch(self, task: Task) -> None:
        # updatedAt never moves backwards, even if the clock does
        now = self._clock()
        if parse_iso(now) < parse_iso(task.updated_at):
            now = task.updated_at
        task.updated_at = now

    def _index_of(self, task_id: int | str) -> int:
        tid = normalize_id(task_id)
        for index, task in enumerate(self._tasks):
            if task.id == tid:
                return index
        raise NotFoundError(tid)

    def get(self, task_id: int | str) -> Task:
        return self._tasks[self._index_of(task_id)]

    def add(self, description: str | None) -> Task:
        description = _require_description(description)
        now = self._clock()
        task = Task(
            id=self.next_id(),
            description=description,
            status=DEFAULT_STATUS,
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        return task

    def list_tasks(self, status: str | None = None) -> Iterator[Task]:
        """Iterate tasks in collection order, optionally filtered by status.

        The filter is checked immediately; iteration itself is lazy and a
        new call starts over from the first task.
        """
        if status is None:
            return iter(self._tasks)
        status = normalize_status(status)
        return (task for task in self._tasks if task.status == status)

    def delete_task(self, task_id: int | str) -> Task:
        return self._tasks.pop(self._index_of(task_id))

    def change_status(self, task_id: int | str, status: str) -> Task:
        status = normalize_status(status)
        task = self.get(task_id)
        task.status = status
        self._touch(task)
        return task

    def update_task(self, task_id: int | str, description: str | None) -> Task:
        description = _require_description(description)
        task = self.get(task_id)
        task.description = description
        self._touch(task)
        return task

    def count_by_status(self) -> dict[str, int]:
        counts = {status: 0 for status in STATUSES}
        for task in self._tasks:
            counts[task.status] = counts.get(task.status, 0) + 1
        return counts

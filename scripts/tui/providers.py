"""
Data providers for the board.

Protocols define the interface; implementations can be swapped
for testing or alternative data sources.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class TaskInfo:
    """Immutable snapshot of a task."""

    id: int
    description: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class BoardState:
    """Snapshot of the whole tasks file."""

    tasks_file: str
    tasks: tuple[TaskInfo, ...]
    counts: dict[str, int] = field(default_factory=dict)
    checksum: str = ""

    def by_status(self, status: str) -> tuple[TaskInfo, ...]:
        return tuple(t for t in self.tasks if t.status == status)

    def get(self, task_id: int) -> TaskInfo | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


class TaskProvider(Protocol):
    """Protocol for read-only access to the task collection."""

    def load(self) -> BoardState | None:
        """Load current board state, or None when there is nothing to show."""
        ...

    def get_task(self, task_id: int) -> TaskInfo | None:
        """Get details of a specific task."""
        ...

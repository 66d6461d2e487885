"""
Concrete implementation of TaskProvider using the task_store module.
"""

from __future__ import annotations

import hashlib
import sys
from pathlib import Path

# Add scripts to path for imports
SCRIPT_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

import task_store  # noqa: E402
from task_registry import Task, TaskRegistry, parse_iso  # noqa: E402
from tui.providers import BoardState, TaskInfo  # noqa: E402


def file_checksum(path: Path) -> str:
    """SHA256 checksum of file contents."""
    if not path.exists():
        return ""
    return hashlib.sha256(path.read_bytes()).hexdigest()[:16]


def _task_info(task: Task) -> TaskInfo:
    """Convert a registry Task to TaskInfo."""
    return TaskInfo(
        id=task.id,
        description=task.description,
        status=task.status,
        created_at=parse_iso(task.created_at),
        updated_at=parse_iso(task.updated_at),
    )


class FileTaskProvider:
    """TaskProvider implementation that reads the tasks JSON file.

    Never creates or writes the file; a missing or corrupt file loads as None.
    """

    def __init__(self, tasks_file: Path | None = None):
        self._tasks_file = Path(tasks_file or task_store.TASKS_FILE)

    @property
    def tasks_file(self) -> Path:
        return self._tasks_file

    def load(self) -> BoardState | None:
        """Load current board state."""
        if not self._tasks_file.exists():
            return None

        try:
            checksum = file_checksum(self._tasks_file)
            tasks = task_store.read_tasks(self._tasks_file)
        except (task_store.CorruptStateError, OSError):
            return None

        registry = TaskRegistry(tasks)
        return BoardState(
            tasks_file=str(self._tasks_file),
            tasks=tuple(_task_info(t) for t in registry.tasks),
            counts=registry.count_by_status(),
            checksum=checksum,
        )

    def get_task(self, task_id: int) -> TaskInfo | None:
        """Get details of a specific task."""
        state = self.load()
        if not state:
            return None
        return state.get(task_id)

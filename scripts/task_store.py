"""
Task Store

Durable round-trip of the task collection between invocations. The whole
collection lives in one JSON document (an array of task records) which is
read at startup and rewritten in full at shutdown.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from jsonschema import ValidationError, validate

from task_registry import STATUSES, Task, TaskError, parse_iso

TASKS_FILE = Path("tasks.json")

TASKS_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "description", "status", "createdAt", "updatedAt"],
        "properties": {
            "id": {"type": "integer", "minimum": 1},
            "description": {"type": "string"},
            "status": {"enum": list(STATUSES)},
            "createdAt": {"type": "string"},
            "updatedAt": {"type": "string"},
        },
    },
}


class CorruptStateError(TaskError):
    """Persisted tasks file is unreadable or not in the expected shape."""


def _check_records(records: list[dict]) -> None:
    """Invariants the schema cannot express: unique ids, ordered timestamps."""
    seen: set[int] = set()
    for record in records:
        tid = record["id"]
        if tid in seen:
            raise CorruptStateError(f"Duplicate task id: {tid}")
        seen.add(tid)

        try:
            created = parse_iso(record["createdAt"])
            updated = parse_iso(record["updatedAt"])
        except ValueError as e:
            raise CorruptStateError(f"Task {tid} has an invalid timestamp: {e}") from e
        if updated < created:
            raise CorruptStateError(f"Task {tid} was updated before it was created")


def read_tasks(path: Path) -> list[Task]:
    """Parse an existing tasks file. Never creates or modifies it."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise CorruptStateError(f"{path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise CorruptStateError(f"Invalid JSON in {path}: {e}") from e

    try:
        validate(instance=data, schema=TASKS_SCHEMA)
    except ValidationError as e:
        where = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        raise CorruptStateError(f"Validation error at '{where}': {e.message}") from e

    _check_records(data)
    return [Task.from_dict(record) for record in data]


def load_tasks(path: Path | None = None) -> list[Task]:
    """Load tasks, initializing an empty tasks file on first run."""
    path = Path(path or TASKS_FILE)
    if not path.exists():
        print("No tasks file found. Creating new task file...", file=sys.stderr)
        save_tasks([], path)
        return []
    return read_tasks(path)


def save_tasks(tasks: list[Task], path: Path | None = None) -> None:
    """Overwrite the tasks file with the full collection.

    The document is written to a sibling temp file and moved into place, so
    readers see either the previous or the new collection. OSError
    propagates: a failed save loses the command's changes.
    """
    path = Path(path or TASKS_FILE)
    payload = json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False)

    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(payload + "\n", encoding="utf-8")
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()

"""
Console rendering for tasks.

Plain-text task blocks for `task_cli.py list`, plus the relative-age and
status-icon helpers shared with the board.
"""

from datetime import datetime, timezone

from task_registry import Task, parse_iso

SEPARATOR = "=" * 36

STATUS_ICONS = {
    "todo": "○",
    "in-progress": "●",
    "done": "✓",
}

STATUS_COLORS = {
    "todo": "\033[90m",         # Gray
    "in-progress": "\033[96m",  # Cyan
    "done": "\033[92m",         # Green
}
RESET = "\033[0m"
BOLD = "\033[1m"

STATUS_TITLES = {
    "todo": "TO DO",
    "in-progress": "IN PROGRESS",
    "done": "DONE",
}


def format_time_ago(iso_timestamp: str, now: datetime | None = None) -> str:
    """Format timestamp as 'X ago'."""
    try:
        ts = parse_iso(iso_timestamp)
        delta = (now or datetime.now(timezone.utc)) - ts

        total_seconds = abs(int(delta.total_seconds()))
        if total_seconds < 60:
            return f"{total_seconds}s ago"
        elif total_seconds < 3600:
            return f"{total_seconds // 60}m ago"
        elif total_seconds < 86400:
            return f"{total_seconds // 3600}h ago"
        else:
            return f"{total_seconds // 86400}d ago"
    except (ValueError, TypeError, AttributeError):
        return "—"


def format_status(status: str, color: bool = False) -> str:
    if not color:
        return status
    return f"{STATUS_COLORS.get(status, '')}{status}{RESET}"


def format_task(task: Task, color: bool = False) -> str:
    """Render one task as a block ending in a separator line."""
    task_id = f"{BOLD}{task.id}{RESET}" if color else str(task.id)
    lines = [
        f"Task ID: {task_id}",
        f"Description: {task.description}",
        f"Status: {format_status(task.status, color)}",
        f"Created At: {task.created_at}",
        f"Updated At: {task.updated_at}",
        SEPARATOR,
    ]
    return "\n".join(lines)


def format_summary(counts: dict[str, int]) -> str:
    """One-line per-status totals, e.g. '○ todo: 2  ● in-progress: 1  ✓ done: 0'."""
    return "  ".join(
        f"{STATUS_ICONS.get(status, '?')} {status}: {count}"
        for status, count in counts.items()
    )

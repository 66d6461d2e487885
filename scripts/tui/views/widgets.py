"""Reusable widgets for the task board."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.events import Click
from textual.widgets import Label, ProgressBar, Static

from task_format import STATUS_ICONS, STATUS_TITLES
from tui.providers import BoardState, TaskInfo


class SummaryPanel(Static):
    """Panel showing task totals and completion."""

    DEFAULT_CSS = """
    SummaryPanel {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    SummaryPanel .title {
        text-style: bold;
    }

    SummaryPanel .status-done {
        color: $success;
    }

    SummaryPanel .status-in-progress {
        color: $warning;
    }

    SummaryPanel .status-todo {
        color: $text-muted;
    }
    """

    def __init__(self, state: BoardState, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state = state

    def compose(self) -> ComposeResult:
        total = len(self._state.tasks)
        done = self._state.counts.get("done", 0)

        yield Label(f"Tasks: {self._state.tasks_file}", classes="title", markup=False)

        yield ProgressBar(total=total or 1, show_eta=False)
        yield Label(f"{done}/{total} done")

        for status, count in self._state.counts.items():
            icon = STATUS_ICONS.get(status, "?")
            yield Label(f"  {icon} {STATUS_TITLES.get(status, status)}: {count}", classes=f"status-{status}")

    def on_mount(self) -> None:
        self.query_one(ProgressBar).update(progress=self._state.counts.get("done", 0))


class TaskRow(Static, can_focus=True):
    """Single row in a status column. Enter or click opens the task."""

    BINDINGS = [
        Binding("enter", "open", "Open", show=False),
    ]

    DEFAULT_CSS = """
    TaskRow {
        height: 1;
        width: 100%;
    }

    TaskRow:focus {
        background: $accent;
    }

    TaskRow .status-done {
        color: $success;
    }

    TaskRow .status-in-progress {
        color: $warning;
    }

    TaskRow .status-todo {
        color: $text-muted;
    }
    """

    def __init__(self, task: TaskInfo, **kwargs) -> None:
        super().__init__(**kwargs)
        self._info = task

    @property
    def task_id(self) -> int:
        return self._info.id

    def compose(self) -> ComposeResult:
        icon = STATUS_ICONS.get(self._info.status, "?")
        yield Label(
            f"{icon} {self._info.id} {self._info.description}",
            classes=f"status-{self._info.status}",
            markup=False,
        )

    def action_open(self) -> None:
        self.app.show_task_detail(self._info.id)

    def on_click(self, event: Click) -> None:
        self.action_open()


class StatusColumn(Static):
    """Scrollable column of tasks sharing one status."""

    DEFAULT_CSS = """
    StatusColumn {
        height: 100%;
        border: solid $primary;
        padding: 0 1;
    }

    StatusColumn .title {
        text-style: bold;
        margin-bottom: 1;
    }

    StatusColumn .task-list {
        height: 1fr;
    }

    StatusColumn .empty {
        color: $text-muted;
    }
    """

    def __init__(self, status: str, tasks: tuple[TaskInfo, ...], **kwargs) -> None:
        super().__init__(**kwargs)
        self._status = status
        self._tasks = tasks

    def compose(self) -> ComposeResult:
        title = STATUS_TITLES.get(self._status, self._status.upper())
        yield Label(f"{title} ({len(self._tasks)})", classes="title")

        with ScrollableContainer(classes="task-list"):
            if not self._tasks:
                yield Label("(empty)", classes="empty")
            for task in self._tasks:
                yield TaskRow(task)

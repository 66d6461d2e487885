"""Task detail view for drilling into individual tasks."""

from textual.app import ComposeResult
from textual.containers import ScrollableContainer
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Static

from task_format import STATUS_TITLES, format_time_ago
from tui.providers import TaskInfo


class TimestampsPanel(Static):
    """Panel showing when a task was created and last changed."""

    DEFAULT_CSS = """
    TimestampsPanel {
        height: auto;
        border: solid $primary;
        padding: 1;
        margin-bottom: 1;
    }

    TimestampsPanel .title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(self, info: TaskInfo, **kwargs) -> None:
        super().__init__(**kwargs)
        self._info = info

    def compose(self) -> ComposeResult:
        yield Label("Timeline", classes="title")

        for label, ts in (("Created", self._info.created_at), ("Updated", self._info.updated_at)):
            if ts is None:
                yield Label(f"{label}: —")
                continue
            iso = ts.isoformat()
            yield Label(f"{label}: {iso} ({format_time_ago(iso)})")


class TaskDetailScreen(Screen):
    """Screen showing detailed task information."""

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("escape", "back", "Back"),
        ("b", "back", "Back"),
    ]

    DEFAULT_CSS = """
    TaskDetailScreen {
        padding: 1;
    }

    TaskDetailScreen .task-header {
        text-style: bold;
        margin-bottom: 1;
    }

    TaskDetailScreen .task-status {
        margin-bottom: 1;
    }

    TaskDetailScreen .status-done {
        color: $success;
    }

    TaskDetailScreen .status-in-progress {
        color: $warning;
    }

    TaskDetailScreen .status-todo {
        color: $text-muted;
    }
    """

    def __init__(self, info: TaskInfo, **kwargs) -> None:
        super().__init__(**kwargs)
        self._info = info

    @property
    def task_id(self) -> int:
        return self._info.id

    def compose(self) -> ComposeResult:
        yield Header()

        with ScrollableContainer():
            yield Label(f"Task {self._info.id}", classes="task-header")
            yield Label(self._info.description, markup=False)

            status = STATUS_TITLES.get(self._info.status, self._info.status.upper())
            yield Label(f"Status: {status}", classes=f"task-status status-{self._info.status}")

            yield TimestampsPanel(self._info)

        yield Footer()

    def action_back(self) -> None:
        """Go back to the board."""
        self.app.pop_screen()

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()

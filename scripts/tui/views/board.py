"""Main board view: one column per status."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Label

from task_registry import STATUSES
from tui.providers import BoardState
from tui.views.widgets import StatusColumn, SummaryPanel


class BoardScreen(Screen):
    """Kanban-style board of the tasks file."""

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
    ]

    DEFAULT_CSS = """
    BoardScreen {
        layout: vertical;
    }

    #summary-row {
        height: auto;
        padding: 0 1;
    }

    #columns {
        height: 1fr;
        padding: 0 1;
    }

    #columns StatusColumn {
        width: 1fr;
    }

    .no-state {
        text-align: center;
        margin: 2;
        color: $warning;
    }
    """

    def __init__(self, state: BoardState | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state = state

    def compose(self) -> ComposeResult:
        yield Header()

        if not self._state:
            yield Label(
                "No tasks file found, or it could not be read.\n\n"
                "Run 'task-cli add <description>' to create one.",
                classes="no-state",
            )
            yield Footer()
            return

        with Container(id="summary-row"):
            yield SummaryPanel(self._state)

        with Horizontal(id="columns"):
            for status in STATUSES:
                yield StatusColumn(status, self._state.by_status(status), id=f"column-{status}")

        yield Footer()

    def action_refresh(self) -> None:
        """Reload the tasks file."""
        self.app.refresh_state()

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()

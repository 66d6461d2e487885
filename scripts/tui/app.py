"""
Task board application.

Main entry point for the terminal user interface.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure scripts directory is in path
SCRIPT_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from textual.app import App  # noqa: E402
from textual.binding import Binding  # noqa: E402

from tui.providers import BoardState  # noqa: E402
from tui.task_provider import FileTaskProvider  # noqa: E402
from tui.views.board import BoardScreen  # noqa: E402
from tui.views.task_detail import TaskDetailScreen  # noqa: E402

# Auto-refresh interval in seconds
AUTO_REFRESH_INTERVAL = 5.0


class TaskBoardApp(App):
    """Read-only board over a tasks file."""

    TITLE = "Tasks"
    SUB_TITLE = "Board"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("a", "toggle_auto_refresh", "Auto-Refresh", show=True),
        Binding("d", "toggle_theme", "Dark/Light", show=True),
    ]

    def __init__(
        self,
        tasks_file: Path | None = None,
        auto_refresh: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._provider = FileTaskProvider(tasks_file)
        self._state: BoardState | None = None
        self._auto_refresh = auto_refresh
        self._refresh_timer = None
        self._last_checksum: str | None = None

    @property
    def board_state(self) -> BoardState | None:
        return self._state

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self._state = self._provider.load()
        if self._state:
            self._last_checksum = self._state.checksum
        self.push_screen(BoardScreen(self._state))

        if self._auto_refresh:
            self._start_auto_refresh()

    def _start_auto_refresh(self) -> None:
        """Start the auto-refresh timer."""
        self._refresh_timer = self.set_interval(
            AUTO_REFRESH_INTERVAL,
            self._check_for_updates,
        )

    def _stop_auto_refresh(self) -> None:
        """Stop the auto-refresh timer."""
        if self._refresh_timer:
            self._refresh_timer.stop()
            self._refresh_timer = None

    def _check_for_updates(self) -> None:
        """Re-render the board if the tasks file content changed."""
        new_state = self._provider.load()
        if not new_state:
            return

        if new_state.checksum != self._last_checksum:
            self._last_checksum = new_state.checksum
            self._state = new_state
            # Only refresh if we're on the board
            if isinstance(self.screen, BoardScreen):
                self.switch_screen(BoardScreen(self._state))

    def refresh_state(self) -> None:
        """Reload the tasks file and redraw the board."""
        self._state = self._provider.load()
        if self._state:
            self._last_checksum = self._state.checksum
        if isinstance(self.screen, BoardScreen):
            self.switch_screen(BoardScreen(self._state))

    def show_task_detail(self, task_id: int) -> None:
        """Show detail screen for a specific task."""
        if not self._state:
            return
        task = self._state.get(task_id)
        if task:
            self.push_screen(TaskDetailScreen(task))

    def action_toggle_theme(self) -> None:
        """Switch between the dark and light themes."""
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    def action_toggle_auto_refresh(self) -> None:
        """Toggle auto-refresh on/off."""
        self._auto_refresh = not self._auto_refresh
        if self._auto_refresh:
            self._start_auto_refresh()
            self.notify("Auto-refresh enabled")
        else:
            self._stop_auto_refresh()
            self.notify("Auto-refresh disabled")

    def action_refresh(self) -> None:
        """Refresh the current view."""
        self.refresh_state()


def run(tasks_file: Path | None = None, auto_refresh: bool = True) -> None:
    """Run the board application."""
    app = TaskBoardApp(tasks_file=tasks_file, auto_refresh=auto_refresh)
    app.run()


if __name__ == "__main__":
    run(Path(sys.argv[1]) if len(sys.argv) > 1 else None)

"""Tests for task_cli.py - command dispatch and the load/run/save cycle."""

import json
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import task_cli
from task_cli import EXIT_ERROR, EXIT_OK, EXIT_STORAGE, main, parse_args


@pytest.fixture
def tasks_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command against a temporary tasks file."""
    import task_store

    path = tmp_path / "tasks.json"
    monkeypatch.setattr(task_store, "TASKS_FILE", path)
    return path


def run(*argv: str) -> int:
    return main(list(argv))


def stored(path: Path) -> list[dict]:
    return json.loads(path.read_text())


class TestParseArgs:
    """Tests for argument parsing."""

    def test_command_and_args(self) -> None:
        opts = parse_args(["update", "3", "new", "text"])

        assert opts.command == "update"
        assert opts.args == ["3", "new", "text"]
        assert opts.file is None

    def test_file_option(self, tmp_path: Path) -> None:
        opts = parse_args(["--file", str(tmp_path / "t.json"), "list"])

        assert opts.file == tmp_path / "t.json"
        assert opts.command == "list"

    def test_no_command(self) -> None:
        opts = parse_args([])

        assert opts.command is None
        assert opts.args == []

    def test_options_after_command_belong_to_command(self) -> None:
        opts = parse_args(["list", "done", "--json"])

        assert opts.args == ["done", "--json"]


class TestAddCommand:
    """Tests for `add`."""

    def test_add_prints_id(self, tasks_file: Path, capsys) -> None:
        assert run("add", "Buy milk") == EXIT_OK

        assert "Task added successfully (ID: 1)" in capsys.readouterr().out
        (record,) = stored(tasks_file)
        assert record["description"] == "Buy milk"
        assert record["status"] == "todo"
        assert record["createdAt"] == record["updatedAt"]

    def test_multi_word_description_is_joined(self, tasks_file: Path) -> None:
        run("add", "Buy", "oat", "milk")

        assert stored(tasks_file)[0]["description"] == "Buy oat milk"

    def test_missing_description(self, tasks_file: Path, capsys) -> None:
        assert run("add") == EXIT_ERROR

        assert "Usage: task-cli add <description>" in capsys.readouterr().out
        assert stored(tasks_file) == []

    def test_first_run_announces_new_file(self, tasks_file: Path, capsys) -> None:
        run("add", "A")

        assert "Creating new task file" in capsys.readouterr().err

    def test_id_after_delete(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        run("add", "B")
        run("delete", "1")
        capsys.readouterr()

        run("add", "C")

        assert "(ID: 3)" in capsys.readouterr().out


class TestListCommand:
    """Tests for `list`."""

    def test_lists_all_tasks(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        run("add", "B")
        capsys.readouterr()

        assert run("list") == EXIT_OK

        out = capsys.readouterr().out
        assert "Task ID: 1" in out
        assert "Description: B" in out
        assert out.count("=" * 36) == 2

    def test_filter(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        run("add", "B")
        run("mark-done", "2")
        capsys.readouterr()

        run("list", "done")

        out = capsys.readouterr().out
        assert "Description: B" in out
        assert "Description: A" not in out

    def test_filter_with_no_match_prints_nothing(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        capsys.readouterr()

        assert run("list", "in-progress") == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_invalid_filter(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        capsys.readouterr()

        assert run("list", "finished") == EXIT_ERROR

        out = capsys.readouterr().out
        assert out.strip() == "Invalid option for list command: finished"

    def test_extra_arguments_are_rejected(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        run("mark-done", "1")
        capsys.readouterr()

        assert run("list", "done", "extra", "junk") == EXIT_ERROR

        out = capsys.readouterr().out
        assert out.strip() == "Invalid option for list command: extra junk"

    def test_json_output(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        run("add", "B")
        run("mark-in-progress", "1")
        capsys.readouterr()

        run("list", "in-progress", "--json")

        data = json.loads(capsys.readouterr().out)
        assert [t["id"] for t in data] == [1]
        assert data[0]["status"] == "in-progress"

    def test_plain_output_has_no_color_codes(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        capsys.readouterr()

        run("list")

        assert "\033[" not in capsys.readouterr().out


class TestMutatingCommands:
    """Tests for update, delete and the mark-* commands."""

    def test_update(self, tasks_file: Path, capsys) -> None:
        run("add", "Old")
        created = stored(tasks_file)[0]["createdAt"]
        capsys.readouterr()

        assert run("update", "1", "New", "text") == EXIT_OK

        assert "Task updated successfully." in capsys.readouterr().out
        record = stored(tasks_file)[0]
        assert record["description"] == "New text"
        assert record["createdAt"] == created
        assert record["updatedAt"] >= created

    def test_update_missing_description(self, tasks_file: Path, capsys) -> None:
        run("add", "Old")
        capsys.readouterr()

        assert run("update", "1") == EXIT_ERROR
        assert "Usage: task-cli update" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "command,expected",
        [
            ("mark-in-progress", "in-progress"),
            ("mark-done", "done"),
            ("mark-todo", "todo"),
        ],
    )
    def test_mark_commands(self, tasks_file: Path, capsys, command: str, expected: str) -> None:
        run("add", "A")
        capsys.readouterr()

        assert run(command, "1") == EXIT_OK

        assert f"Task marked as {expected} successfully." in capsys.readouterr().out
        assert stored(tasks_file)[0]["status"] == expected

    def test_generic_mark(self, tasks_file: Path) -> None:
        run("add", "A")

        assert run("mark", "1", "done") == EXIT_OK
        assert stored(tasks_file)[0]["status"] == "done"

    def test_generic_mark_rejects_unknown_status(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        capsys.readouterr()

        assert run("mark", "1", "archived") == EXIT_ERROR
        assert "Invalid status: archived" in capsys.readouterr().out
        assert stored(tasks_file)[0]["status"] == "todo"

    @pytest.mark.parametrize(
        "argv",
        [
            ("delete", "9"),
            ("mark-done", "9"),
            ("mark-in-progress", "9"),
            ("update", "9", "text"),
        ],
    )
    def test_not_found(self, tasks_file: Path, capsys, argv: tuple[str, ...]) -> None:
        run("add", "A")
        capsys.readouterr()

        assert run(*argv) == EXIT_ERROR
        assert capsys.readouterr().out.strip() == "Task not found: 9"

    def test_non_numeric_id(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        capsys.readouterr()

        assert run("delete", "abc") == EXIT_ERROR
        assert "Invalid task id: abc" in capsys.readouterr().out
        assert len(stored(tasks_file)) == 1

    def test_missing_id(self, tasks_file: Path, capsys) -> None:
        assert run("delete") == EXIT_ERROR
        assert "Usage: task-cli delete <id>" in capsys.readouterr().out


class TestSummaryCommand:
    """Tests for `summary`."""

    def test_counts(self, tasks_file: Path, capsys) -> None:
        run("add", "A")
        run("add", "B")
        run("mark-done", "2")
        capsys.readouterr()

        assert run("summary") == EXIT_OK

        out = capsys.readouterr().out
        assert "Tasks: 2" in out
        assert "todo: 1" in out
        assert "done: 1" in out


class TestInvalidCommand:
    """Tests for unknown or missing commands."""

    @pytest.mark.parametrize("argv", [("frobnicate",), ()])
    def test_invalid_command(self, tasks_file: Path, capsys, argv: tuple[str, ...]) -> None:
        assert run(*argv) == EXIT_ERROR
        assert capsys.readouterr().out.strip() == "Invalid command"

    def test_invalid_command_still_persists(self, tasks_file: Path) -> None:
        run("frobnicate")

        assert tasks_file.exists()
        assert stored(tasks_file) == []


class TestStorageFailures:
    """Tests for fatal load/save errors."""

    def test_corrupt_file_aborts_without_saving(self, tasks_file: Path, capsys) -> None:
        tasks_file.write_text("[{]")

        assert run("add", "A") == EXIT_STORAGE

        err = capsys.readouterr().err
        assert err.startswith("Error: Invalid JSON")
        assert tasks_file.read_text() == "[{]"

    def test_undecodable_file_aborts_without_saving(self, tasks_file: Path, capsys) -> None:
        tasks_file.write_bytes(b"[\xff\xfe]")

        assert run("list") == EXIT_STORAGE

        assert "not valid UTF-8" in capsys.readouterr().err
        assert tasks_file.read_bytes() == b"[\xff\xfe]"

    def test_save_failure_is_reported(
        self, tasks_file: Path, capsys, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail_save(tasks, path=None):
            raise PermissionError("read-only file system")

        monkeypatch.setattr(task_cli.task_store, "save_tasks", fail_save)
        tasks_file.write_text("[]")

        assert run("add", "A") == EXIT_STORAGE

        captured = capsys.readouterr()
        assert "Task added successfully" in captured.out
        assert "could not save tasks" in captured.err
        assert "read-only file system" in captured.err

    def test_file_option(self, tmp_path: Path) -> None:
        path = tmp_path / "work" / "todo.json"
        path.parent.mkdir()

        assert run("--file", str(path), "add", "A") == EXIT_OK
        assert stored(path)[0]["description"] == "A"


class TestBoardCommand:
    """Tests for `board`."""

    def test_board_does_not_rewrite_file(
        self, tasks_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import tui.app

        opened = []
        monkeypatch.setattr(tui.app, "run", lambda tasks_file: opened.append(tasks_file))
        tasks_file.write_text("[]")
        before = tasks_file.stat().st_mtime_ns

        assert run("board") == EXIT_OK

        assert opened == [tasks_file]
        assert tasks_file.stat().st_mtime_ns == before


class TestScenario:
    """The full lifecycle through the command line."""

    def test_buy_milk(self, tasks_file: Path, capsys) -> None:
        assert run("add", "Buy milk") == EXIT_OK
        assert run("mark-in-progress", "1") == EXIT_OK
        capsys.readouterr()

        run("list", "in-progress")
        out = capsys.readouterr().out
        assert out.count("Task ID:") == 1
        assert "Description: Buy milk" in out

        assert run("mark-done", "1") == EXIT_OK
        assert stored(tasks_file)[0]["status"] == "done"

        assert run("delete", "1") == EXIT_OK
        assert stored(tasks_file) == []
        capsys.readouterr()

        assert run("delete", "1") == EXIT_ERROR
        assert "Task not found: 1" in capsys.readouterr().out

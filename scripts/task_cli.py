#!/usr/bin/env python3
"""
Task Tracker CLI

Track short text tasks in a local JSON file. Each run loads the whole
collection, performs one command and writes the collection back.

Usage:
    task-cli [--file PATH] <command> [args...]

Commands:
    add <description>              Add a task (status: todo)
    list [todo|in-progress|done]   List tasks, optionally by status
         [--json]                  Print tasks as a JSON array
    update <id> <description>      Replace a task's description
    delete <id>                    Remove a task
    mark-in-progress <id>          Set status to in-progress
    mark-done <id>                 Set status to done
    mark-todo <id>                 Set status back to todo
    mark <id> <status>             Set any status
    summary                        Show task counts per status
    board                          Open the interactive board (Textual)

Exit codes:
    0  success
    1  unknown command, bad argument or task not found
    2  tasks file unreadable, corrupt or unwritable
"""

import argparse
import json
import sys
from pathlib import Path

import task_store
from task_format import format_summary, format_task
from task_registry import InvalidArgumentError, TaskError, TaskRegistry

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_STORAGE = 2

# The board only reads the file; saving after it closes would overwrite
# edits made from other terminals while it was open.
READ_ONLY_COMMANDS = {"board"}


def _split_id(args: list[str], usage: str) -> tuple[str, list[str]]:
    if not args:
        raise InvalidArgumentError(f"Usage: task-cli {usage}")
    return args[0], args[1:]


def cmd_add(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
    if not args:
        raise InvalidArgumentError("Usage: task-cli add <description>")
    task = registry.add(" ".join(args))
    print(f"Task added successfully (ID: {task.id})")
    return EXIT_OK


def cmd_list(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
    as_json = "--json" in args
    options = [a for a in args if a != "--json"]
    if len(options) > 1:
        raise InvalidArgumentError(f"Invalid option for list command: {' '.join(options[1:])}")
    status = options[0] if options else None

    try:
        tasks = registry.list_tasks(status)
    except InvalidArgumentError:
        raise InvalidArgumentError(f"Invalid option for list command: {status}") from None

    if as_json:
        print(json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False))
        return EXIT_OK

    color = sys.stdout.isatty()
    for task in tasks:
        print(format_task(task, color=color))
    return EXIT_OK


def cmd_update(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
    usage = "update <id> <description>"
    task_id, rest = _split_id(args, usage)
    if not rest:
        raise InvalidArgumentError(f"Usage: task-cli {usage}")
    registry.update_task(task_id, " ".join(rest))
    print("Task updated successfully.")
    return EXIT_OK


def cmd_delete(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
    task_id, _ = _split_id(args, "delete <id>")
    registry.delete_task(task_id)
    print("Task deleted successfully.")
    return EXIT_OK


def _set_status(registry: TaskRegistry, task_id: str, status: str) -> int:
    task = registry.change_status(task_id, status)
    print(f"Task marked as {task.status} successfully.")
    return EXIT_OK


def mark_as(status: str):
    """Build a handler for a fixed-status command such as mark-done."""

    def handler(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
        task_id, _ = _split_id(args, f"mark-{status} <id>")
        return _set_status(registry, task_id, status)

    return handler


def cmd_mark(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
    usage = "mark <id> <todo|in-progress|done>"
    task_id, rest = _split_id(args, usage)
    if not rest:
        raise InvalidArgumentError(f"Usage: task-cli {usage}")
    return _set_status(registry, task_id, rest[0])


def cmd_summary(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
    print(f"Tasks: {len(registry)}")
    print(format_summary(registry.count_by_status()))
    return EXIT_OK


def cmd_board(registry: TaskRegistry, args: list[str], tasks_file: Path) -> int:
    from tui.app import run

    run(tasks_file=tasks_file)
    return EXIT_OK


COMMANDS = {
    "add": cmd_add,
    "list": cmd_list,
    "update": cmd_update,
    "delete": cmd_delete,
    "mark-in-progress": mark_as("in-progress"),
    "mark-done": mark_as("done"),
    "mark-todo": mark_as("todo"),
    "mark": cmd_mark,
    "summary": cmd_summary,
    "board": cmd_board,
}


def dispatch(registry: TaskRegistry, command: str | None, args: list[str], tasks_file: Path) -> int:
    """Run one command. Lookup and argument errors are reported, not raised."""
    handler = COMMANDS.get(command)
    if handler is None:
        print("Invalid command")
        return EXIT_ERROR

    try:
        return handler(registry, args, tasks_file)
    except TaskError as e:
        print(e)
        return EXIT_ERROR


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="task-cli",
        description="Track tasks in a local JSON file",
        epilog=__doc__.split("Commands:", 1)[1],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--file",
        type=Path,
        help="Path to the tasks file (default: ./tasks.json)",
    )
    parser.add_argument("command", nargs="?", help="Command to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Command arguments")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    opts = parse_args(argv)
    tasks_file = opts.file or task_store.TASKS_FILE

    try:
        tasks = task_store.load_tasks(tasks_file)
    except (task_store.CorruptStateError, OSError) as e:
        # Nothing to fall back on; leave the file as it is.
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_STORAGE

    registry = TaskRegistry(tasks)
    code = dispatch(registry, opts.command, opts.args, tasks_file)

    if opts.command in READ_ONLY_COMMANDS:
        return code

    # The collection is written back after every other command, including
    # listings and unknown commands.
    try:
        task_store.save_tasks(registry.tasks, tasks_file)
    except OSError as e:
        print(f"Error: could not save tasks to {tasks_file}: {e}", file=sys.stderr)
        return EXIT_STORAGE

    return code


if __name__ == "__main__":
    sys.exit(main())

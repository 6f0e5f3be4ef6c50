"""todo command-line interface."""

import argparse
import logging
import os
import sys
from typing import Callable, Dict, Iterable, List, Optional

from .config import get_settings
from .core import parse_task_id
from .errors import AlreadyCompleted, InvalidArgument, SaveError, TodoError
from .logging_setup import level_from_name, setup_logging
from .manager import TodoManager
from .models import Task
from .storage import FileStorage

logger = logging.getLogger(__name__)

HELP_TEXT = """
CLI Todo Application - Help

Usage: todo [-f FILE] [-v] <command> [arguments]

Commands:
  add <description>    Add a new todo task
  list                 Display all current tasks with their status
  complete <task_id>   Mark a task as complete
  remove <task_id>     Remove a task from the list
  path                 Show the absolute path to the tasks file
  help                 Show this help message

Options:
  -f, --file FILE      Tasks file (default: $TODO_FILE or ./todos.txt)
  -v, --verbose        Log more to stderr (repeat for debug output)

Examples:
  todo add "Buy groceries"
  todo list
  todo complete 1
  todo remove 2
"""

HELP_COMMANDS = ("help", "--help", "-h")
DONE_MARK = "✓"
OPEN_MARK = "○"


def print_help() -> None:
    print(HELP_TEXT)


def _display(text: str) -> str:
    """Undecodable bytes kept from the file show as replacement characters."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def print_list(tasks: Iterable[Task]) -> None:
    """Print the enumerated listing, or a hint when there is nothing to show."""
    tasks = list(tasks)
    if not tasks:
        print("No tasks found. Add a task with 'add <description>'")
        return

    print("\n=== Todo List ===")
    for t in tasks:
        mark = DONE_MARK if t.completed else OPEN_MARK
        print(f"{t.id}. [{mark}] {_display(t.description)}")
    print()


def require_task_id(command: str, words: List[str]) -> int:
    if not words:
        raise InvalidArgument(
            f"Please provide a task ID.\nUsage: todo {command} <task_id>"
        )
    task_id = parse_task_id(words[0])
    if task_id is None:
        raise InvalidArgument("Task ID must be a number.")
    return task_id


def cmd_add(manager: TodoManager, words: List[str]) -> None:
    if not words:
        raise InvalidArgument(
            "Please provide a task description.\nUsage: todo add <task description>"
        )
    task_id = manager.add(" ".join(words))
    print(f"Task added successfully with ID: {task_id}")


def cmd_list(manager: TodoManager, words: List[str]) -> None:
    print_list(manager.list_tasks())


def cmd_complete(manager: TodoManager, words: List[str]) -> None:
    task_id = require_task_id("complete", words)
    manager.complete(task_id)
    print(f"Task {task_id} marked as completed.")


def cmd_remove(manager: TodoManager, words: List[str]) -> None:
    task_id = require_task_id("remove", words)
    manager.remove(task_id)
    print(f"Task {task_id} removed successfully.")


def cmd_path(manager: TodoManager, words: List[str]) -> None:
    print(os.path.abspath(manager.storage.path))


COMMANDS: Dict[str, Callable[[TodoManager, List[str]], None]] = {
    "add": cmd_add,
    "list": cmd_list,
    "complete": cmd_complete,
    "remove": cmd_remove,
    "path": cmd_path,
}


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser.

    Sub-commands are dispatched by hand so that unknown commands print the
    usage text instead of an argparse error.
    """
    p = argparse.ArgumentParser(
        prog="todo", description="A small todo list kept in a text file.", add_help=False
    )
    p.add_argument("-h", "--help", action="store_true", dest="help")
    p.add_argument(
        "-f",
        "--file",
        default=None,
        help="Path to tasks file (default: $TODO_FILE or todos.txt)",
    )
    p.add_argument(
        "-v", "--verbose", action="count", default=0, help="More log output on stderr"
    )
    p.add_argument("command", nargs="?")
    p.add_argument("args", nargs=argparse.REMAINDER)
    return p


def _console_level(configured: str, verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return level_from_name(configured)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    setup_logging(
        console_level=_console_level(settings.log_level, args.verbose),
        log_file=settings.log_file,
    )

    command = (args.command or "").lower()
    if args.help or not command or command in HELP_COMMANDS:
        print_help()
        return 0

    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Unknown command: {command}")
        print_help()
        return 0

    try:
        manager = TodoManager(FileStorage(args.file or settings.tasks_path))
        handler(manager, args.args)
    except SaveError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    except AlreadyCompleted as exc:
        print(exc)
    except TodoError as exc:
        print(f"Error: {exc}")
    except Exception as exc:
        logger.exception("Unexpected failure running %r", command)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

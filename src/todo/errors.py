"""User-facing failures raised by the manager and the command layer."""

from typing import Optional


class TodoError(Exception):
    """Base class for expected, reportable failures."""


class EmptyDescription(TodoError):
    def __init__(self) -> None:
        super().__init__("Task description cannot be empty.")


class NotFound(TodoError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found.")
        self.task_id = task_id


class AlreadyCompleted(TodoError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} is already completed.")
        self.task_id = task_id


class InvalidArgument(TodoError):
    """A command argument was missing or not usable."""


class SaveError(TodoError):
    """The change was applied in memory but could not be written to disk.

    ``task_id`` names the task the failed operation touched, when there is one.
    """

    def __init__(self, task_id: Optional[int] = None) -> None:
        super().__init__("Unable to save tasks to file.")
        self.task_id = task_id

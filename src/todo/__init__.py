"""todo - a small command-line todo list kept in a text file."""

__version__ = "1.0.0"

from .models import Task, MalformedRecord, DEFAULT_PATH
from .storage import FileStorage, TaskStorage, read_file, write_file
from .errors import (
    TodoError,
    EmptyDescription,
    NotFound,
    AlreadyCompleted,
    InvalidArgument,
    SaveError,
)
from .manager import TodoManager

__all__ = [
    "Task",
    "MalformedRecord",
    "DEFAULT_PATH",
    "FileStorage",
    "TaskStorage",
    "read_file",
    "write_file",
    "TodoError",
    "EmptyDescription",
    "NotFound",
    "AlreadyCompleted",
    "InvalidArgument",
    "SaveError",
    "TodoManager",
]

import logging
from pathlib import Path

import pytest

from todo.manager import TodoManager
from todo.storage import FileStorage

from .fakes import MemoryStorage


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    """A tasks file location that does not exist yet."""
    return tmp_path / "todos.txt"


@pytest.fixture()
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def manager(memory_storage: MemoryStorage) -> TodoManager:
    return TodoManager(memory_storage)


@pytest.fixture()
def file_manager(tasks_path: Path) -> TodoManager:
    """Manager wired to a real file under tmp_path."""
    return TodoManager(FileStorage(str(tasks_path)))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TODO_FILE", "TODO_LOG_LEVEL", "TODO_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.captureWarnings(False)

"""File I/O for todo lists."""

import logging
import os
import shutil
import tempfile
from typing import List, Optional, Protocol, Tuple

from .models import Task, MalformedRecord, STATE_RE, DEFAULT_PATH

logger = logging.getLogger(__name__)


def read_file(path: str) -> Tuple[int, List[Task]]:
    """Load a todo file.

    Returns a tuple of:
      - last_id: highest id ever assigned; the state header or the highest id
        in the file, whichever is larger (0 for an empty list)
      - tasks: Task objects in file order

    A missing file is an empty list. Blank lines, comments and lines that do
    not parse are skipped.
    """
    last_id = 0
    tasks: List[Task] = []

    try:
        f = open(path, "r", encoding="utf-8", errors="surrogateescape")
    except FileNotFoundError:
        logger.debug("No task file at %s yet", path)
        return 0, []

    with f:
        for lineno, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            if line.startswith("#"):
                m = STATE_RE.match(line)
                if m:
                    last_id = int(m.group(1))
                continue
            try:
                tasks.append(Task.from_line(line))
            except MalformedRecord as exc:
                logger.debug("Dropping line %d of %s: %s", lineno, path, exc)

    logger.debug("Loaded %d task(s) from %s", len(tasks), path)
    return max([last_id] + [t.id for t in tasks]), tasks


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_file(path: str, tasks: List[Task], last_id: int = 0) -> None:
    """Rewrite the file from in-memory state.

    The state header is only written when ``last_id`` is above every id still
    in the list. Data goes to a temporary file next to ``path`` which then
    replaces it, so a failed write leaves the old file untouched.
    """
    highest = max((t.id for t in tasks), default=0)
    directory = os.path.dirname(os.path.abspath(path))

    fd, tmp_path = tempfile.mkstemp(
        prefix=".%s." % os.path.basename(path), suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(
            fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n"
        ) as f:
            if last_id > highest:
                f.write(f"# TODO_STATE last_id={last_id}\n")
            for t in tasks:
                f.write(t.to_line() + "\n")
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise

    logger.debug("Saved %d task(s) to %s", len(tasks), path)


class TaskStorage(Protocol):
    """What the manager needs from a persistence backend."""

    def load(self) -> Tuple[int, List[Task]]: ...

    def save(self, tasks: List[Task], last_id: int = 0) -> None: ...


class FileStorage:
    """TaskStorage backed by a single plain-text file."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or DEFAULT_PATH

    def load(self) -> Tuple[int, List[Task]]:
        return read_file(self.path)

    def save(self, tasks: List[Task], last_id: int = 0) -> None:
        write_file(self.path, tasks, last_id)

    def __repr__(self) -> str:
        return f"FileStorage({self.path!r})"

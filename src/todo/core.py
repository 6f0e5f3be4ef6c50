"""Todo list helpers (pure functions, no I/O)."""

import re
from typing import List, Optional

from .models import Task

TASK_ID_RE = re.compile(r"^\s*[+-]?\d+\s*$")


def clean_description(text: str) -> str:
    """Trim surrounding whitespace; an empty result means the text is unusable."""
    return text.strip()


def next_id(tasks: List[Task], last_id: int = 0) -> int:
    """Return the id for a new task.

    One above both the highest id present and the highest id ever handed out,
    so ids freed by a removal are never reused.
    """
    highest = max((t.id for t in tasks), default=0)
    return max(highest, last_id) + 1


def find_index(tasks: List[Task], task_id: int) -> Optional[int]:
    """Return the 0-based position of the task with ``task_id``, or None."""
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return None


def parse_task_id(raw: str) -> Optional[int]:
    """Parse a command-line task id; None when it is not a whole number."""
    if not TASK_ID_RE.match(raw):
        return None
    return int(raw)

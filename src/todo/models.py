"""Data models and constants for todo."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

DEFAULT_PATH = "todos.txt"
SEPARATOR = "|"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

STATE_RE = re.compile(r"^#\s*TODO_STATE\s+last_id=(\d+)\s*$")

_ESCAPES = {"\\": "\\\\", SEPARATOR: "\\|", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", SEPARATOR: SEPARATOR, "n": "\n", "r": "\r"}


class MalformedRecord(ValueError):
    """A stored line that cannot be turned back into a Task."""


def now_timestamp() -> str:
    """Current local time in the on-disk timestamp format."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def escape_field(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def split_fields(line: str) -> List[str]:
    """Split a record on unescaped separators, unescaping each field.

    An unknown escape keeps its backslash; a trailing lone backslash is kept as is.
    """
    fields: List[str] = []
    current: List[str] = []
    chars = iter(line)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                current.append(ch)
            elif nxt in _UNESCAPES:
                current.append(_UNESCAPES[nxt])
            else:
                current.append(ch + nxt)
        elif ch == SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


@dataclass
class Task:
    """A single todo item.

    ``completed_at`` stays empty until :meth:`mark_complete` runs and is set
    exactly once afterwards.
    """

    id: int
    description: str
    completed: bool = False
    created_at: str = field(default_factory=now_timestamp)
    completed_at: str = ""

    @classmethod
    def create(cls, task_id: int, description: str) -> "Task":
        return cls(id=task_id, description=description)

    def mark_complete(self) -> None:
        if self.completed:
            return
        self.completed = True
        self.completed_at = now_timestamp()

    def to_line(self) -> str:
        """Serialize as ``id|description|0/1|created_at|completed_at``."""
        return SEPARATOR.join(
            [
                str(self.id),
                escape_field(self.description),
                "1" if self.completed else "0",
                self.created_at,
                self.completed_at,
            ]
        )

    @classmethod
    def from_line(cls, line: str) -> "Task":
        """Parse a stored line; raises MalformedRecord when it is unusable.

        Four fields mean no completion time; anything past the fifth is ignored.
        """
        parts = split_fields(line)
        if len(parts) < 4:
            raise MalformedRecord(f"expected at least 4 fields, got {len(parts)}")
        try:
            task_id = int(parts[0])
        except ValueError:
            raise MalformedRecord(f"invalid task id: {parts[0]!r}") from None
        return cls(
            id=task_id,
            description=parts[1],
            completed=parts[2] == "1",
            created_at=parts[3],
            completed_at=parts[4] if len(parts) > 4 else "",
        )

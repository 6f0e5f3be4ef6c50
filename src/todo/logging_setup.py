"""Logging configuration for the command-line entry point."""

import logging
import sys
from typing import Optional


class _ConsoleNoiseFilter(logging.Filter):
    """Keep todo's own records; other libraries only reach the console at ERROR."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todo" or record.name.startswith("todo."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    console_level: int = logging.WARNING, log_file: Optional[str] = None
) -> None:
    """Configure the root logger with a stderr handler and an optional file.

    Call once, before the first record is emitted. Existing root handlers are
    replaced so repeated calls do not duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default

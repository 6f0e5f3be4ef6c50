"""Settings read from environment variables.

Every variable is optional; with none set the tasks live in ``todos.txt`` in
the working directory and only warnings reach the console.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .models import DEFAULT_PATH

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return os.path.expanduser(raw.strip())


@dataclass(frozen=True)
class Settings:
    tasks_path: str
    log_level: str
    log_file: Optional[str]


def get_settings() -> Settings:
    return Settings(
        tasks_path=_env_path(_k("FILE")) or DEFAULT_PATH,
        log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
        log_file=_env_path(_k("LOG_FILE")),
    )

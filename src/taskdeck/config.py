# src/taskdeck/config.py

"""
Settings loaded from environment variables (+ optional .env).

One Settings object for the whole CLI. Command-line flags override
whatever is configured here.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKDECK"

_VIEWS = ("list", "kanban")
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    seed_file: Optional[Path] = None
    color: bool = True
    view: str = "list"
    log_level: str = "WARNING"
    log_file: Optional[Path] = None


def load_settings(*, dotenv: bool = True) -> Settings:
    """
    Read settings from the environment.

    Unknown view names and log levels fall back to the defaults.
    """
    if dotenv:
        load_dotenv(override=False)

    view = _env(_k("VIEW"), "list").lower()
    if view not in _VIEWS:
        view = "list"

    level = _env(_k("LOG_LEVEL"), "WARNING").upper()
    if level not in _LEVELS:
        level = "WARNING"

    return Settings(
        seed_file=_env_path(_k("SEED_FILE")),
        color=_env_bool(_k("COLOR"), True),
        view=view,
        log_level=level,
        log_file=_env_path(_k("LOG_FILE")),
    )

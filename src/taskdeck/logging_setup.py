# src/taskdeck/logging_setup.py

"""
Logging configuration for the CLI.

Console output stays quiet by default: taskdeck records at the chosen
level, third-party records only at ERROR+. An optional log file gets
everything.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep taskdeck logs; let other loggers through only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskdeck" or record.name.startswith("taskdeck."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    level: int | str = logging.WARNING,
    *,
    log_file: Optional[str | Path] = None,
) -> None:
    """
    Configure root logging with:
    - Console handler on stderr, filtered
    - File handler (optional) with full DEBUG output

    Safe to call more than once: existing handlers are replaced.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

"""Logging setup for the ``ads`` command and the library.

The library only ever logs through ``log``; handlers are attached by
``configure_logging`` when the CLI starts. Records go to stderr so that
results written to stdout stay machine-readable.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

log = logging.getLogger("AdsClient")

LOG_FORMAT = "%(asctime)s [%(levelabbr)s] %(message)s"
LOG_DATE_FORMAT = "%m-%d %H:%M:%S"


class _AbbrevLevelFormatter(logging.Formatter):
    """Formatter exposing a four-letter level name as ``levelabbr``."""

    ABBREVIATIONS = {"DEBUG": "DEBG", "WARNING": "WARN", "ERROR": "ERRO", "CRITICAL": "CRIT"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - stdlib method name
        record.levelabbr = self.ABBREVIATIONS.get(record.levelname, record.levelname[:4])
        return super().format(record)


def _action_log_path(log_dir: str, action: str) -> Path:
    """Return ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``, creating the folder."""
    folder = Path(log_dir or "log") / action
    folder.mkdir(parents=True, exist_ok=True)
    return folder / f"{action}_{datetime.now():%m%d%H%M%S}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Attach handlers to ``log``, replacing any from an earlier call.

    Output looks like ``10-19 14:02:11 [WARN] message``.

    Args:
        level: Console level name, e.g. ``DEBUG`` or ``WARNING``.
        action: Command name; selects the log file folder.
        log_to_file: Also write a DEBUG-level log file for this run.
        log_dir: Root folder for log files.
    """
    console_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO
    formatter = _AbbrevLevelFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    if log_to_file and action:
        file_handler = logging.FileHandler(_action_log_path(log_dir, action), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if len(handlers) > 1 else console_level)
    log.propagate = False

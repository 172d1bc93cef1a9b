"""
Logging configuration — central setup for the installer entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    PEPPEMON_LOG_LEVEL env var  >  WARNING (default)

Optional trace file via PEPPEMON_LOG_FILE / PEPPEMON_LOG_FILE_LEVEL.
``PEPPEMON_LOG_FILE=auto`` picks a unique ``peppemon-installer-*.log``
in the temp directory, beside the stderr capture logs of failed
commands, so a bug report can attach both.

Operator-facing progress is printed by the CLI, not logged; logging
carries the command-level trace behind it.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from collections.abc import Mapping
from pathlib import Path

# ── Env vars ────────────────────────────────────────────────────

LOG_LEVEL_VAR = "PEPPEMON_LOG_LEVEL"
LOG_FILE_VAR = "PEPPEMON_LOG_FILE"
LOG_FILE_LEVEL_VAR = "PEPPEMON_LOG_FILE_LEVEL"

AUTO_LOG_FILE = "auto"
RUN_LOG_PREFIX = "peppemon-installer-"

# ── Format strings ──────────────────────────────────────────────

# WARNING level — bare message; the CLI already prints the context
_FMT_MINIMAL = "%(message)s"

# INFO level — step transitions with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level — every command line, with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output — always full detail, dated
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> Path | None:
    """Configure Python logging for the installer process.

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ...).
        log_file: Optional trace file path, or ``"auto"`` for a unique
            file in the system temp directory.
        log_file_level: Optional separate level for the trace file.
            Defaults to the same as ``level``.

    Returns:
        Path of the trace file actually opened, else None. A file that
        cannot be opened is reported on the console and skipped.
    """
    numeric_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(numeric_level))

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level
    opened: Path | None = None

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        try:
            opened, handler = _file_handler(log_file, file_level)
        except OSError as exc:
            root.setLevel(numeric_level)
            logger.warning("Cannot open log file %s: %s", log_file, exc.strerror or exc)
        else:
            root.addHandler(handler)
            effective_level = min(effective_level, file_level)

    root.setLevel(effective_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False
    return opened


def setup_logging_from_env(env: Mapping[str, str]) -> Path | None:
    """Configure logging from the PEPPEMON_LOG_* variables."""
    return setup_logging(
        level=env.get(LOG_LEVEL_VAR, "WARNING"),
        log_file=env.get(LOG_FILE_VAR),
        log_file_level=env.get(LOG_FILE_LEVEL_VAR),
    )


def _console_handler(level: int) -> logging.Handler:
    if level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return console


def _file_handler(log_file: str, level: int) -> tuple[Path, logging.Handler]:
    """Open the trace file; ``auto`` means a fresh temp file per run."""
    if log_file.lower() == AUTO_LOG_FILE:
        fd, name = tempfile.mkstemp(prefix=RUN_LOG_PREFIX, suffix=".log")
        os.close(fd)
        path = Path(name)
    else:
        path = Path(log_file).expanduser()

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    return path, handler


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric

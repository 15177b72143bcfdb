"""Centralized logging configuration for battcat.

Usage in any module:
    from battcat.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Something happened")

The console shows ``LEVEL  scan.feeds: message`` on stderr, so tables printed
by the CLI on stdout stay clean. The log file keeps timestamps and full logger
names. ``battcat -v`` / ``-q`` adjust only the console.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from ..config.settings import LOG_FILE

ROOT_LOGGER = "battcat"

CONSOLE_FORMAT = "%(levelname)-7s %(short_name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"

_console: Optional[logging.Handler] = None


class ShortNameFormatter(logging.Formatter):
    """Adds ``short_name``: the logger name without the ``battcat.`` prefix."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(ROOT_LOGGER + "."):
            name = name[len(ROOT_LOGGER) + 1:]
        record.short_name = name
        return super().format(record)


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that backslash-escapes characters the console cannot encode.

    Catalog data carries currency signs and em-dashes.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record) + self.terminator
            try:
                self.stream.write(msg)
            except UnicodeEncodeError:
                encoding = getattr(self.stream, "encoding", None) or "utf-8"
                self.stream.write(msg.encode(encoding, errors="backslashreplace").decode(encoding))
            self.flush()
        except Exception:
            self.handleError(record)


def _level_from_env(default: int) -> int:
    raw = os.getenv("BATTCAT_LOG_LEVEL", "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def _file_handler(target: Path) -> Optional[logging.Handler]:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Read-only deployments (e.g. Streamlit Cloud) keep console logging only.
        return None
    handler = logging.FileHandler(target, encoding="utf-8", delay=True)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Attach the console and file handlers to the ``battcat`` logger once."""
    global _console
    if _console is not None:
        return

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)

    _console = SafeStreamHandler(sys.stderr)
    _console.setLevel(_level_from_env(level))
    _console.setFormatter(ShortNameFormatter(CONSOLE_FORMAT))
    root.addHandler(_console)

    handler = _file_handler(log_file or LOG_FILE)
    if handler is not None:
        root.addHandler(handler)


def set_console_level(level: int) -> None:
    """Change how much reaches stderr; the log file keeps DEBUG."""
    setup_logging()
    _console.setLevel(level)


def verbosity_level(verbose: int = 0, quiet: bool = False) -> int:
    """Map CLI flags to a console level: -q WARNING, default INFO, -v DEBUG."""
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return _level_from_env(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the ``battcat`` handlers on first use."""
    setup_logging()
    return logging.getLogger(name)

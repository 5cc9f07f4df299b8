"""Console logging helpers for applications embedding the session manager."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from mpris_session.config.settings import get_settings

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LIBRARY_LOGGER = "mpris_session"


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name with ANSI codes.

    Colour is only applied when the target stream is a TTY and the
    ``NO_COLOR`` environment variable is unset.
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str | None = DEFAULT_FORMAT,
        datefmt: str | None = DEFAULT_DATEFMT,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(fmt, datefmt)
        self._stream = stream

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stderr
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self._use_color():
            color = self.COLORS.get(record.levelno, "")
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(log_level: str | None = None, stream: TextIO | None = None) -> logging.Handler:
    """Attach a coloured console handler to the library logger.

    *log_level* defaults to ``Settings.log_level`` (``MPRIS_LOG_LEVEL``).
    Calling it again replaces the handler installed by the previous call.
    Returns the installed handler.
    """
    if log_level is None:
        log_level = get_settings().log_level
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)
    target = stream or sys.stderr

    logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_mpris_session_console", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(target)
    handler.setFormatter(ColoredFormatter(stream=target))
    handler._mpris_session_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(resolved_level)
    return handler

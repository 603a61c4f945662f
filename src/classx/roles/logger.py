"""
Logger role

A ready-made bundle of attributes giving any ClassX subclass a configured
stdlib logger:

    class YourApp(LoggerRole):
        def run(self):
            self.debug("debug!!")

    YourApp(logfile="log/debug.log", log_level="debug").run()

``logger`` is lazy: the handler (and any log file) is only opened on first
use, and at most once per instance. ``debug``/``info``/``warning``/``error``/
``critical``/``exception`` (plus ``warn`` and ``fatal``) are delegated to it.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Any, Optional

from classx.core.attributes import attribute
from classx.core.objects import ClassX

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# name -> (TimedRotatingFileHandler when, interval)
ROTATION_PERIODS = {
    "daily": ("D", 1),
    "weekly": ("W0", 1),
    "monthly": ("D", 30),
}

# Rotated files kept when rotating by size
ROTATE_BACKUP_COUNT = 7

LOGGER_METHODS = {
    "debug": "debug",
    "info": "info",
    "warning": "warning",
    "warn": "warning",
    "error": "error",
    "critical": "critical",
    "fatal": "critical",
    "exception": "exception",
}


class ToLogLevel:
    """Mixin for the ``log_level`` attribute object: ``attribute_of['log_level'].to_log_level()``."""

    def to_log_level(self, value: Optional[str] = None) -> int:
        name = str(self.get() if value is None else value).upper()  # type: ignore[attr-defined]
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
        return level

    to_int = to_log_level

    def __int__(self) -> int:
        return self.to_log_level()


def _is_level_name(value: Any) -> bool:
    return isinstance(value, str) and isinstance(logging.getLevelName(value.upper()), int)


def _is_log_destination(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike)) or hasattr(value, "write")


def _is_rotation(value: Any) -> bool:
    if isinstance(value, str):
        return value in ROTATION_PERIODS
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _rotation_from_string(value: str) -> Any:
    stripped = value.strip()
    if stripped.isdigit() and int(stripped) > 0:
        return int(stripped)
    return value


def _stderr(mine: Any) -> Any:
    return sys.stderr


def _build_handler(logfile: Any, rotate: Any) -> logging.Handler:
    if not isinstance(logfile, (str, os.PathLike)):
        return logging.StreamHandler(logfile)
    if rotate is None:
        return logging.FileHandler(logfile, encoding="utf-8")
    if isinstance(rotate, int):
        return RotatingFileHandler(logfile, maxBytes=rotate, backupCount=ROTATE_BACKUP_COUNT, encoding="utf-8")
    when, interval = ROTATION_PERIODS[rotate]
    return TimedRotatingFileHandler(logfile, when=when, interval=interval, encoding="utf-8")


def build_logger(mine: "LoggerRole") -> logging.Logger:
    """Default of the ``logger`` attribute, built from its sibling attributes."""
    progname = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "classx"
    # Standalone logger: owned by the instance, not registered in the logging manager
    log = logging.Logger(f"{progname}.{type(mine).__qualname__}")
    log.setLevel(mine.attribute_of["log_level"].to_log_level())
    handler = _build_handler(mine.logfile, mine.log_rotate)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(handler)
    return log


class LoggerRole(ClassX):
    """Attributes for a per-instance logger; subclass it to mix logging into a class."""

    logger = attribute(
        optional=True,
        lazy=True,
        default=build_logger,
        respond_to="log",
        handles=LOGGER_METHODS,
        no_cmd_option=True,
        description="logger built from log_level, logfile and log_rotate",
    )

    log_level = attribute(
        kind_of=str,
        optional=True,
        default="info",
        include=ToLogLevel,
        validate=_is_level_name,
        description="log_level (debug|info|warning|error|critical) (default info)",
    )

    logfile = attribute(
        optional=True,
        default=_stderr,
        validate=_is_log_destination,
        description="output logfile. (default STDERR)",
    )

    log_rotate = attribute(
        optional=True,
        validate=_is_rotation,
        coerce={str: _rotation_from_string},
        description="size in bytes or (daily|weekly|monthly) (default none)",
    )


__all__ = ["LoggerRole", "ToLogLevel", "build_logger"]

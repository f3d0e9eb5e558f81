"""Structured shell event logging.

Navigation, storage and session events are written as JSON lines to a rotating
file so a host can audit which redirects the guard issued and why.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog

from ..config.settings import LoggingSettings, settings

DEFAULT_LOG_FILE = "logs/shell-events.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
BACKUP_LOG_FILES = 5
EVENT_LOGGER_NAME = "freelance_shell.events"

_logger: Any = None


def event_log_path(config: Optional[LoggingSettings] = None) -> Path:
    file_path = (config or settings.logging).file_path
    return Path(file_path or DEFAULT_LOG_FILE).expanduser()


def _replace_handler(config: LoggingSettings) -> logging.Logger:
    stdlib_logger = logging.getLogger(EVENT_LOGGER_NAME)
    for handler in list(stdlib_logger.handlers):
        stdlib_logger.removeHandler(handler)
        handler.close()

    log_path = event_log_path(config)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=BACKUP_LOG_FILES,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(handler)
    stdlib_logger.setLevel(getattr(logging, config.level, logging.INFO))
    stdlib_logger.propagate = False
    return stdlib_logger


def configure_event_log(config: Optional[LoggingSettings] = None) -> Any:
    """(Re)bind shell events to the file named by ``config``."""
    global _logger
    _logger = structlog.wrap_logger(
        _replace_handler(config or settings.logging),
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return _logger


def log_shell_event(event: str, **payload: Any) -> None:
    """Emit a structured shell event."""
    logger = _logger if _logger is not None else configure_event_log()
    logger.info(event, **payload)

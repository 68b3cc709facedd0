"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "focusflow"
_LOG_FILE = "focusflow.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

# Overrides the DEBUG default, e.g. FOCUSFLOW_LOG_LEVEL=WARNING
ENV_LOG_LEVEL = "FOCUSFLOW_LOG_LEVEL"

_logger: logging.Logger | None = None


def _level_from_env() -> int:
    name = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.DEBUG
    return level if isinstance(level, int) else logging.DEBUG


def _file_handler() -> logging.handlers.RotatingFileHandler:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call.

    Timer transitions log at DEBUG, session logging failures at WARNING. Other
    handlers already attached to the ``focusflow`` logger (such as a test
    runner's capture handler) do not stop the log file from being installed.
    """
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_level_from_env())
    if not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers):
        logger.addHandler(_file_handler())
    logger.propagate = False

    _logger = logger
    return _logger

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .profiles import ensure_work_dirs


LOGGER_NAME = "forumflow"
LOG_LEVEL_ENV = "FORUMFLOW_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 2 * 1024 * 1024
LOG_FILE_BACKUPS = 3

_LOGGER: logging.Logger | None = None
_HANDLERS: list[logging.Handler] = []


def _resolve_level() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the shared ``forumflow`` logger, configuring it on first use.

    Records go to ``<work>/logs/app.log`` (rotated at 2 MiB, three backups) and
    to stdout. ``FORUMFLOW_LOG_LEVEL`` selects the level, INFO by default.
    Later calls ignore ``log_dir`` and return the configured instance.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is None:
        target_dir = ensure_work_dirs()["logs"]
    else:
        target_dir = Path(log_dir)
        target_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level())
    # records stay out of the root logger
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            target_dir / "app.log",
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        ),
        logging.StreamHandler(sys.stdout),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    _HANDLERS[:] = handlers

    _LOGGER = logger
    return logger


def reset_logger() -> None:
    """Detach and close the handlers added by ``get_logger`` so the next call reconfigures."""
    global _LOGGER
    logger = logging.getLogger(LOGGER_NAME)
    for handler in _HANDLERS:
        logger.removeHandler(handler)
        handler.close()
    _HANDLERS.clear()
    _LOGGER = None

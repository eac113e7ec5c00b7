"""
Logging setup.

Every module logs through ``logging.getLogger(__name__)``; this only attaches
handlers to the package logger. Handlers are named so calling it twice
(tests, settings reload) never duplicates output.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from worktime.infra.config import Settings

LOGGER_NAME = "worktime"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
        settings: Settings,
        log_dir: Optional[Path] = None,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 5,
        console: bool = False,
) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        settings: Provides the default log directory and level
        log_dir: Override for the log directory
        max_bytes: Rotation size of the log file
        backup_count: Number of rotated files to keep
        console: Also log to stderr

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.getLevelName(settings.preferences.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    log_dir = log_dir or settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    file_handler_name = f"{LOGGER_NAME}:file"
    if not any(h.get_name() == file_handler_name for h in logger.handlers):
        file_handler = RotatingFileHandler(
            filename=log_dir / f"{LOGGER_NAME}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)
        file_handler.set_name(file_handler_name)
        logger.addHandler(file_handler)

    console_handler_name = f"{LOGGER_NAME}:console"
    if console and not any(h.get_name() == console_handler_name for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(fmt)
        console_handler.set_name(console_handler_name)
        logger.addHandler(console_handler)

    return logger

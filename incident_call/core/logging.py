"""
Logging setup for the Incident Teams Call service.

Console output always; a rotating file under ``logs/`` only when
``LOG_TO_FILE`` is set, since hosted functions usually collect stdout.
"""

import copy
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "incident_call"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Highlights warnings and errors on the console."""

    COLORS = {
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color:
            # Other handlers share the record
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(level: int, log_file: Optional[str]) -> logging.Handler:
    if not log_file:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        log_file = str(log_dir / f"incident_call_{datetime.now():%Y%m%d}.log")
    handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_file_logging: bool = False
) -> logging.Logger:
    """
    Configure the ``incident_call`` logger. Safe to call more than once.

    Args:
        log_level: Log level name
        log_file: Explicit log file path, used only when file logging is enabled
        enable_file_logging: Whether to add the rotating file handler

    Returns:
        The configured package logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(_console_handler(level))
    if enable_file_logging:
        logger.addHandler(_file_handler(level, log_file))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the package logger, e.g. ``incident_call.notifier``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

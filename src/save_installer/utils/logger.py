"""
Logging Setup

All modules log below the ``save_installer`` logger. Console output goes to
stderr with colored level names; an optional rotating log file can be added,
and either destination can emit JSON records instead of text.

Author: Save Game Installer Project
License: MIT
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from pythonjsonlogger import jsonlogger
from typing import Optional, Union

from ..config.schema import AppConfig, LogLevel

ROOT_LOGGER_NAME = "save_installer"

CONSOLE_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'
FILE_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
JSON_CONSOLE_FIELDS = '%(asctime)s %(name)s %(levelname)s %(message)s'
JSON_FILE_FIELDS = '%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(lineno)d %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Text formatter that wraps the level name in ANSI colors."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        # The record is shared with other handlers, so the plain name is put back
        levelname = record.levelname
        color = self.COLORS.get(levelname)
        if color:
            record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def resolve_level(log_level: Union[str, LogLevel]) -> int:
    """Turn a level name or LogLevel member into a logging constant."""
    name = str(getattr(log_level, "value", log_level)).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def _formatter(json_format: bool, for_file: bool) -> logging.Formatter:
    if json_format:
        return jsonlogger.JsonFormatter(JSON_FILE_FIELDS if for_file else JSON_CONSOLE_FIELDS)
    if for_file:
        return logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
    return ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: Union[str, LogLevel] = "INFO",
    log_to_file: bool = False,
    log_file_path: str = "logs/save_installer.log",
    log_rotation_size: int = 10485760,  # 10MB
    log_retention_count: int = 5,
    json_format: bool = False
) -> logging.Logger:
    """
    Configure the ``save_installer`` logger.

    Calling it again replaces the previous handlers, so the CLI can
    reconfigure after loading the config file.

    Args:
        log_level: Level name or LogLevel member
        log_to_file: Also write to a rotating file
        log_file_path: Log file location (parent folders are created)
        log_rotation_size: Bytes before the file is rotated
        log_retention_count: Rotated files to keep
        json_format: Emit JSON records instead of text

    Returns:
        The configured package logger
    """
    level = resolve_level(log_level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stdout is reserved for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(_formatter(json_format, for_file=False))
    logger.addHandler(console_handler)

    if log_to_file:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=log_rotation_size,
            backupCount=log_retention_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(_formatter(json_format, for_file=True))
        logger.addHandler(file_handler)

    logger.propagate = False

    logger.debug(f"Logging at {logging.getLevelName(level)}"
                 + (f", file {log_file_path}" if log_to_file else ""))
    return logger


def setup_logging_from_config(app_config: Optional[AppConfig] = None) -> logging.Logger:
    """Configure logging from the ``app`` configuration section."""
    app_config = app_config or AppConfig()
    return setup_logging(
        log_level=app_config.log_level,
        log_to_file=app_config.log_to_file,
        log_file_path=app_config.log_file_path,
        log_rotation_size=app_config.log_rotation_size,
        log_retention_count=app_config.log_retention_count,
        json_format=app_config.json_logs
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the package logger.

    Module names already inside the package are used as they are, so
    ``get_logger(__name__)`` and ``get_logger("notifications")`` both work.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

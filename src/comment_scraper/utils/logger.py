#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging Configuration Module

Provides the configurable logging setup used by every pipeline stage.
Supports console and rotating file handlers, log levels from the environment,
and plain or JSON formatting.
"""

import os
import sys
import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any, Union

# Default log levels
DEFAULT_CONSOLE_LEVEL = logging.INFO
DEFAULT_FILE_LEVEL = logging.DEBUG

# Environment variable names
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_FILE_PATH = "LOG_FILE_PATH"
ENV_JSON_LOGS = "JSON_LOGS"

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

PACKAGE_LOGGER = "comment_scraper"

# Global logger registry to avoid duplicate handlers
_loggers: Dict[str, logging.Logger] = {}


def _resolve_level(level: Optional[Union[int, str]], default: int) -> int:
    if level is None:
        return default
    if isinstance(level, str):
        return LOG_LEVELS.get(level.upper(), default)
    return level


class LoggerConfig:
    """Configuration class for logger settings."""

    def __init__(
        self,
        name: str = PACKAGE_LOGGER,
        console_level: Optional[Union[int, str]] = None,
        file_level: Optional[Union[int, str]] = None,
        log_file: Optional[str] = None,
        max_bytes: int = 5 * 1024 * 1024,  # 5MB
        backup_count: int = 3,
        format_string: Optional[str] = None,
        json_logs: Optional[bool] = None,
        propagate: bool = False,
    ):
        """
        Initialize logger configuration.

        Args:
            name: Logger name
            console_level: Console logging level (int or string)
            file_level: File logging level (int or string)
            log_file: Path to log file (None falls back to LOG_FILE_PATH, unset means console only)
            max_bytes: Maximum file size before rotation
            backup_count: Number of rotated files to keep
            format_string: Custom log format string
            json_logs: Whether to format logs as JSON (None falls back to JSON_LOGS)
            propagate: Whether to propagate to parent loggers
        """
        self.name = name

        # Get log level from environment or use default
        env_level: Optional[int] = None
        raw_env_level = os.environ.get(ENV_LOG_LEVEL)
        if raw_env_level:
            try:
                env_level = LOG_LEVELS.get(raw_env_level.upper(), int(raw_env_level))
            except ValueError:
                env_level = None

        self.console_level = _resolve_level(
            console_level, env_level if env_level is not None else DEFAULT_CONSOLE_LEVEL
        )
        self.file_level = _resolve_level(
            file_level, env_level if env_level is not None else DEFAULT_FILE_LEVEL
        )

        self.log_file = log_file or os.environ.get(ENV_LOG_FILE_PATH) or None
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        # Use custom format or default
        if format_string:
            self.format_string = format_string
        else:
            self.format_string = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"

        if json_logs is None:
            json_logs = os.environ.get(ENV_JSON_LOGS, "false").lower() == "true"
        self.json_logs = json_logs
        self.propagate = propagate


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.
    """

    def __init__(
        self,
        fmt_dict: Optional[Dict[str, Any]] = None,
        time_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        """
        Initialize JSON formatter.

        Args:
            fmt_dict: Mapping of output keys to LogRecord attribute names
            time_format: Format string for timestamps
        """
        super().__init__()
        self.fmt_dict = fmt_dict or {
            "timestamp": "asctime",
            "level": "levelname",
            "name": "name",
            "module": "module",
            "function": "funcName",
            "line": "lineno",
            "message": "message",
        }
        self.time_format = time_format

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the specified record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string representation of the log record
        """
        record.asctime = self.formatTime(record, self.time_format)
        record.message = record.getMessage()

        log_record = {}
        for key, value in self.fmt_dict.items():
            if hasattr(record, value):
                log_record[key] = getattr(record, value)

        # Add exception info if present
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def configure_logger(config: Optional[LoggerConfig] = None) -> logging.Logger:
    """
    Configure a logger with the specified settings.

    Args:
        config: Logger configuration (or None for default)

    Returns:
        Configured logger
    """
    if config is None:
        config = LoggerConfig()

    # Check if logger already exists in registry
    if config.name in _loggers:
        return _loggers[config.name]

    logger = logging.getLogger(config.name)
    logger.setLevel(min(config.console_level, config.file_level))
    logger.propagate = config.propagate

    # Clear existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if config.json_logs:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(config.format_string)

    # stdout is reserved for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(config.console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file:
        os.makedirs(os.path.dirname(os.path.abspath(config.log_file)), exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(config.file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _loggers[config.name] = logger

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger by name, creating it if it doesn't exist.

    Loggers inside the package propagate to the package logger, which owns
    the handlers and is configured from the environment on first use.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if name in _loggers:
        return _loggers[name]

    if name.startswith(PACKAGE_LOGGER + "."):
        # Child loggers hand their records to the package logger
        if PACKAGE_LOGGER not in _loggers:
            configure_logger(LoggerConfig(name=PACKAGE_LOGGER))
        logger = logging.getLogger(name)
        _loggers[name] = logger
        return logger

    return configure_logger(LoggerConfig(name=name))


def configure_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None,
    json_logs: Optional[bool] = None,
) -> logging.Logger:
    """
    (Re)configure the package logger.

    Args:
        level: Logging level (int or string)
        log_file: Path to log file
        json_logs: Whether to format logs as JSON

    Returns:
        Configured package logger
    """
    _loggers.pop(PACKAGE_LOGGER, None)
    config = LoggerConfig(
        name=PACKAGE_LOGGER,
        console_level=level,
        file_level=level,
        log_file=log_file,
        json_logs=json_logs,
    )
    return configure_logger(config)


def log_pipeline_event(stage: str, event_type: str, message: str, level: int = logging.INFO) -> None:
    """
    Log a pipeline stage event.

    Args:
        stage: Stage name (sort, load, extract, pipeline)
        event_type: Type of event (start, degraded, complete, etc.)
        message: Event description
        level: Logging level
    """
    logger = get_logger("comment_scraper.pipeline")
    logger.log(level, f"[{stage}] [{event_type}] {message}")

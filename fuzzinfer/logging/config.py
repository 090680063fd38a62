"""
Logging configuration for fuzzinfer.

This module handles the centralized logging configuration including:
- Console and file output handlers
- Log rotation with configurable parameters
- Global debug flag mechanism
- Logger retrieval with consistent formatting
"""

import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Any, Optional, Union

# Global debug flag
_DEBUG_MODE = False

# Component-specific log levels
_COMPONENT_LOG_LEVELS = {
    "fuzzinfer.term.function": logging.INFO,
    "fuzzinfer.rule.antecedent": logging.INFO,
}

# Rate limiting state
_RATE_LIMIT_STATE: dict[str, float] = {}

# Default log format with detailed context
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s"

# Simplified format for console in normal mode
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Color formatting for console output
_LOG_COLORS = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[91m\033[1m",  # Bold Red
    "RESET": "\033[0m",  # Reset
}


class ColorFormatter(logging.Formatter):
    """Formatter that adds colors to log levels for console output."""

    def format(self, record):
        levelname = record.levelname
        if levelname in _LOG_COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = (
                f"{_LOG_COLORS[levelname]}{levelname}{_LOG_COLORS['RESET']}"
            )
        return super().format(record)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name and apply component-specific levels.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(name)

    for component, level in _COMPONENT_LOG_LEVELS.items():
        if name.startswith(component):
            logger.setLevel(level)
            break

    return logger


def set_debug_mode(enabled: bool) -> None:
    """
    Set the global debug mode flag.

    In debug mode the package logger and every component logger emit DEBUG
    records, which includes the per-rule inference trace.

    Args:
        enabled: True to enable debug mode, False to disable
    """
    global _DEBUG_MODE
    old_value = _DEBUG_MODE
    _DEBUG_MODE = enabled

    if old_value != _DEBUG_MODE:
        root_logger = logging.getLogger("fuzzinfer")
        if enabled:
            root_logger.setLevel(logging.DEBUG)
            for component in _COMPONENT_LOG_LEVELS:
                logging.getLogger(component).setLevel(logging.DEBUG)
            root_logger.info("Debug mode enabled")
        else:
            root_logger.info("Debug mode disabled")
            root_logger.setLevel(logging.INFO)
            for component, level in _COMPONENT_LOG_LEVELS.items():
                logging.getLogger(component).setLevel(level)


def is_debug_mode() -> bool:
    """
    Check if debug mode is currently enabled.

    Returns:
        True if debug mode is enabled, False otherwise
    """
    return _DEBUG_MODE


def configure_logging(
    log_dir: Optional[Union[str, Path]] = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    config: Optional[dict[str, Any]] = None,
) -> None:
    """
    Configure the central logging system with console and file outputs.

    Args:
        log_dir: Directory to store log files; no file handler when omitted
        console_level: Logging level for console output
        file_level: Logging level for file output
        max_file_size_mb: Maximum size of each log file in MB before rotation
        backup_count: Number of backup log files to keep
        config: Additional configuration options (console_format, file_format,
            debug_mode)
    """
    if config is None:
        config = {}

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all logs and let handlers filter

    # Clear any existing handlers to avoid duplicates if reconfigured
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    package_logger = logging.getLogger("fuzzinfer")
    package_logger.setLevel(logging.DEBUG if is_debug_mode() else logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_format = config.get("console_format", _CONSOLE_FORMAT)
    console_handler.setFormatter(ColorFormatter(console_format))
    root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(exist_ok=True, parents=True)
        log_file = log_path / "fuzzinfer.log"

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(file_level)
        file_format = config.get("file_format", _DEFAULT_FORMAT)
        file_handler.setFormatter(logging.Formatter(file_format))
        root_logger.addHandler(file_handler)

    if log_dir:
        package_logger.debug(
            f"fuzzinfer logging initialized (console: {logging.getLevelName(console_level)}, files: {log_dir})"
        )
    else:
        package_logger.debug(
            f"fuzzinfer logging initialized (console only: {logging.getLevelName(console_level)})"
        )

    set_debug_mode(config.get("debug_mode", is_debug_mode()))


def should_rate_limit_log(key: str, limit_seconds: int = 60) -> bool:
    """
    Determine if a log message should be emitted under rate limiting.

    Args:
        key: Unique key for the log message type
        limit_seconds: Minimum seconds between log messages

    Returns:
        True if the message should be logged (not rate limited)
    """
    current_time = time.time()

    if key not in _RATE_LIMIT_STATE:
        _RATE_LIMIT_STATE[key] = current_time
        return True

    if current_time - _RATE_LIMIT_STATE[key] >= limit_seconds:
        _RATE_LIMIT_STATE[key] = current_time
        return True

    return False


def reset_rate_limit_state() -> None:
    """
    Reset rate limiting state. Useful for testing.
    """
    _RATE_LIMIT_STATE.clear()

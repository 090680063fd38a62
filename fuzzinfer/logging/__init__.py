"""
Logging system for fuzzinfer.

This module provides a centralized logging configuration with console and
rotating file outputs, a global debug flag, and helper decorators for common
logging patterns.
"""

from fuzzinfer.logging.config import (
    configure_logging,
    get_logger,
    is_debug_mode,
    reset_rate_limit_state,
    set_debug_mode,
    should_rate_limit_log,
)
from fuzzinfer.logging.helpers import log_entry_exit, log_performance

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "set_debug_mode",
    "is_debug_mode",
    "should_rate_limit_log",
    "reset_rate_limit_state",
    # Helper methods
    "log_entry_exit",
    "log_performance",
]

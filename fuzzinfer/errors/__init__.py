"""
Error handling framework for fuzzinfer.

This module provides the exception hierarchy and the central registry of
error codes.
"""

from fuzzinfer.errors.error_codes import ErrorCodes
from fuzzinfer.errors.exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    EngineError,
    EvaluationError,
    FuzzyError,
    InvalidConfigurationError,
    ParseError,
    ProcessingError,
)

__all__ = [
    # Base exception
    "FuzzyError",
    # Exception hierarchy
    "ConfigurationError",
    "InvalidConfigurationError",
    "ConfigurationFileError",
    "ParseError",
    "EvaluationError",
    "EngineError",
    "ProcessingError",
    # Error codes
    "ErrorCodes",
]

"""
fuzzinfer Configuration Package.

Runtime settings come from environment variables; engine descriptions are
loaded from dictionaries or YAML files by ``fuzzinfer.config.loader``.
"""

from .settings import (
    EngineSettings,
    LoggingSettings,
    clear_settings_cache,
    get_engine_settings,
    get_logging_settings,
)

__all__ = [
    "EngineSettings",
    "LoggingSettings",
    "get_engine_settings",
    "get_logging_settings",
    "clear_settings_cache",
]

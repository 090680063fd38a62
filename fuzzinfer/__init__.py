"""
fuzzinfer - Fuzzy inference engine with linguistic terms, rules and defuzzifiers.
"""

from dotenv import load_dotenv

from fuzzinfer.logging import (
    configure_logging,
    get_logger,
    is_debug_mode,
    log_entry_exit,
    log_performance,
    set_debug_mode,
)
from fuzzinfer.version import __version__

# Load environment variables from .env file
load_dotenv()

# Console logging by default; FUZZINFER_LOGGING_LOG_DIR enables the file handler
from fuzzinfer.config.settings import get_logging_settings  # noqa: E402

_logging_settings = get_logging_settings()
configure_logging(
    log_dir=_logging_settings.log_dir,
    console_level=_logging_settings.console_level(),
)

"""
Utility modules for the Discord utility bot.
"""

from .logger import LoggerMixin, get_logger, setup_logging
from .error_handler import (
    BotError,
    CommandError,
    ConfigurationError,
    ErrorHandler,
    LocationNotFoundError,
    get_error_handler,
    setup_error_handler,
)
from .text import as_text, format_number, singular_or_plural, strip_str

__all__ = [
    "LoggerMixin",
    "get_logger",
    "setup_logging",
    "BotError",
    "CommandError",
    "ConfigurationError",
    "ErrorHandler",
    "LocationNotFoundError",
    "get_error_handler",
    "setup_error_handler",
    "as_text",
    "format_number",
    "singular_or_plural",
    "strip_str",
]

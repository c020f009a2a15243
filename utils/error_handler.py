"""
Error Handler
Exception types and global error reporting
"""

import asyncio
import traceback
from typing import Any, Dict, Optional

from utils.logger import get_logger


class BotError(Exception):
    """Base class for errors raised by the bot."""


class ConfigurationError(BotError):
    """Required configuration is missing or malformed."""


class CommandError(BotError):
    """
    Failure raised by a command action.

    The message is shown to the user as-is (after length capping),
    so it should be written for the person who invoked the command.
    """


class LocationNotFoundError(CommandError):
    """The weather provider has no location matching the query."""

    def __init__(self, message: str = "No location has been found by the query!"):
        super().__init__(message)


class ErrorHandler:
    """Global error handler for the bot."""

    def __init__(self):
        self.logger = get_logger("ErrorHandler")
        self.error_counts: Dict[str, int] = {}

    def initialize(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Install the loop exception handler."""
        if loop is None:
            loop = asyncio.get_running_loop()

        loop.set_exception_handler(self._async_exception_handler)
        self.logger.info("Error handlers initialized")

    def _async_exception_handler(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exception = context.get("exception")
        if exception:
            self.handle_exception(exception, "async")
        else:
            message = context.get("message", "Unknown async error")
            self.logger.error(f"Async error: {message}")

    def handle_exception(self, error: BaseException, context: str = "") -> int:
        """
        Log an exception and count it against its context.

        Args:
            error: The exception that occurred
            context: Optional context string (e.g. a command name)

        Returns:
            Number of errors recorded for this context and error type
        """
        error_key = f"{context}:{type(error).__name__}"

        if context:
            self.logger.error(f"[{context}] {type(error).__name__}: {error}")
        else:
            self.logger.error(f"{type(error).__name__}: {error}")

        # Expected user-facing failures don't need a traceback
        if not isinstance(error, CommandError):
            trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            self.logger.debug(f"Traceback:\n{trace}")

        count = self.error_counts.get(error_key, 0) + 1
        self.error_counts[error_key] = count
        return count


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def setup_error_handler(loop: Optional[asyncio.AbstractEventLoop] = None) -> ErrorHandler:
    """Set up the global error handler."""
    handler = get_error_handler()
    handler.initialize(loop)
    return handler

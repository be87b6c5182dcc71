"""Logging configuration for respond.

This module provides:
- A formatter that drops stack traces for client errors (4xx)
- A configurator attaching that formatter to the package logger
"""

import logging
import traceback
from typing import Optional

from .config import get_config
from .errors import is_error_formatter

LOGGER_NAME = "respond"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _is_client_error(exc_value) -> bool:
    """Check if an exception is a known client error (4xx).

    Args:
        exc_value: Exception instance

    Returns:
        True if the exception implements ErrorFormatter with a 4xx status
    """
    if not is_error_formatter(exc_value):
        return False
    return int(exc_value.status) < 500


class KnownErrorFormatter(logging.Formatter):
    """Formatter that suppresses stack traces for known client errors."""

    def formatException(self, ei):  # noqa: N802
        """Return an empty string for client errors, the traceback otherwise.

        Args:
            ei: Exception info tuple

        Returns:
            Formatted traceback, or empty string for client errors
        """
        if not ei:
            return ""

        exc_type, exc_value, exc_tb = ei
        if _is_client_error(exc_value):
            return ""

        try:
            result = super().formatException(ei)
            if result:
                return result
        except (AttributeError, TypeError):
            pass  # mocked tracebacks

        formatted = "".join(traceback.format_exception_only(exc_type, exc_value))
        return formatted or f"{exc_type.__name__}: {exc_value}\n"


class _RespondHandler(logging.StreamHandler):
    """Stream handler installed by ``configure_logging``."""


class LoggingConfigurator:
    """Configurator for the respond package logger."""

    @staticmethod
    def configure_logging(
        level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
    ) -> logging.Logger:
        """Attach a stream handler with :class:`KnownErrorFormatter`.

        Calling this more than once replaces the previously installed handler
        instead of adding another.

        Args:
            level: Log level name; defaults to the configured ``log_level``
            fmt: Log record format

        Returns:
            The configured package logger
        """
        package_logger = logging.getLogger(LOGGER_NAME)
        level_name = (level or get_config().log_level).upper()
        package_logger.setLevel(getattr(logging, level_name, logging.WARNING))

        for existing in list(package_logger.handlers):
            if isinstance(existing, _RespondHandler):
                package_logger.removeHandler(existing)

        handler = _RespondHandler()
        handler.setFormatter(KnownErrorFormatter(fmt))
        package_logger.addHandler(handler)
        return package_logger


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Shortcut for :meth:`LoggingConfigurator.configure_logging`."""
    return LoggingConfigurator.configure_logging(level)


__all__ = [
    "LoggingConfigurator",
    "KnownErrorFormatter",
    "configure_logging",
    "LOGGER_NAME",
]

"""
Exceptions Package for URL Status Monitor

Provides the exception hierarchy for startup and configuration errors.
"""

from exceptions.base import (
    UrlMonitorException,
    ConfigurationError,
)

from exceptions.validation import (
    URLListError,
    URLListNotFoundError,
    URLListUnreadableError,
    EmptyURLListError,
)

__all__ = [
    # Base exceptions
    "UrlMonitorException",
    "ConfigurationError",

    # Validation exceptions
    "URLListError",
    "URLListNotFoundError",
    "URLListUnreadableError",
    "EmptyURLListError",
]

"""
Validation Exception Classes for URL Status Monitor

Fatal input errors raised while loading the URL list, before any
monitoring begins.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from exceptions.base import ConfigurationError


class URLListError(ConfigurationError):
    """
    Base URL List Exception

    Parent class for errors in the list of URLs to monitor.
    """

    default_error_code = 3000

    def __init__(
        self,
        message: str,
        path: Union[str, Path, None] = None,
        **kwargs: Any
    ) -> None:
        super().__init__(message, config_key="urls_file", **kwargs)

        if path is not None:
            self.details["path"] = str(path)


class URLListNotFoundError(URLListError):
    """Raised when no URL list file is configured or the file does not exist."""

    default_error_code = 3001

    def user_message(self) -> str:
        path = self.details.get("path")
        if path:
            return f"URL list file not found: {path}"
        return "No URL list file was given."


class URLListUnreadableError(URLListError):
    """Raised when the URL list file exists but cannot be read or decoded."""

    default_error_code = 3003

    def __init__(
        self,
        message: str,
        reason: str = "",
        **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)

        if reason:
            self.details["reason"] = reason

    def user_message(self) -> str:
        path = self.details.get("path", "")
        reason = self.details.get("reason")
        if reason:
            return f"Cannot read URL list file {path}: {reason}"
        return f"Cannot read URL list file {path}"


class EmptyURLListError(URLListError):
    """Raised when the URL list contains no URLs."""

    default_error_code = 3002

    def __init__(
        self,
        message: str = "The URL list is empty",
        **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)

    def user_message(self) -> str:
        path = self.details.get("path")
        if path:
            return f"No URLs to monitor in {path}. Add one URL per line."
        return "No URLs to monitor."

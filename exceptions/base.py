"""
Base Exception Classes for URL Status Monitor

Probe failures are never raised: they are reported as ProbeOutcome
values. Exceptions here cover problems that stop the monitor from
starting at all.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class UrlMonitorException(Exception):
    """
    Base Exception Class

    Attributes:
        message: Text written to the log
        error_code: Numeric code, grouped by range (1xxx config, 3xxx URL list)
        details: Context for the log line (config key, file path, ...)
        cause: Underlying exception, if any
    """

    default_error_code: int = 1000

    def __init__(
        self,
        message: str = "An error occurred",
        error_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        self.cause = cause

    def log_format(self) -> str:
        """One-line form for the log file."""
        parts = [
            self.__class__.__name__,
            f"code={self.error_code}",
            self.message,
        ]
        if self.details:
            parts.append(f"details={self.details}")
        if self.cause:
            parts.append(f"cause={self.cause!r}")
        return " | ".join(parts)

    def user_message(self) -> str:
        """Text shown on the terminal. Subclasses word it for the user."""
        return self.message

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(UrlMonitorException):
    """Raised when the configuration or input leaves nothing to monitor."""

    default_error_code = 1100

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)

        if config_key:
            self.details["config_key"] = config_key

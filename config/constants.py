"""
Constants Module for URL Status Monitor

Contains constant values and display mappings used throughout
the application.
"""

from __future__ import annotations

from typing import Dict, Final


class StatusLabels:
    """
    Display Labels

    Human-readable text for every status state and probe outcome kind.
    Keys are the string values of ``StatusState`` / ``OutcomeKind``.
    """

    WAITING: Final[str] = "Waiting"
    CHECKING: Final[str] = "Checking..."

    OUTCOMES: Final[Dict[str, str]] = {
        "success": "OK",
        "http_error": "HTTP Error",
        "timeout": "Timeout",
        "connection_error": "Connection Error",
        "other_error": "Error",
    }

    @classmethod
    def for_outcome(cls, kind: str) -> str:
        """Get the label for an outcome kind."""
        return cls.OUTCOMES.get(kind, "Unknown")


class StatusStyles:
    """
    Display Styles

    rich style strings for the visual treatment of each status:
    pending while checking, positive on success, negative otherwise.
    """

    WAITING: Final[str] = "dim"
    PENDING: Final[str] = "bold yellow"
    POSITIVE: Final[str] = "bold green"
    NEGATIVE: Final[str] = "bold red"


class Defaults:
    """
    Default Values

    Provides default values for various settings.
    """

    # Probe defaults
    PROBE_OVERHEAD: Final[float] = 0.5  # grace on top of the timeout for the hard bound
    CYCLE_INTERVAL: Final[float] = 10.0
    MAX_MESSAGE_LENGTH: Final[int] = 200

    # Input defaults
    URLS_FILE: Final[str] = "urls.txt"
    COMMENT_PREFIX: Final[str] = "#"

    # Display defaults
    TIME_FORMAT: Final[str] = "%H:%M:%S"
    REFRESH_PER_SECOND: Final[int] = 4

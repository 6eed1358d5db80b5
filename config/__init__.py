"""
Configuration Package for URL Status Monitor

This package contains all configuration-related modules including:
- Settings management with environment variable support
- Display constants shared by the renderers
"""

from config.settings import (
    Settings,
    MonitoringSettings,
    LoggingSettings,
    Environment,
    LogLevel,
    HTTPMethod,
    get_settings,
)

from config.constants import (
    StatusStyles,
    StatusLabels,
    Defaults,
)

__all__ = [
    # Settings
    "Settings",
    "MonitoringSettings",
    "LoggingSettings",
    "Environment",
    "LogLevel",
    "HTTPMethod",
    "get_settings",

    # Constants
    "StatusStyles",
    "StatusLabels",
    "Defaults",
]

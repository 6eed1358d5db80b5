"""
Settings Module for URL Status Monitor

Configuration management using Pydantic Settings.
Supports environment variables, .env files, and runtime overrides
from the command line.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment enumeration."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class HTTPMethod(str, Enum):
    """Request methods usable for a reachability probe."""
    HEAD = "HEAD"
    GET = "GET"


class BaseSettingsConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True
    )


class MonitoringSettings(BaseSettingsConfig):
    """
    Monitoring Engine Configuration Settings

    Controls probe timeout, the pause between cycles, probe
    concurrency within a cycle and the skip-on-success policy.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONITOR_",
        env_file=".env",
        extra="ignore"
    )

    # Probe settings
    timeout: float = Field(
        default=3.0,
        gt=0,
        le=120,
        description="Per-probe timeout in seconds"
    )
    http_method: HTTPMethod = Field(
        default=HTTPMethod.HEAD,
        description="Request method used for probes (HEAD avoids a body fetch)"
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow redirects before classifying the response"
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify TLS certificates"
    )
    user_agent: str = Field(
        default="UrlStatusMonitor/1.0",
        min_length=1,
        description="User-Agent header sent with every probe"
    )

    # Cycle settings
    interval: float = Field(
        default=10.0,
        ge=0,
        le=86400,
        description="Pause between the end of one cycle and the start of the next"
    )
    max_concurrency: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Maximum probes in flight within one cycle (1 = sequential)"
    )
    force_all: bool = Field(
        default=True,
        description="Re-probe every URL each cycle, including healthy ones"
    )


class LoggingSettings(BaseSettingsConfig):
    """
    Logging Configuration Settings

    Console and rotating file output through loguru.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        extra="ignore"
    )

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Minimum logging level"
    )

    # Console logging
    console_enabled: bool = Field(
        default=True,
        description="Enable console logging"
    )
    console_colored: bool = Field(
        default=True,
        description="Enable colored console output"
    )

    # File logging
    file_enabled: bool = Field(
        default=True,
        description="Enable file logging"
    )
    file_path: Path = Field(
        default=Path("logs/url_monitor.log"),
        description="Log file path"
    )
    file_rotation: str = Field(
        default="10 MB",
        description="Log rotation size (e.g., '10 MB', '1 day')"
    )
    file_retention: str = Field(
        default="30 days",
        description="Log retention period"
    )

    # Error logging (separate file for errors)
    error_file_enabled: bool = Field(
        default=True,
        description="Enable separate error log file"
    )
    error_file_path: Path = Field(
        default=Path("logs/errors.log"),
        description="Error log file path"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lowercase level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v


class Settings(BaseSettingsConfig):
    """
    Main Settings Class

    Aggregates all settings sections and provides the main
    configuration interface for the application.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    environment: Environment = Field(
        default=Environment.PRODUCTION,
        description="Application environment"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Application info
    app_name: str = Field(
        default="URL Status Monitor",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # Input
    urls_file: Path = Field(
        default=Path("urls.txt"),
        description="Text file listing the URLs to monitor, one per line"
    )

    # Nested settings
    monitoring: MonitoringSettings = Field(
        default_factory=MonitoringSettings
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING

    @model_validator(mode="after")
    def configure_for_environment(self) -> "Settings":
        """Apply environment-specific configuration."""
        if self.debug or self.is_development:
            if self.logging.level == LogLevel.INFO:
                self.logging.level = LogLevel.DEBUG
        elif self.is_testing:
            self.logging.file_enabled = False
            self.logging.error_file_enabled = False
        return self

    def with_overrides(
        self,
        *,
        urls_file: Optional[Path] = None,
        **monitoring: Any
    ) -> "Settings":
        """
        Return a copy with command-line overrides applied.

        ``None`` values are ignored so unset CLI options keep the
        configured value. The merged monitoring block is validated again,
        so out-of-range values raise ``pydantic.ValidationError``.
        """
        changes = {k: v for k, v in monitoring.items() if v is not None}
        update: Dict[str, Any] = {}
        if changes:
            update["monitoring"] = MonitoringSettings.model_validate(
                {**self.monitoring.model_dump(), **changes}
            )
        if urls_file is not None:
            update["urls_file"] = urls_file
        return self.model_copy(update=update)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(mode="json")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    This function is cached to ensure a single settings instance
    is used throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()

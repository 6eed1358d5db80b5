"""
============================================================================
URL STATUS MONITOR - LOGGING UTILITY
============================================================================
Logging setup on top of loguru: console sink, rotating file sink and a
separate error file.

Version: 1.0.0
License: MIT
============================================================================
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger
from rich.console import Console
from rich.text import Text

from config.settings import Settings, get_settings


# ============================================================================
# LOGGER CONFIGURATION
# ============================================================================

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

# Console sink handle and options, kept so the sink can be re-pointed
_console_sink: Dict[str, Any] = {"id": None, "options": None}


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure logging sinks from the logging settings.

    Safe to call more than once; previous sinks are removed first.

    Args:
        settings: Application settings (defaults to the cached instance)
    """
    settings = settings or get_settings()
    cfg = settings.logging

    logger.remove()
    logger.configure(extra={"name": "root"})
    _console_sink["id"] = None
    _console_sink["options"] = None

    log_level = cfg.level.value

    # Console Handler (stderr; re-pointed at the live table while it runs)
    if cfg.console_enabled:
        _console_sink["options"] = {
            "format": CONSOLE_FORMAT,
            "level": log_level,
            "colorize": cfg.console_colored,
            "backtrace": True,
            "diagnose": settings.debug,
        }
        _console_sink["id"] = logger.add(sys.stderr, **_console_sink["options"])

    # File Handler
    if cfg.file_enabled:
        cfg.file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            cfg.file_path,
            format=FILE_FORMAT,
            level=log_level,
            rotation=cfg.file_rotation,
            retention=cfg.file_retention,
            compression="zip",
            backtrace=True,
            diagnose=settings.debug,
            enqueue=True,
        )

    # Error log file (separate file for errors)
    if cfg.error_file_enabled:
        cfg.error_file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            cfg.error_file_path,
            format=FILE_FORMAT,
            level="ERROR",
            rotation="1 day",
            retention="7 days",
            compression="zip",
            backtrace=True,
            diagnose=settings.debug,
            enqueue=True,
        )

    logger.debug(
        f"Logging initialized: level={log_level}, "
        f"console={cfg.console_enabled}, file={cfg.file_enabled}"
    )


def get_logger(name: Optional[str] = None):
    """
    Get logger instance with optional name.

    Args:
        name: Logger name (component name or __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name or "root")


def route_console_logs(console: Optional[Console] = None) -> None:
    """
    Point the console sink at a rich Console, or back at stderr.

    While a rich Live display owns the terminal, log lines must be printed
    through its Console so they land above the table instead of inside
    the in-place repaint.

    Args:
        console: Console of the live display, or None to restore stderr
    """
    sink_id = _console_sink["id"]
    options = _console_sink["options"]
    if sink_id is None or options is None:
        return

    try:
        logger.remove(sink_id)
    except ValueError:
        # logging was reconfigured elsewhere and the sink is gone
        _console_sink["id"] = None
        return

    if console is None:
        _console_sink["id"] = logger.add(sys.stderr, **options)
        return

    def write(message) -> None:
        console.print(Text.from_ansi(str(message).rstrip("\n")))

    _console_sink["id"] = logger.add(write, **options)

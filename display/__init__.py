"""
Display Package for URL Status Monitor

Renders status updates for the terminal. The engine only emits
StatusUpdate events; everything visual lives here.
"""

from display.console import ConsoleDisplay, build_table, status_style

__all__ = [
    "ConsoleDisplay",
    "build_table",
    "status_style",
]

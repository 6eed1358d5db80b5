"""
Utility Package for URL Status Monitor

- logger      : loguru setup and named loggers
- validators  : URL validation
- url_list    : loading the list of URLs to monitor
"""

from utils.logger import setup_logging, get_logger
from utils.validators import URLValidator, BatchValidator
from utils.url_list import load_url_list, parse_url_lines

__all__ = [
    "setup_logging",
    "get_logger",
    "URLValidator",
    "BatchValidator",
    "load_url_list",
    "parse_url_lines",
]

"""
URL list loading.

Reads the ordered list of URLs to monitor from a text file: one URL per
line, blank lines and ``#`` comments ignored. Order is kept and
duplicates stay as separate entries.
"""

from pathlib import Path
from typing import Iterable, List, Union

from config.constants import Defaults
from exceptions.validation import EmptyURLListError, URLListNotFoundError, URLListUnreadableError
from utils.logger import get_logger
from utils.validators import BatchValidator


logger = get_logger("URLList")


def parse_url_lines(lines: Iterable[str]) -> List[str]:
    """Strip whitespace and drop blank and comment lines."""
    urls = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith(Defaults.COMMENT_PREFIX):
            continue
        urls.append(line)
    return urls


def load_url_list(path: Union[str, Path, None]) -> List[str]:
    """
    Load the URLs to monitor from *path*.

    Raises:
        URLListNotFoundError: no path given, or the file is missing
        URLListUnreadableError: the file exists but cannot be read as UTF-8 text
        EmptyURLListError: the file holds no URLs
    """
    if path is None or str(path).strip() == "":
        raise URLListNotFoundError("No URL list file configured")

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise URLListNotFoundError(f"URL list file not found: {path}", path=path, cause=e) from e
    except UnicodeDecodeError as e:
        raise URLListUnreadableError(
            f"URL list file is not UTF-8: {path}", reason="not valid UTF-8 text", path=path, cause=e
        ) from e
    except OSError as e:
        raise URLListUnreadableError(
            f"Cannot read URL list file {path}: {e}", reason=e.strerror or str(e), path=path, cause=e
        ) from e

    urls = parse_url_lines(text.splitlines())
    if not urls:
        raise EmptyURLListError(f"No URLs found in {path}", path=path)

    checked = BatchValidator.validate_url_list(urls)
    for url in checked["invalid"]:
        logger.warning(f"Malformed URL will be reported as an error: {url!r}")

    logger.info(f"Loaded {len(urls)} URL(s) from {path}")
    return urls

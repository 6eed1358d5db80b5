"""
============================================================================
URL STATUS MONITOR - VALIDATORS UTILITY
============================================================================
URL validation used when loading the list of URLs to monitor.

Validation here is advisory: a URL that fails it is still monitored and
its probe reports the failure.

Version: 1.0.0
License: MIT
============================================================================
"""

import re
from typing import Dict, List

import validators as external_validators


# ============================================================================
# URL VALIDATORS
# ============================================================================

class URLValidator:
    """
    Checks that a URL is an absolute http(s) URL with a real host.
    """

    # URL regex pattern
    URL_PATTERN = re.compile(
        r'^https?://'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,63}\.?|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IP
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE
    )

    @staticmethod
    def is_valid_url(url: str) -> bool:
        """
        Check if URL is valid.

        Args:
            url: URL to validate

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(url, str) or not URLValidator.URL_PATTERN.match(url):
            return False

        # localhost and bare IPs pass the pattern but not validators.url
        # without its private/simple_host options
        result = external_validators.url(url, simple_host=True)
        return result is True


class BatchValidator:
    """
    Validator for batch operations.
    """

    @staticmethod
    def validate_url_list(urls: List[str]) -> Dict[str, List[str]]:
        """
        Split a list of URLs into valid and invalid entries.

        Order and duplicates are preserved in both lists.

        Args:
            urls: List of URLs to validate

        Returns:
            Dictionary with 'valid' and 'invalid' URLs
        """
        valid = []
        invalid = []

        for url in urls:
            if URLValidator.is_valid_url(url):
                valid.append(url)
            else:
                invalid.append(url)

        return {
            "valid": valid,
            "invalid": invalid
        }

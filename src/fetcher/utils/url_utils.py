# src/fetcher/utils/url_utils.py
import logging
import re
from urllib.parse import urlparse, urlunparse

logger = logging.getLogger(__name__)

# Local, loopback, private and link-local hosts are never fetched.
BLOCKED_HOST_PATTERN = re.compile(
    r"^(localhost|127\.|10\.|172\.(1[6-9]|2\d|3[01])\.|192\.168\.|169\.254\.|0\.0\.0\.0|\[::1\])",
    re.IGNORECASE,
)


class InvalidUrlError(ValueError):
    """Raised when user input cannot be analyzed as a public http(s) URL."""


class UrlUtils:
    """A collection of static methods for URL validation and normalisation."""

    @staticmethod
    def normalize_url(url: str) -> str:
        """
        Returns the URL with an explicit path ('/' for the homepage) and without fragment.
        """
        parsed_url = urlparse(url)

        if not parsed_url.path:
            parsed_url = parsed_url._replace(path='/')

        # Remove fragments, as they are client-side only
        parsed_url = parsed_url._replace(fragment='')

        return urlunparse(parsed_url)

    @staticmethod
    def validate_url(raw: str) -> str:
        """
        Validates user input as an analyzable URL.

        Adds 'https://' when no scheme is given, accepts only http(s) and
        rejects local/private hosts.

        Returns:
            str: The normalised URL.

        Raises:
            InvalidUrlError: With a short, user-facing reason.
        """
        candidate = (raw or "").strip()
        if not candidate:
            raise InvalidUrlError("Invalid URL")
        if "://" not in candidate:
            candidate = f"https://{candidate}"

        try:
            parsed = urlparse(candidate)
            # Accessing the port validates it (raises ValueError when out of range)
            parsed.port
        except ValueError:
            raise InvalidUrlError("Invalid URL")

        if parsed.scheme.lower() not in ("http", "https"):
            raise InvalidUrlError("HTTP(S) only")
        if not parsed.netloc or not parsed.hostname:
            raise InvalidUrlError("Invalid URL")

        host = parsed.netloc.rsplit("@", 1)[-1]
        if BLOCKED_HOST_PATTERN.match(host) or BLOCKED_HOST_PATTERN.match(parsed.hostname):
            logger.debug("Blocked private/local address: %s", parsed.hostname)
            raise InvalidUrlError("Cannot analyze local/private addresses")

        return UrlUtils.normalize_url(candidate)

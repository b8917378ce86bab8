import asyncio
import logging
import time
from typing import Optional, Tuple

import aiohttp

from fetcher.model import FetchErrorType, FetchResult, FetchSettings
from fetcher.services.generate_default_user_agent_service import generate_default_user_agent

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = ('text/html', 'text/plain', 'application/xhtml')

HTTP_ERROR_MESSAGES = {
    400: ("Bad request (400): the URL may be malformed.", FetchErrorType.HTTP),
    401: ("Authentication required (401): this page requires login.", FetchErrorType.HTTP),
    403: ("Access forbidden (403): you don't have permission to view this page.", FetchErrorType.HTTP),
    404: ("Page not found (404): this URL does not exist.", FetchErrorType.HTTP),
    405: ("Method not allowed (405): the server rejected the request.", FetchErrorType.HTTP),
    408: ("Request timeout (408): the server took too long to respond.", FetchErrorType.TIMEOUT),
    410: ("Page gone (410): this content has been permanently removed.", FetchErrorType.HTTP),
    429: ("Too many requests (429): rate limited. Try again later.", FetchErrorType.HTTP),
    500: ("Server error (500): the website encountered an internal error.", FetchErrorType.HTTP),
    502: ("Bad gateway (502): the server may be down or unreachable.", FetchErrorType.HTTP),
    503: ("Service unavailable (503): the website is temporarily offline.", FetchErrorType.HTTP),
    504: ("Gateway timeout (504): the server took too long to respond.", FetchErrorType.TIMEOUT),
}

CLOUDFLARE_STATUSES = range(520, 525)


def classify_http_status(status: int, reason: Optional[str]) -> Tuple[str, FetchErrorType]:
    """Maps a non-2xx status to a user-facing message and error type."""
    if status in HTTP_ERROR_MESSAGES:
        return HTTP_ERROR_MESSAGES[status]
    if status in CLOUDFLARE_STATUSES:
        return f"Cloudflare error ({status}): the origin server is unreachable.", FetchErrorType.HTTP
    return f"HTTP error {status}: {reason or ''}".strip(), FetchErrorType.HTTP


def classify_client_error(error: BaseException) -> Tuple[str, FetchErrorType]:
    """Maps a transport-level exception to a user-facing message and error type."""
    if isinstance(error, asyncio.TimeoutError):
        return "Request timed out: the server took too long to respond.", FetchErrorType.TIMEOUT
    if isinstance(error, aiohttp.ClientSSLError):
        return "SSL/TLS error: the website has certificate issues.", FetchErrorType.NETWORK
    if isinstance(error, aiohttp.TooManyRedirects):
        return "Too many redirects: the URL redirects too many times.", FetchErrorType.NETWORK
    if isinstance(error, aiohttp.ClientConnectionError):
        return (
            "Unable to connect: the server may be down, blocking requests, or there's a network issue.",
            FetchErrorType.NETWORK,
        )
    return str(error) or error.__class__.__name__, FetchErrorType.UNKNOWN


class PageFetcher:
    """
    Fetches the HTML of a single URL over a shared aiohttp session.

    Network conditions never raise: every outcome is a FetchResult, either
    carrying the HTML text or a typed failure.
    """

    def __init__(self, settings: Optional[FetchSettings] = None):
        self.settings = settings or FetchSettings()
        self.user_agent = self.settings.user_agent or generate_default_user_agent()
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self):
        if not self.session or self.session.closed:
            timeout_obj = aiohttp.ClientTimeout(total=self.settings.timeout)
            default_headers = {
                'Accept': 'text/html,application/xhtml+xml,*/*',
                'Accept-Encoding': 'gzip, deflate',
                'User-Agent': self.user_agent
            }
            self.session = aiohttp.ClientSession(timeout=timeout_obj, headers=default_headers)
            logger.debug("Fetch session initialized. Timeout: %ss", self.settings.timeout)

    async def close(self):
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch_html(self, url: str) -> FetchResult:
        start = time.perf_counter()
        if not self.session or self.session.closed:
            await self.initialize()

        try:
            result = await self._fetch(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            message, error_type = classify_client_error(e)
            result = FetchResult.failure(url, message, error_type)
        except Exception as e:
            logger.error("Internal fetch error for %s: %s", url, e, exc_info=True)
            result = FetchResult.failure(url, str(e) or "An unknown error occurred.", FetchErrorType.UNKNOWN)

        result.elapsed_time = round(time.perf_counter() - start, 4)
        if not result.ok:
            logger.warning("Failed to fetch %s: %s", url, result.error)
        return result

    async def _fetch(self, url: str) -> FetchResult:
        async with self.session.get(url) as response:
            status = response.status

            if not 200 <= status < 300:
                message, error_type = classify_http_status(status, response.reason)
                return FetchResult.failure(url, message, error_type, status=status)

            content_type = response.headers.get("Content-Type", "").lower()
            if not any(t in content_type for t in ACCEPTED_CONTENT_TYPES):
                return FetchResult.failure(
                    url,
                    f"Invalid content type: {content_type}. Expected HTML.",
                    FetchErrorType.INVALID,
                    status=status,
                )

            html = await self._read_content(response)

        if not html or not html.strip():
            return FetchResult.failure(url, "Server returned an empty response.", FetchErrorType.EMPTY, status=status)

        # Basic check if it looks like HTML
        if '<' not in html or '>' not in html:
            return FetchResult.failure(
                url, "Response does not appear to be valid HTML.", FetchErrorType.INVALID, status=status
            )

        return FetchResult(url=url, html=html, status=status)

    async def _read_content(self, response) -> str:
        try:
            return await asyncio.wait_for(response.text(), timeout=self.settings.read_timeout)
        except UnicodeDecodeError:
            content_bytes = await response.read()
            return content_bytes.decode('utf-8', errors='replace')

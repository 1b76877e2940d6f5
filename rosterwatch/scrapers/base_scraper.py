from typing import Any, Dict, Optional

import httpx
from loguru import logger

from rosterwatch.config.settings import settings


class ScraperError(Exception):
    """Custom exception for scraper-related errors."""

    pass


class FetchError(ScraperError):
    """Non-success status or network failure while fetching a source."""

    pass


class AuthenticationError(FetchError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class BaseScraper:
    """Shared HTTP plumbing for source fetchers.

    Requests are made once; a failed fetch surfaces as ``FetchError`` and is
    retried only by the next scheduled tick.
    """

    source: str = "unknown"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.fetch_timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": "rosterwatch/1.0"},
        )

    async def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an asynchronous HTTP request and maps failures to FetchError."""
        logger.debug(f"Making {method} request to {url}")
        try:
            response = await self.client.request(
                method, url, headers=headers, params=params, **kwargs
            )
        except httpx.RequestError as e:
            raise FetchError(f"Fetch failed: {e.__class__.__name__}: {e}") from e

        if response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) for {self.source} at {url}."
            )
            raise AuthenticationError(
                f"Authentication failed ({response.status_code}) for {self.source}"
            )
        if not response.is_success:
            raise FetchError(f"HTTP Error: {response.status_code}")

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source}")

import asyncio
from typing import Any, Coroutine, Dict, Optional, Set

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from rosterwatch.config.settings import settings

# Statuses worth another attempt; anything else non-2xx fails immediately
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class NotificationError(Exception):
    """Custom exception for outbound notification failures."""

    pass


class RetryableNotificationError(NotificationError):
    """Transient failure (throttling or server error) that triggers a retry."""

    pass


class BaseNotifier:
    """Fire-and-forget HTTP notifier.

    Sends are scheduled as background tasks on the running loop and never
    awaited by the caller; failures end up in the log only. ``drain`` waits
    for whatever is still in flight, e.g. at shutdown.
    """

    channel: str = "notifier"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(15.0),
            follow_redirects=True,
        )
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _fire(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.create_task(self._guard(coro))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _guard(self, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            await coro
        except Exception as e:
            logger.error(f"{self.channel} delivery failed: {e}")

    @retry(
        stop=stop_after_attempt(settings.notify_max_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.RequestError, RetryableNotificationError)),
        reraise=True,
    )
    async def _post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """POSTs a JSON payload, retrying transport errors and retryable statuses."""
        try:
            response = await self.client.post(url, json=payload, headers=headers)
        except httpx.RequestError as e:
            logger.warning(f"{self.channel} request error, retrying: {e}")
            raise

        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(
                f"{self.channel} got status {response.status_code}, retrying."
            )
            raise RetryableNotificationError(
                f"{self.channel} returned {response.status_code}"
            )
        if response.is_error:
            raise NotificationError(
                f"{self.channel} returned {response.status_code}: {response.text[:200]}"
            )
        return response

    async def drain(self) -> None:
        """Waits for all in-flight sends to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Drains pending sends and closes the underlying HTTP client."""
        await self.drain()
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.channel}")

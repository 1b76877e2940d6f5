from typing import Optional

import httpx
from loguru import logger

from rosterwatch.config.settings import settings
from .base_notifier import BaseNotifier


class ExpoPushNotifier(BaseNotifier):
    """Sends push notifications through the Expo push service."""

    channel = "Expo push"

    def __init__(
        self,
        token: Optional[str] = None,
        url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client)
        self.token = token if token is not None else settings.expo_push_token
        self.url = url or settings.expo_push_url
        if not self.token:
            logger.warning("Expo push token not configured; push notifications disabled.")

    def notify(self, message: str, title: str) -> None:
        """Schedules a push; returns immediately."""
        if not self.token:
            logger.debug(f"Push skipped (no token): {title}")
            return
        self._fire(self._send(message, title))

    async def _send(self, message: str, title: str) -> None:
        await self._post_json(
            self.url,
            {"to": self.token, "title": title, "body": message},
            headers={"Content-Type": "application/json"},
        )
        logger.debug(f"Push notification sent: {title}")

from typing import Optional

import httpx
from loguru import logger

from rosterwatch.config.settings import settings
from rosterwatch.reporting.messages import format_tweet
from .base_notifier import BaseNotifier


class TwitterPoster(BaseNotifier):
    """Posts update messages to X/Twitter (API v2, user-context bearer token)."""

    channel = "Twitter"

    def __init__(
        self,
        access_token: Optional[str] = None,
        api_url: Optional[str] = None,
        handle: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client)
        self.access_token = (
            access_token if access_token is not None else settings.twitter_access_token
        )
        self.api_url = api_url or settings.twitter_api_url
        self.handle = handle or settings.twitter_handle
        if not self.access_token:
            logger.warning("Twitter access token not configured; posting disabled.")

    def post(self, text: str) -> None:
        """Wraps ``text`` in the update banner and schedules the tweet."""
        if not self.access_token:
            logger.debug("Tweet skipped (no access token).")
            return
        self._fire(self._send(format_tweet(text)))

    async def _send(self, tweet: str) -> None:
        response = await self._post_json(
            self.api_url,
            {"text": tweet},
            headers={"Authorization": f"Bearer {self.access_token}"},
        )
        tweet_id = (response.json().get("data") or {}).get("id")
        logger.info(f"Tweet sent: https://x.com/{self.handle}/status/{tweet_id}")

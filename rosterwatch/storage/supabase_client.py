# rosterwatch/storage/supabase_client.py
import copy
from typing import Any, Optional

from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import AsyncClient, create_async_client

from rosterwatch.config.settings import settings
from rosterwatch.storage.document_store import DocumentStore, StorageError


async def initialize_supabase() -> AsyncClient:
    """Creates the async Supabase client from settings."""
    if not settings.supabase_url or not settings.supabase_key:
        logger.critical("Supabase URL or Key not configured in settings.")
        raise SystemExit("Supabase configuration missing.")

    logger.debug(
        f"Attempting to initialize Async Supabase client with URL: {settings.supabase_url}"
    )
    client: AsyncClient = await create_async_client(
        settings.supabase_url, settings.supabase_key
    )
    logger.success("Async Supabase client initialized successfully.")
    return client


class SupabaseDocumentStore(DocumentStore):
    """Documents kept as rows ``{key, body}`` of one Supabase table.

    ``body`` is expected to be a jsonb column and ``key`` its primary key,
    so a save is a single upsert that replaces the whole document.
    """

    def __init__(self, client: AsyncClient, table: Optional[str] = None):
        self.client = client
        self.table = table or settings.supabase_table

    async def load(self, key: str, default: Any) -> Any:
        try:
            response: APIResponse = (
                await self.client.table(self.table)
                .select("body")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except APIError as e:
            logger.debug(f"Full APIError details: {e}")
            raise StorageError(f"Supabase error loading '{key}': {e.message}") from e

        if not response.data:
            logger.debug(f"No stored document for '{key}' in {self.table}, using default.")
            return copy.deepcopy(default)
        return response.data[0]["body"]

    async def save(self, key: str, document: Any) -> None:
        try:
            await self.client.table(self.table).upsert(
                {"key": key, "body": document}
            ).execute()
        except APIError as e:
            logger.debug(f"Full APIError details: {e}")
            raise StorageError(f"Supabase error saving '{key}': {e.message}") from e
        logger.debug(f"Upserted document '{key}' to {self.table}.")

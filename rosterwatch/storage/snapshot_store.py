# rosterwatch/storage/snapshot_store.py
from typing import List, Sequence

from loguru import logger
from pydantic import TypeAdapter

from rosterwatch.models.log_entries import MessageLogEntry, UpdateLogEntry
from rosterwatch.models.team import Team
from rosterwatch.storage.document_store import DocumentStore
from rosterwatch.utils.misc_utils import generate_canonical_id

UPDATES_KEY = "updates"
MESSAGES_KEY = "update_messages"

_teams_adapter = TypeAdapter(List[Team])


class SnapshotStore:
    """Owns all durable state: per-region snapshots, the audit log, the message feed.

    Logs are rewritten whole on every change (load, mutate, save).
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def prepare(self) -> None:
        await self.store.prepare()

    @staticmethod
    def snapshot_key(region: str) -> str:
        return generate_canonical_id(region)

    async def load_snapshot(self, region: str) -> List[Team]:
        raw = await self.store.load(self.snapshot_key(region), [])
        return _teams_adapter.validate_python(raw)

    async def save_snapshot(self, region: str, teams: Sequence[Team]) -> None:
        await self.store.save(
            self.snapshot_key(region), _teams_adapter.dump_python(list(teams), mode="json")
        )
        logger.info(f"Successfully updated {len(teams)} teams for {region}")

    async def load_updates(self) -> list:
        return await self.store.load(UPDATES_KEY, [])

    async def load_messages(self) -> list:
        return await self.store.load(MESSAGES_KEY, [])

    async def append_update(self, entry: UpdateLogEntry) -> None:
        updates = await self.load_updates()
        updates.append(entry.model_dump(mode="json"))
        await self.store.save(UPDATES_KEY, updates)

    async def prepend_messages(self, entries: Sequence[MessageLogEntry]) -> None:
        messages = await self.load_messages()
        messages = [e.model_dump(mode="json") for e in entries] + messages
        await self.store.save(MESSAGES_KEY, messages)

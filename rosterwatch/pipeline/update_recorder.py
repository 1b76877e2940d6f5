from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from loguru import logger

from rosterwatch.diffing.diff_engine import find_team_changes
from rosterwatch.models.changes import (
    ChangeRecord,
    RosterUpdated,
    TeamAdded,
    TeamRemoved,
)
from rosterwatch.models.log_entries import MessageLogEntry, UpdateLogEntry
from rosterwatch.models.team import Team
from rosterwatch.notifications.push_notifier import ExpoPushNotifier
from rosterwatch.notifications.social_poster import TwitterPoster
from rosterwatch.reporting.messages import (
    ROSTER_UPDATED_TITLE,
    TEAM_ADDED_TITLE,
    TEAM_REMOVED_TITLE,
    create_change_message,
    create_team_message,
)
from rosterwatch.storage.snapshot_store import SnapshotStore


@dataclass
class RecordResult:
    changes: List[ChangeRecord] = field(default_factory=list)
    messages: List[MessageLogEntry] = field(default_factory=list)


class UpdateRecorder:
    """Diffs a region, announces the changes, and writes the audit trail.

    ``team_info_updated`` records land in the audit log but never produce a
    message or a notification.
    """

    def __init__(
        self,
        store: SnapshotStore,
        notifier: Optional[ExpoPushNotifier] = None,
        poster: Optional[TwitterPoster] = None,
    ):
        self.store = store
        self.notifier = notifier
        self.poster = poster

    async def record(
        self,
        region: str,
        old_teams: Sequence[Team],
        new_teams: Sequence[Team],
        timestamp: str,
    ) -> RecordResult:
        changes = find_team_changes(old_teams, new_teams)
        result = RecordResult(changes=changes)
        if not changes:
            logger.info(f"No classified changes for {region}")
            return result

        for change in changes:
            if isinstance(change, RosterUpdated):
                for roster_change in change.changes:
                    message = create_change_message(roster_change, change.team)
                    if message:
                        result.messages.append(
                            self._announce(region, message, ROSTER_UPDATED_TITLE, timestamp)
                        )
            elif isinstance(change, TeamAdded):
                message = create_team_message(change, region)
                result.messages.append(
                    self._announce(region, message, TEAM_ADDED_TITLE, timestamp)
                )
            elif isinstance(change, TeamRemoved):
                message = create_team_message(change, region)
                result.messages.append(
                    self._announce(region, message, TEAM_REMOVED_TITLE, timestamp)
                )

        await self.store.append_update(
            UpdateLogEntry(
                timestamp=timestamp,
                region=region,
                old=list(old_teams),
                changes=changes,
            )
        )
        await self.store.prepend_messages(result.messages)

        logger.info(
            f"Recorded {len(changes)} change(s) and {len(result.messages)} message(s) for {region}"
        )
        if result.messages:
            logger.info(
                "New updates:\n"
                + "\n".join(f"[{m.region}] {m.message}" for m in result.messages)
            )
        return result

    def _announce(
        self, region: str, message: str, title: str, timestamp: str
    ) -> MessageLogEntry:
        if self.notifier:
            self.notifier.notify(message, title)
        if self.poster:
            self.poster.post(message)
        return MessageLogEntry(timestamp=timestamp, region=region, message=message)

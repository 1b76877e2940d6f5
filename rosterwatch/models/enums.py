from enum import Enum


class ChangeType(str, Enum):
    # Team level
    TEAM_ADDED = "team_added"
    TEAM_REMOVED = "team_removed"
    TEAM_INFO_UPDATED = "team_info_updated"
    ROSTER_UPDATED = "roster_updated"
    # Player level, nested inside ROSTER_UPDATED
    PLAYER_ADDED = "player_added"
    PLAYER_REMOVED = "player_removed"
    PLAYER_UPDATED = "player_updated"


class UpdateType(str, Enum):
    CHANGES = "changes"


class RegionOutcome(str, Enum):
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    FAILED = "failed"

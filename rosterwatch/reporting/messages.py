from typing import List, Optional, Union

from rosterwatch.models.changes import (
    FieldDelta,
    PlayerAdded,
    PlayerRemoved,
    PlayerUpdated,
    TeamAdded,
    TeamRemoved,
)
from rosterwatch.models.team import Player

# Notification titles
ROSTER_UPDATED_TITLE = "Roster updated"
TEAM_ADDED_TITLE = "New team added"
TEAM_REMOVED_TITLE = "Team removed"

TWEET_TEMPLATE = (
    "\U0001f6a8 VCT DATABASE UPDATE \U0001f6a8\n\n"
    "{message}\n\n"
    "#VCT #VALORANTChampionsTour #VALORANT"
)

# Player fields surfaced to users, with their labels. Order is message order.
TRACKED_PLAYER_FIELDS = (
    ("status", "roster status"),
    ("end", "contract end date"),
)


def player_display_name(player: Player) -> str:
    return f'{player.legal_name} "{player.name}" {player.legal_surname}'


def player_field_deltas(change: PlayerUpdated) -> List[FieldDelta]:
    """The tracked fields that differ between the old and new player."""
    deltas: List[FieldDelta] = []
    for attr, label in TRACKED_PLAYER_FIELDS:
        old_value = getattr(change.old, attr)
        new_value = getattr(change.new, attr)
        if old_value != new_value:
            deltas.append(FieldDelta(field=label, from_value=old_value, to_value=new_value))
    return deltas


def create_change_message(change: object, team: str) -> Optional[str]:
    """Human-readable sentence for a player-level change, or None.

    Anything that is not a player change (team info updates included)
    yields None, as does an update touching only untracked fields.
    """
    if isinstance(change, PlayerAdded):
        player = change.player
        return (
            f"{player_display_name(player)} has been added to {team} "
            f"with a {player.end} contract"
        )

    if isinstance(change, PlayerRemoved):
        return f"{player_display_name(change.player)} has been removed from {team}"

    if isinstance(change, PlayerUpdated):
        deltas = player_field_deltas(change)
        if not deltas:
            return None
        name = player_display_name(change.new)
        return "\n".join(
            f"{name} ({team}) {d.field} was changed from {d.from_value} to {d.to_value}"
            for d in deltas
        )

    return None


def create_team_message(change: Union[TeamAdded, TeamRemoved], region: str) -> str:
    if isinstance(change, TeamAdded):
        return f"New team {change.team} has been added to {region}"
    return f"Team {change.team} has been removed from {region}"


def format_tweet(message: str) -> str:
    return TWEET_TEMPLATE.format(message=message)

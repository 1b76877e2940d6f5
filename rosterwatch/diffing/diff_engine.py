"""
Change detection between two generations of a region's teams.

Teams are matched by ``team`` name and players by ``name`` within a team.
Lookups take the first match, so a name listed twice in one list only ever
pairs with its first occurrence. Equality is structural over every field.
"""

from typing import Any, List, Optional, Sequence, TypeVar

from pydantic import BaseModel

from rosterwatch.models.changes import (
    ChangeRecord,
    PlayerAdded,
    PlayerChange,
    PlayerRemoved,
    PlayerUpdated,
    RosterUpdated,
    TeamAdded,
    TeamInfoUpdated,
    TeamRemoved,
)
from rosterwatch.models.team import Player, Team

ModelT = TypeVar("ModelT", bound=BaseModel)


def deep_equal(old: Any, new: Any) -> bool:
    """Structural equality for models, lists of models, and plain JSON values."""
    return _plain(old) == _plain(new)


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _find(items: Sequence[ModelT], attr: str, key: str) -> Optional[ModelT]:
    return next((item for item in items if getattr(item, attr) == key), None)


def find_roster_changes(
    old_roster: Sequence[Player], new_roster: Sequence[Player]
) -> List[PlayerChange]:
    changes: List[PlayerChange] = []

    for new_player in new_roster:
        old_player = _find(old_roster, "name", new_player.name)
        if old_player is None:
            changes.append(PlayerAdded(player=new_player))
        elif not deep_equal(old_player, new_player):
            changes.append(
                PlayerUpdated(player=new_player.name, old=old_player, new=new_player)
            )

    for old_player in old_roster:
        if _find(new_roster, "name", old_player.name) is None:
            changes.append(PlayerRemoved(player=old_player))

    return changes


def find_team_changes(
    old_teams: Sequence[Team], new_teams: Sequence[Team]
) -> List[ChangeRecord]:
    """Classifies every difference between two team lists.

    Additions and updates come first, in ``new_teams`` order; removals
    follow in ``old_teams`` order. A modified team can yield both a
    ``roster_updated`` and a ``team_info_updated`` record, in that order.
    """
    changes: List[ChangeRecord] = []

    for new_team in new_teams:
        old_team = _find(old_teams, "team", new_team.team)

        if old_team is None:
            changes.append(TeamAdded(team=new_team.team, data=new_team))
            continue
        if deep_equal(old_team, new_team):
            continue

        roster_changes = find_roster_changes(old_team.roster, new_team.roster)
        if roster_changes:
            changes.append(RosterUpdated(team=new_team.team, changes=roster_changes))

        if not deep_equal(old_team.info, new_team.info):
            changes.append(
                TeamInfoUpdated(team=new_team.team, old=old_team.info, new=new_team.info)
            )

    for old_team in old_teams:
        if _find(new_teams, "team", old_team.team) is None:
            changes.append(TeamRemoved(team=old_team.team, data=old_team))

    return changes

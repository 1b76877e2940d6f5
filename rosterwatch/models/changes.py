from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import ChangeType
from .team import Player, Team, TeamInfo


class PlayerAdded(BaseModel):
    type: Literal[ChangeType.PLAYER_ADDED] = ChangeType.PLAYER_ADDED
    player: Player


class PlayerRemoved(BaseModel):
    type: Literal[ChangeType.PLAYER_REMOVED] = ChangeType.PLAYER_REMOVED
    player: Player


class PlayerUpdated(BaseModel):
    """Carries both full player objects; field extraction happens in the formatter."""

    type: Literal[ChangeType.PLAYER_UPDATED] = ChangeType.PLAYER_UPDATED
    player: str  # Player name
    old: Player
    new: Player


PlayerChange = Annotated[
    Union[PlayerAdded, PlayerRemoved, PlayerUpdated], Field(discriminator="type")
]


class TeamAdded(BaseModel):
    type: Literal[ChangeType.TEAM_ADDED] = ChangeType.TEAM_ADDED
    team: str
    data: Team


class TeamRemoved(BaseModel):
    type: Literal[ChangeType.TEAM_REMOVED] = ChangeType.TEAM_REMOVED
    team: str
    data: Team


class TeamInfoUpdated(BaseModel):
    type: Literal[ChangeType.TEAM_INFO_UPDATED] = ChangeType.TEAM_INFO_UPDATED
    team: str
    old: TeamInfo
    new: TeamInfo


class RosterUpdated(BaseModel):
    type: Literal[ChangeType.ROSTER_UPDATED] = ChangeType.ROSTER_UPDATED
    team: str
    changes: List[PlayerChange]


ChangeRecord = Annotated[
    Union[TeamAdded, TeamRemoved, TeamInfoUpdated, RosterUpdated],
    Field(discriminator="type"),
]


class FieldDelta(BaseModel):
    """One user-facing field difference of a ``player_updated`` change."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str  # Human label, e.g. "roster status"
    from_value: str = Field(..., alias="from")
    to_value: str = Field(..., alias="to")

from typing import List

from pydantic import BaseModel, Field


class Player(BaseModel):
    """A rostered player. Identified by ``name`` within a team's roster."""

    name: str = Field(..., description="Tournament display name (the identity key).")
    status: str = ""  # Roster status, e.g. "Active" / "Inactive"
    end: str = ""  # Contract end date as published in the sheet
    legal_name: str = ""
    legal_surname: str = ""


class TeamInfo(BaseModel):
    """The team fields compared for ``team_info_updated``; the name is the match key."""

    region: str = ""
    tag: str = ""
    manager: str = ""


class Team(BaseModel):
    """A team and its ordered roster. Identified by ``team`` within a region."""

    team: str
    region: str = ""  # League column of the sheet
    tag: str = ""
    manager: str = ""  # Contact info column
    roster: List[Player] = []

    @property
    def info(self) -> TeamInfo:
        return TeamInfo(region=self.region, tag=self.tag, manager=self.manager)

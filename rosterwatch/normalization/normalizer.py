from collections import Counter
from typing import List, Optional, Sequence

from loguru import logger

from rosterwatch.models.team import Player, Team

# Fixed column layout of the published roster sheets
COLUMNS = (
    "league",
    "team",
    "tournament",
    "role",
    "first_name",
    "family_name",
    "end_date",
    "resident_status",
    "roster_status",
    "team_tag",
    "contact_info",
)
HEADER_ROWS = 2


class NormalizationError(Exception):
    """Custom exception for data normalization errors."""

    pass


class ValidationError(NormalizationError):
    """Normalization produced no teams; treated as a broken export, not a wipe."""

    pass


def _is_blank(cell: Optional[str]) -> bool:
    return not cell or not cell.strip()


class RosterNormalizer:
    """Turns raw sheet rows into teams with nested rosters.

    A blank row is a section break: it closes the current team. A non-blank
    team cell that differs from the current team opens a new one, so a team
    listed again after a break becomes a second, separate Team object.
    Players are only taken from rows with both legal name cells filled in.
    Teams whose roster ends up empty are dropped.
    """

    def normalize(self, rows: Sequence[Sequence[str]]) -> List[Team]:
        teams: List[Team] = []
        current_team: Optional[Team] = None

        for index, raw_row in enumerate(rows):
            if index < HEADER_ROWS:
                continue

            if all(_is_blank(cell) for cell in raw_row):
                current_team = None
                continue

            row = dict(zip(COLUMNS, self._pad(raw_row)))

            team_name = row["team"]
            if current_team is None or current_team.team != team_name:
                if not _is_blank(team_name):
                    current_team = Team(
                        team=team_name,
                        region=row["league"],
                        tag=row["team_tag"],
                        manager=row["contact_info"],
                        roster=[],
                    )
                    teams.append(current_team)

            if (
                current_team is not None
                and not _is_blank(row["first_name"])
                and not _is_blank(row["family_name"])
            ):
                current_team.roster.append(
                    Player(
                        name=row["tournament"],
                        status=row["roster_status"],
                        end=row["end_date"],
                        legal_name=row["first_name"],
                        legal_surname=row["family_name"],
                    )
                )

        normalized = [team for team in teams if team.roster]
        dropped = len(teams) - len(normalized)
        if dropped:
            logger.debug(f"Dropped {dropped} team(s) with an empty roster.")

        duplicates = sorted(
            name for name, count in Counter(t.team for t in normalized).items() if count > 1
        )
        if duplicates:
            # Diffing matches the first team of a given name only
            logger.warning(
                f"Team(s) listed in more than one section: {', '.join(duplicates)}"
            )

        logger.debug(
            f"Normalization complete. Produced {len(normalized)} teams from {len(rows)} rows."
        )
        return normalized

    @staticmethod
    def _pad(row: Sequence[str]) -> List[str]:
        cells = [cell if cell is not None else "" for cell in row[: len(COLUMNS)]]
        return cells + [""] * (len(COLUMNS) - len(cells))


def ensure_teams(teams: List[Team]) -> List[Team]:
    """Rejects an empty normalization result."""
    if not teams:
        raise ValidationError("No valid data processed")
    return teams

"""Shared fixtures and fakes for rosterwatch tests."""

from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from rosterwatch.models.team import Player, Team
from rosterwatch.storage.document_store import JsonFileStore
from rosterwatch.storage.snapshot_store import SnapshotStore

HEADER = [
    "League", "Team", "Tournament", "Role", "First Name", "Family Name",
    "End Date", "Resident Status", "Roster Status", "Team Tag", "Contact",
]


def make_player(name: str = "Alice", **overrides) -> Player:
    fields = {
        "name": name,
        "status": "Active",
        "end": "2025-12-31",
        "legal_name": name,
        "legal_surname": "Smith",
    }
    fields.update(overrides)
    return Player(**fields)


def make_team(name: str = "Team A", roster: Optional[List[Player]] = None, **overrides) -> Team:
    fields = {
        "team": name,
        "region": "EMEA",
        "tag": "TA",
        "manager": "mgr@x.com",
        "roster": roster if roster is not None else [make_player()],
    }
    fields.update(overrides)
    return Team(**fields)


def sheet_row(
    team: str = "Team A",
    player: str = "Alice",
    first: str = "Alice",
    family: str = "Smith",
    end: str = "2025-12-31",
    status: str = "Active",
    league: str = "EMEA",
    tag: str = "TA",
    contact: str = "mgr@x.com",
) -> List[str]:
    return [league, team, player, "Duelist", first, family, end, "Resident", status, tag, contact]


def sheet_csv(*rows: List[str]) -> str:
    """Renders header rows plus ``rows`` as CSV; an empty list renders a blank line."""
    lines = [",".join(HEADER), ",".join(HEADER)]
    lines.extend(",".join(row) for row in rows)
    return "\n".join(lines) + "\n"


class FakeNotifier:
    def __init__(self) -> None:
        self.sent: List[tuple] = []

    def notify(self, message: str, title: str) -> None:
        self.sent.append((message, title))


class FakePoster:
    def __init__(self) -> None:
        self.posts: List[str] = []

    def post(self, text: str) -> None:
        self.posts.append(text)


class FakeScraper:
    """Serves canned CSV per URL; an Exception value is raised instead."""

    def __init__(self, responses: Dict[str, object]) -> None:
        self.responses = responses
        self.calls: List[str] = []

    async def fetch_csv(self, url: str) -> str:
        self.calls.append(url)
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def json_store(tmp_path) -> JsonFileStore:
    return JsonFileStore(str(tmp_path / "data"))


@pytest.fixture
def snapshot_store(json_store) -> SnapshotStore:
    return SnapshotStore(json_store)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def poster() -> FakePoster:
    return FakePoster()

"""Tests for rosterwatch.reporting.messages."""

from __future__ import annotations

from conftest import make_player, make_team
from rosterwatch.models.changes import (
    FieldDelta,
    PlayerAdded,
    PlayerRemoved,
    PlayerUpdated,
    TeamAdded,
    TeamInfoUpdated,
    TeamRemoved,
)
from rosterwatch.models.team import Player
from rosterwatch.reporting.messages import (
    create_change_message,
    create_team_message,
    format_tweet,
    player_field_deltas,
)


def bob() -> Player:
    return make_player("Bob", legal_name="Robert", legal_surname="Jones", end="2026-11-30")


# ── player changes ────────────────────────────────────────────────────────────


def test_player_added_message() -> None:
    message = create_change_message(PlayerAdded(player=bob()), "Team A")
    assert message == 'Robert "Bob" Jones has been added to Team A with a 2026-11-30 contract'


def test_player_removed_message() -> None:
    message = create_change_message(PlayerRemoved(player=bob()), "Team A")
    assert message == 'Robert "Bob" Jones has been removed from Team A'


def test_status_change_message() -> None:
    old = make_player("Alice", status="Active")
    new = make_player("Alice", status="Inactive")
    message = create_change_message(PlayerUpdated(player="Alice", old=old, new=new), "Team A")
    assert message == 'Alice "Alice" Smith (Team A) roster status was changed from Active to Inactive'


def test_status_and_end_date_change_joined_by_newline() -> None:
    old = make_player("Alice", status="Active", end="2025-12-31")
    new = make_player("Alice", status="Inactive", end="2026-06-30")
    message = create_change_message(PlayerUpdated(player="Alice", old=old, new=new), "Team A")
    assert message.split("\n") == [
        'Alice "Alice" Smith (Team A) roster status was changed from Active to Inactive',
        'Alice "Alice" Smith (Team A) contract end date was changed from 2025-12-31 to 2026-06-30',
    ]


def test_update_uses_new_player_names() -> None:
    old = make_player("Alice", legal_surname="Smith", end="2025-12-31")
    new = make_player("Alice", legal_surname="Jones", end="2026-12-31")
    message = create_change_message(PlayerUpdated(player="Alice", old=old, new=new), "Team A")
    assert message.startswith('Alice "Alice" Jones (Team A) contract end date')


def test_untracked_field_change_has_no_message() -> None:
    """A legal-name-only update is recorded but produces no text."""
    old = make_player("Alice", legal_name="Alice")
    new = make_player("Alice", legal_name="Alicia")
    change = PlayerUpdated(player="Alice", old=old, new=new)
    assert player_field_deltas(change) == []
    assert create_change_message(change, "Team A") is None


def test_field_deltas_use_labels() -> None:
    old = make_player("Alice", status="Active")
    new = make_player("Alice", status="Benched")
    deltas = player_field_deltas(PlayerUpdated(player="Alice", old=old, new=new))
    assert deltas == [FieldDelta(field="roster status", from_value="Active", to_value="Benched")]
    assert deltas[0].model_dump(by_alias=True) == {
        "field": "roster status",
        "from": "Active",
        "to": "Benched",
    }


def test_non_player_change_has_no_message() -> None:
    team = make_team()
    change = TeamInfoUpdated(team="Team A", old=team.info, new=team.info)
    assert create_change_message(change, "Team A") is None


# ── team changes ──────────────────────────────────────────────────────────────


def test_team_added_message() -> None:
    change = TeamAdded(team="TeamX", data=make_team("TeamX"))
    assert create_team_message(change, "EMEA") == "New team TeamX has been added to EMEA"


def test_team_removed_message() -> None:
    change = TeamRemoved(team="TeamX", data=make_team("TeamX"))
    assert create_team_message(change, "PACIFIC") == "Team TeamX has been removed from PACIFIC"


# ── tweet ─────────────────────────────────────────────────────────────────────


def test_format_tweet_wraps_message() -> None:
    assert format_tweet("hello") == (
        "\U0001f6a8 VCT DATABASE UPDATE \U0001f6a8\n\n"
        "hello\n\n"
        "#VCT #VALORANTChampionsTour #VALORANT"
    )


def test_format_tweet_keeps_braces_in_message() -> None:
    assert "{team}" in format_tweet("Team {team} renamed")

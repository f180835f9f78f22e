"""
Tests for the day vote tally.
"""

import pytest
from mafia_engine.config.game_config import GameConfig
from mafia_engine.core import GameSession, GamePhase, Moderator, Roster
from mafia_engine.phases import VoteTally


@pytest.fixture
def village(make_player):
    """Six living civilians a-f in day voting."""
    session = GameSession(roster=Roster(make_player(pid) for pid in "abcdef"))
    session.phase = GamePhase.DAY_VOTING
    session.day_number = 1
    return session


@pytest.fixture
def tally(village):
    return VoteTally(village)


def test_record_vote(tally, village):
    assert tally.record_vote("a", "b")
    voter = village.get_player("a")
    assert voter.has_voted
    assert voter.vote_target == "b"
    assert village.vote_counts == {"b": 1}


def test_second_vote_ignored(tally, village):
    tally.record_vote("a", "b")
    assert not tally.record_vote("a", "c")
    assert village.vote_counts == {"b": 1}
    assert village.get_player("a").vote_target == "b"


def test_unknown_voter_ignored(tally, village):
    assert not tally.record_vote("zed", "b")
    assert village.vote_counts == {}


def test_dead_voter_ignored(tally, village):
    village.get_player("a").eliminate()
    assert not tally.record_vote("a", "b")
    assert village.vote_counts == {}


def test_unknown_target_ignored(tally, village):
    assert not tally.record_vote("a", "zed")
    assert village.vote_counts == {}
    assert not village.get_player("a").has_voted


def test_highest_count_eliminated(tally, village):
    # c:1, a:2, b:3
    tally.record_vote("a", "c")
    tally.record_vote("b", "a")
    tally.record_vote("c", "a")
    tally.record_vote("d", "b")
    tally.record_vote("e", "b")
    tally.record_vote("f", "b")

    assert tally.resolve() == "b"
    assert not village.get_player("b").is_alive


def test_tie_goes_to_first_recorded(tally, village):
    tally.record_vote("c", "a")
    tally.record_vote("d", "b")

    assert tally.resolve() == "a"
    assert not village.get_player("a").is_alive
    assert village.get_player("b").is_alive


def test_tie_order_follows_first_vote_not_last(tally, village):
    tally.record_vote("a", "b")
    tally.record_vote("b", "c")
    tally.record_vote("c", "c")
    tally.record_vote("d", "b")

    assert tally.resolve() == "b"


def test_no_votes_no_elimination(tally, village):
    assert tally.resolve() is None
    assert len(village.get_alive_players()) == 6


def test_votes_reset_after_resolution(tally, village):
    tally.record_vote("a", "b")
    tally.record_vote("c", "d")
    tally.resolve()

    assert village.vote_counts == {}
    for player in village.roster:
        assert not player.has_voted
        assert player.vote_target is None

    # A new cycle accepts votes again
    assert tally.record_vote("c", "d")


def test_get_voters(tally):
    tally.record_vote("a", "b")
    tally.record_vote("c", "b")
    tally.record_vote("b", "a")
    assert tally.get_voters() == {"b": ["a", "c"], "a": ["b"]}


@pytest.fixture
def moderator():
    return Moderator(GameConfig(use_moderator_announcements=True))


def test_departed_target_announced(village, moderator):
    tally = VoteTally(village, moderator)
    tally.record_vote("a", "b")
    tally.record_vote("c", "b")
    village.get_player("b").disconnect()

    assert tally.resolve() is None
    assert moderator.announcements == ["B has already left the match. Nobody is eliminated."]
    assert village.vote_counts == {}


def test_empty_vote_announced(village, moderator):
    VoteTally(village, moderator).resolve()
    assert moderator.announcements == ["No votes were cast. Nobody is eliminated."]

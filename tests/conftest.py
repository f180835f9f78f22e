"""
Pytest fixtures for Mafia engine tests.
"""

import pytest
from typing import Dict

from mafia_engine.core import (
    GameSession, GamePhase, Player, Roster, RoleType, SnapshotHistory,
)
from mafia_engine.config.game_config import GameConfig
from mafia_engine.match import PhaseStateMachine


def _make_player(player_id: str, role: RoleType = RoleType.CIVILIAN, alive: bool = True) -> Player:
    """Helper to build a player with a fixed role."""
    player = Player(player_id=player_id, display_name=player_id.title(), role=role)
    if not alive:
        player.eliminate()
    return player


@pytest.fixture
def game_config():
    """Test configuration."""
    return GameConfig(
        use_moderator_announcements=False,  # Disable for cleaner test output
        random_seed=1234,
    )


@pytest.fixture
def four_players() -> Dict[str, Player]:
    """Mafia, Doctor, Detective and Civilian, keyed by role name."""
    return {
        "mafia": _make_player("mafia", RoleType.MAFIA),
        "doctor": _make_player("doctor", RoleType.DOCTOR),
        "detective": _make_player("detective", RoleType.DETECTIVE),
        "civilian": _make_player("civilian", RoleType.CIVILIAN),
    }


@pytest.fixture
def session(four_players) -> GameSession:
    """Session in the first night with fixed roles."""
    state = GameSession(roster=Roster(four_players.values()))
    state.roster.freeze()
    state.phase = GamePhase.NIGHT_MAFIA
    state.night_number = 1
    return state


@pytest.fixture
def history() -> SnapshotHistory:
    return SnapshotHistory()


@pytest.fixture
def machine(game_config, history) -> PhaseStateMachine:
    """State machine in the lobby with four joined players."""
    sm = PhaseStateMachine(game_config, sink=history)
    for name in ("alice", "bob", "carol", "dave"):
        sm.join(name, name.title())
    return sm


@pytest.fixture
def make_player():
    """Factory for players with a fixed role."""
    return _make_player

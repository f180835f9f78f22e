"""
Core rules components: roles, players, roster, session state, win evaluation and snapshots.
"""

from .roles import RoleType, Team, get_role_distribution
from .player import Player, PlayerStatus
from .roster import Roster
from .role_assigner import RoleAssigner
from .game_engine import GameSession, GamePhase, NIGHT_PHASE_ROLES, ROLE_NIGHT_PHASES
from .win_evaluator import WinEvaluator
from .snapshot import (
    Snapshot, PlayerView, PrivateView,
    SnapshotSink, CompositeSink, SnapshotHistory,
)
from .moderator import Moderator, CommandResult

__all__ = [
    'RoleType',
    'Team',
    'get_role_distribution',
    'Player',
    'PlayerStatus',
    'Roster',
    'RoleAssigner',
    'GameSession',
    'GamePhase',
    'NIGHT_PHASE_ROLES',
    'ROLE_NIGHT_PHASES',
    'WinEvaluator',
    'Snapshot',
    'PlayerView',
    'PrivateView',
    'SnapshotSink',
    'CompositeSink',
    'SnapshotHistory',
    'Moderator',
    'CommandResult',
]

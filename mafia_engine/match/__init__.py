"""
Match orchestration: the phase state machine and its serialized command host.
"""

from .state_machine import PhaseStateMachine
from .host import (
    MatchHost, Command,
    JoinCommand, DisconnectCommand, StartMatchCommand,
    NightTargetCommand, VoteCommand, AdvancePhaseCommand,
)

__all__ = [
    'PhaseStateMachine',
    'MatchHost',
    'Command',
    'JoinCommand',
    'DisconnectCommand',
    'StartMatchCommand',
    'NightTargetCommand',
    'VoteCommand',
    'AdvancePhaseCommand',
]

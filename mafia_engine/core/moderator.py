"""
Moderator: announcements and validation of inbound player commands.
"""

from typing import List, Optional, TYPE_CHECKING
from dataclasses import dataclass

from .game_engine import GameSession, GamePhase, ROLE_NIGHT_PHASES
from .roles import RoleType
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


@dataclass
class CommandResult:
    """Outcome of a command. Rejected commands never change state."""
    accepted: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.accepted


class Moderator:
    """Announces what happens in the match and screens player commands."""

    def __init__(self, config: GameConfig = default_config, event_emitter: Optional['EventEmitter'] = None):
        self.config = config
        self.event_emitter = event_emitter
        self.announcements: List[str] = []

    def announce(self, message: str, session: Optional[GameSession] = None) -> None:
        """Make a moderator announcement."""
        if not self.config.use_moderator_announcements:
            return
        self.announcements.append(message)
        print(f"[MODERATOR] {message}")
        if self.event_emitter and session is not None:
            self.event_emitter.emit_announcement(
                message,
                session.phase.value,
                session.day_number,
                session.night_number
            )

    def check_night_target(self, session: GameSession, role: RoleType,
                           actor_id: str, target_id: str) -> CommandResult:
        """Validate a kill/save/investigate submission."""
        night_phase = ROLE_NIGHT_PHASES.get(role)
        if night_phase is None:
            return CommandResult(False, f"{role.value} has no night action")
        if session.phase != night_phase:
            return CommandResult(False, f"Not the {role.value}'s turn")

        actor = session.get_player(actor_id)
        if actor is None or not actor.is_alive:
            return CommandResult(False, f"Player {actor_id} cannot act")
        if actor.role is not role:
            return CommandResult(False, f"Player {actor_id} is not the {role.value}")

        target = session.get_player(target_id)
        if target is None or not target.is_alive:
            return CommandResult(False, f"Player {target_id} is not a valid target")

        return CommandResult(True, "Accepted")

    def check_vote(self, session: GameSession, voter_id: str, target_id: str) -> CommandResult:
        """
        Validate the phase and target of a vote. Voter eligibility is
        enforced by the vote tally itself.
        """
        if session.phase != GamePhase.DAY_VOTING:
            return CommandResult(False, "Not in voting phase")
        target = session.get_player(target_id)
        if target is None or not target.is_alive:
            return CommandResult(False, f"Player {target_id} is not available for voting")
        return CommandResult(True, "Accepted")

"""
Night resolution: mafia kill, doctor save and detective investigation.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Any, TYPE_CHECKING

from ..core.game_engine import GameSession
from ..core.moderator import Moderator
from ..core.roles import RoleType

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


@dataclass
class NightOutcome:
    """What happened during one night."""
    night_number: int
    killed: Optional[str] = None
    saved: Optional[str] = None
    investigated: Optional[str] = None
    investigated_role: Optional[RoleType] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "night_number": self.night_number,
            "killed": self.killed,
            "saved": self.saved,
        }


class NightResolver:
    """Applies the night's actions to the roster once per night cycle."""

    def __init__(self, moderator: Optional[Moderator] = None, event_emitter: Optional['EventEmitter'] = None):
        self.moderator = moderator
        self.event_emitter = event_emitter

    def resolve(self, session: GameSession) -> NightOutcome:
        """
        Resolve the night and clear all night targets.

        The mafia target dies unless the doctor chose the same player. The
        detective's result is stored on the detective only.
        """
        outcome = NightOutcome(night_number=session.night_number)

        target = session.mafia_target
        if target is not None:
            if target == session.doctor_target:
                outcome.saved = target
            elif session.eliminate_player(target, "night kill") is not None:
                outcome.killed = target

        self._investigate(session, outcome)
        session.clear_night_targets()

        self._announce(session, outcome)
        return outcome

    def _investigate(self, session: GameSession, outcome: NightOutcome) -> None:
        """Record the detective's check, if one was made."""
        suspect = session.get_player(session.detective_target)
        if suspect is None:
            return
        for detective in session.roster.find_role(RoleType.DETECTIVE):
            detective.add_investigation(session.night_number, suspect.player_id, suspect.role)
        outcome.investigated = suspect.player_id
        outcome.investigated_role = suspect.role

    def _announce(self, session: GameSession, outcome: NightOutcome) -> None:
        if self.event_emitter:
            self.event_emitter.emit_night_result(outcome.to_dict())
            if outcome.killed:
                self.event_emitter.emit_elimination(outcome.killed, "night kill", night_number=outcome.night_number)
        if self.moderator is None:
            return
        if outcome.killed:
            victim = session.get_player(outcome.killed)
            self.moderator.announce(f"{victim.display_name} was killed last night.", session)
        elif outcome.saved:
            self.moderator.announce("The doctor saved someone last night. Nobody died.", session)
        else:
            self.moderator.announce("Nobody died last night.", session)

"""
Core match state: phases and the authoritative game session.
"""

from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from .roles import RoleType, Team
from .player import Player
from .roster import Roster


class GamePhase(Enum):
    """Current game phase."""
    LOBBY = "lobby"
    ROLE_ASSIGNMENT = "role_assignment"
    NIGHT_MAFIA = "night_mafia"
    NIGHT_DOCTOR = "night_doctor"
    NIGHT_DETECTIVE = "night_detective"
    DAY_DISCUSSION = "day_discussion"
    DAY_VOTING = "day_voting"
    ELIMINATION = "elimination"  # Legacy: nothing transitions here in the normal flow
    GAME_END = "game_end"

    @property
    def is_night(self) -> bool:
        return self in NIGHT_PHASE_ROLES

    @property
    def is_timed(self) -> bool:
        """Timed phases advance on their own when the countdown expires."""
        return self in (GamePhase.DAY_DISCUSSION, GamePhase.DAY_VOTING)


# Which role acts in each night phase
NIGHT_PHASE_ROLES: Dict[GamePhase, RoleType] = {
    GamePhase.NIGHT_MAFIA: RoleType.MAFIA,
    GamePhase.NIGHT_DOCTOR: RoleType.DOCTOR,
    GamePhase.NIGHT_DETECTIVE: RoleType.DETECTIVE,
}

ROLE_NIGHT_PHASES: Dict[RoleType, GamePhase] = {role: phase for phase, role in NIGHT_PHASE_ROLES.items()}


@dataclass
class GameSession:
    """Complete state of one match."""
    roster: Roster = field(default_factory=Roster)
    phase: GamePhase = GamePhase.LOBBY
    phase_timer: float = 0.0
    night_number: int = 0
    day_number: int = 0

    # Night actions, cleared at the start of every NightMafia phase
    mafia_target: Optional[str] = None
    doctor_target: Optional[str] = None
    detective_target: Optional[str] = None

    # Day voting: {target_id: votes}, in order of each target's first vote
    vote_counts: Dict[str, int] = field(default_factory=dict)

    # Game history
    action_log: List[Dict[str, Any]] = field(default_factory=list)

    winner: Optional[Team] = None

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        """Get player by id."""
        return self.roster.get(player_id)

    def get_alive_players(self) -> List[Player]:
        """Get all alive players."""
        return self.roster.get_alive_players()

    def get_night_target(self, role: RoleType) -> Optional[str]:
        if role is RoleType.MAFIA:
            return self.mafia_target
        if role is RoleType.DOCTOR:
            return self.doctor_target
        if role is RoleType.DETECTIVE:
            return self.detective_target
        return None

    def set_night_target(self, role: RoleType, target_id: Optional[str]) -> None:
        if role is RoleType.MAFIA:
            self.mafia_target = target_id
        elif role is RoleType.DOCTOR:
            self.doctor_target = target_id
        elif role is RoleType.DETECTIVE:
            self.detective_target = target_id
        else:
            raise ValueError(f"{role.value} has no night action")

    def clear_night_targets(self) -> None:
        self.mafia_target = None
        self.doctor_target = None
        self.detective_target = None

    def eliminate_player(self, player_id: str, reason: str = "eliminated") -> Optional[Player]:
        """Eliminate a living player. Returns the player, or None if nothing changed."""
        player = self.get_player(player_id)
        if player is None or not player.is_alive:
            return None
        player.eliminate()
        self.log_action("player_eliminated", {
            "player": player_id,
            "role": player.role.value,
            "reason": reason,
        })
        return player

    def end_game(self, winner: Team) -> None:
        """End the match with a winner."""
        self.phase = GamePhase.GAME_END
        self.phase_timer = 0.0
        self.winner = winner
        self.log_action("game_over", {"winner": winner.value})

    def log_action(self, action_type: str, data: Dict[str, Any]) -> None:
        """Log a game action."""
        self.action_log.append({
            "type": action_type,
            "phase": self.phase.value,
            "day": self.day_number,
            "night": self.night_number,
            "data": data
        })

    def get_game_summary(self) -> Dict[str, Any]:
        """Get a summary of the current game state."""
        return {
            "phase": self.phase.value,
            "day": self.day_number,
            "night": self.night_number,
            "players": len(self.roster),
            "alive_players": len(self.get_alive_players()),
            "alive_mafia": len(self.roster.get_alive_mafia()),
            "alive_others": len(self.roster.get_alive_others()),
            "winner": self.winner.value if self.winner else None,
        }

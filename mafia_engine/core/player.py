"""
Player class representing a match participant.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Any
from enum import Enum

from .roles import RoleType


class PlayerStatus(Enum):
    """Player status in the match."""
    ALIVE = "alive"
    ELIMINATED = "eliminated"
    DISCONNECTED = "disconnected"


@dataclass
class Player:
    """Represents a player in the match."""
    player_id: str
    display_name: str
    role: RoleType = RoleType.CIVILIAN
    status: PlayerStatus = PlayerStatus.ALIVE

    # Day voting
    vote_target: Optional[str] = None
    has_voted: bool = False

    # Private information (detective only)
    investigations: Dict[int, Dict[str, str]] = field(default_factory=dict)  # {night_number: {"target": id, "role": "Mafia"}}

    def __str__(self) -> str:
        return f"{self.display_name} ({self.role.value})"

    @property
    def is_alive(self) -> bool:
        """Check if player is alive."""
        return self.status == PlayerStatus.ALIVE

    @property
    def is_mafia(self) -> bool:
        return self.role.is_mafia

    def vote(self, target_id: str) -> None:
        """Record a vote. Callers check `has_voted` first."""
        self.vote_target = target_id
        self.has_voted = True

    def clear_vote(self) -> None:
        self.vote_target = None
        self.has_voted = False

    def eliminate(self) -> None:
        """Mark player as eliminated."""
        self.status = PlayerStatus.ELIMINATED

    def disconnect(self) -> None:
        """Mark player as having left mid-match."""
        self.status = PlayerStatus.DISCONNECTED

    def reset_for_match(self) -> None:
        """Clear per-match state before roles are dealt."""
        self.status = PlayerStatus.ALIVE
        self.clear_vote()
        self.investigations = {}

    def add_investigation(self, night_number: int, target_id: str, role: RoleType) -> None:
        """Record a Detective investigation result."""
        self.investigations[night_number] = {"target": target_id, "role": role.value}

    def get_private_info(self) -> Dict[str, Any]:
        """Get player's private information based on their role."""
        info: Dict[str, Any] = {"role": self.role.value}
        if self.role is RoleType.DETECTIVE:
            info["investigations"] = {n: dict(result) for n, result in self.investigations.items()}
        return info

"""
Role definitions for the Mafia game.
"""

from enum import Enum
from typing import List


class Team(Enum):
    """Side that can win a match."""
    CIVILIANS = "Civilians"
    MAFIA = "Mafia"


class RoleType(Enum):
    """Hidden roles a player can hold."""
    MAFIA = "Mafia"
    DOCTOR = "Doctor"
    DETECTIVE = "Detective"
    CIVILIAN = "Civilian"

    def __str__(self) -> str:
        return self.value

    @property
    def team(self) -> Team:
        """Team this role plays for."""
        return Team.MAFIA if self is RoleType.MAFIA else Team.CIVILIANS

    @property
    def is_mafia(self) -> bool:
        return self is RoleType.MAFIA

    @property
    def has_night_action(self) -> bool:
        """Check if role acts during one of the night phases."""
        return self in SPECIAL_ROLES


# Order matters: the role pool is always built from the front of this list.
SPECIAL_ROLES = [RoleType.MAFIA, RoleType.DOCTOR, RoleType.DETECTIVE]


def get_role_distribution(player_count: int) -> List[RoleType]:
    """
    Build the role pool for a match of `player_count` players.

    The pool starts with Mafia, Doctor and Detective in that order and is
    padded with Civilians. With fewer than three players the pool is
    truncated from the back, so one player gets Mafia and two players get
    Mafia and Doctor.
    """
    if player_count <= 0:
        return []
    pool = SPECIAL_ROLES[:player_count]
    pool.extend([RoleType.CIVILIAN] * (player_count - len(pool)))
    return pool

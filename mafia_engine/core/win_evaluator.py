"""
Win condition evaluation.
"""

from typing import Optional

from .game_engine import GameSession
from .roles import Team


class WinEvaluator:
    """Decides whether a match has concluded and for whom."""

    def check(self, session: GameSession) -> Optional[Team]:
        """
        Check if the match has ended and return the winning team.
        Returns None if the match continues.
        """
        alive_mafia = len(session.roster.get_alive_mafia())
        alive_others = len(session.roster.get_alive_others())

        # Civilians win: all mafia eliminated
        if alive_mafia == 0:
            return Team.CIVILIANS

        # Mafia wins: equal numbers or more mafia than everyone else
        if alive_mafia >= alive_others:
            return Team.MAFIA

        return None

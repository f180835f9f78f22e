"""
Dummy Agent implementation with seeded random behavior.
"""

import random
from typing import Optional, Set

from .base_agent import BaseAgent, AgentContext
from ..core import Player, RoleType
from ..config.game_config import GameConfig, default_config


class DummyAgent(BaseAgent):
    """
    Simple bot with reproducible random behavior:
    - Mafia: kill a random living player other than itself
    - Doctor: save a random living player (itself included)
    - Detective: investigate a living player it has not checked yet,
      and vote for any Mafia it has found
    - Everyone: vote for a random other living player
    """

    def __init__(self, player: Player, config: GameConfig = default_config, seat: int = 0):
        super().__init__(player, config)
        # Combine seed with seat so each bot has different but reproducible randomness
        seed = config.random_seed
        self.random = random.Random(seed + seat) if seed is not None else random.Random()
        self.checked_players: Set[str] = set()

    def get_night_target(self, context: AgentContext) -> Optional[str]:
        role = self.player.role
        others = context.other_alive_players

        if role is RoleType.MAFIA:
            return self.random.choice(others) if others else None

        if role is RoleType.DOCTOR:
            return self.random.choice(context.alive_players) if context.alive_players else None

        if role is RoleType.DETECTIVE:
            unchecked = [pid for pid in others if pid not in self.checked_players]
            candidates = unchecked or others
            if not candidates:
                return None
            target = self.random.choice(candidates)
            self.checked_players.add(target)
            return target

        return None

    def get_vote_choice(self, context: AgentContext) -> Optional[str]:
        others = context.other_alive_players
        if not others:
            return None

        known_mafia = self._known_mafia(context)
        if known_mafia:
            return known_mafia[0]

        return self.random.choice(others)

    def _known_mafia(self, context: AgentContext) -> list:
        """Living players this agent's investigations exposed as Mafia."""
        investigations = context.private_info.get("investigations", {})
        found = [
            result["target"] for result in investigations.values()
            if result.get("role") == RoleType.MAFIA.value
        ]
        return [pid for pid in found if pid in context.other_alive_players]

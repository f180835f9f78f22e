"""
Base agent interface for bot players.
"""

from typing import Dict, List, Any, Optional
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..core import Player, GamePhase, Snapshot
from ..config.game_config import GameConfig, default_config


@dataclass
class AgentContext:
    """What an agent may look at when choosing an action."""
    player: Player
    phase: GamePhase
    night_number: int
    day_number: int
    alive_players: List[str]
    private_info: Dict[str, Any]

    @property
    def other_alive_players(self) -> List[str]:
        return [pid for pid in self.alive_players if pid != self.player.player_id]


class BaseAgent(ABC):
    """
    Abstract base class for all player agents.

    Agents only see the public list of living players and their own private
    information, never other players' roles.
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        """
        Initialize the agent.

        Args:
            player: The player this agent represents
            config: Match configuration
        """
        self.player = player
        self.config = config

    def build_context(self, snapshot: Snapshot) -> AgentContext:
        """Build this agent's view of a snapshot."""
        private = snapshot.private_view(self.player.player_id)
        return AgentContext(
            player=self.player,
            phase=snapshot.phase,
            night_number=snapshot.night_number,
            day_number=snapshot.day_number,
            alive_players=snapshot.alive_ids,
            private_info=private.to_dict() if private else {},
        )

    @abstractmethod
    def get_night_target(self, context: AgentContext) -> Optional[str]:
        """
        Choose the target of this player's night action.

        Args:
            context: Current game context

        Returns:
            Target player id, or None to skip
        """
        pass

    @abstractmethod
    def get_vote_choice(self, context: AgentContext) -> Optional[str]:
        """
        Choose who to vote for.

        Args:
            context: Current game context

        Returns:
            Target player id, or None to abstain
        """
        pass

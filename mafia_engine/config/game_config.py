"""
Game configuration and constants.
"""

from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigError


@dataclass
class GameConfig:
    """Configuration for match parameters."""

    # Phase timers (seconds)
    discussion_seconds: float = 45.0
    voting_seconds: float = 30.0

    # Roster limits
    min_players: int = 1  # Below 3 players the role pool is truncated
    max_players: int = 20

    # Night flow
    auto_advance_night: bool = False  # Advance as soon as the acting role has submitted

    # Moderator announcements
    use_moderator_announcements: bool = True

    # Driver settings
    tick_interval: float = 0.1  # seconds between ticks of the match loop
    max_cycles: int = 50  # Safety limit on night/day cycles in simulations
    runs_dir: str = "runs"
    random_seed: Optional[int] = None  # Random seed for reproducible role assignment and bots

    def validate(self) -> "GameConfig":
        """Raise ConfigError if any value is out of range."""
        if self.discussion_seconds <= 0:
            raise ConfigError("discussion_seconds", self.discussion_seconds, "must be positive")
        if self.voting_seconds <= 0:
            raise ConfigError("voting_seconds", self.voting_seconds, "must be positive")
        if self.min_players < 1:
            raise ConfigError("min_players", self.min_players, "must be at least 1")
        if self.max_players < self.min_players:
            raise ConfigError("max_players", self.max_players, "must not be below min_players")
        if self.tick_interval <= 0:
            raise ConfigError("tick_interval", self.tick_interval, "must be positive")
        if self.max_cycles < 1:
            raise ConfigError("max_cycles", self.max_cycles, "must be at least 1")
        return self


# Default configuration instance
default_config = GameConfig()

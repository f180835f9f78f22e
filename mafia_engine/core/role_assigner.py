"""
Random role assignment at match start.
"""

import random
from typing import Optional, Sequence

from .player import Player
from .roles import get_role_distribution


class RoleAssigner:
    """Deals the role pool to the roster with a fair shuffle."""

    def __init__(self, random_seed: Optional[int] = None, rng: Optional[random.Random] = None):
        # Use seeded random if seed is provided
        self.rng = rng or random.Random(random_seed)

    def assign(self, players: Sequence[Player]) -> None:
        """
        Give every player a role and reset their per-match state.

        `random.Random.shuffle` is a Fisher-Yates shuffle, so every seating
        permutation is equally likely to receive the Mafia role.
        """
        pool = get_role_distribution(len(players))
        shuffled = list(players)
        self.rng.shuffle(shuffled)

        for player, role in zip(shuffled, pool):
            player.role = role
            player.reset_for_match()

"""
Roster: the ordered set of players taking part in a match.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from .player import Player
from .roles import RoleType


class Roster:
    """
    Ordered collection of players keyed by id.

    Iteration order is join order. Membership can change only until the
    roster is frozen at match start; afterwards add/remove are no-ops and a
    departing player is marked disconnected instead.
    """

    def __init__(self, players: Optional[Iterable[Player]] = None):
        self._players: Dict[str, Player] = {}
        self.frozen = False
        for player in players or []:
            self.add(player)

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(list(self._players.values()))

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    @property
    def players(self) -> List[Player]:
        return list(self._players.values())

    def add(self, player: Player) -> bool:
        """
        Add a player. Returns False if the roster is frozen or the id is
        already taken.
        """
        if self.frozen or not player.player_id or player.player_id in self._players:
            return False
        self._players[player.player_id] = player
        return True

    def join(self, player_id: str, display_name: Optional[str] = None) -> Optional[Player]:
        """Create and add a player, returning it or None if rejected."""
        player = Player(player_id=player_id, display_name=display_name or player_id)
        return player if self.add(player) else None

    def remove(self, player_id: str) -> bool:
        if self.frozen or player_id not in self._players:
            return False
        del self._players[player_id]
        return True

    def freeze(self) -> None:
        """Lock membership for the rest of the match."""
        self.frozen = True

    def get(self, player_id: Optional[str]) -> Optional[Player]:
        """Get player by id."""
        if player_id is None:
            return None
        return self._players.get(player_id)

    def get_alive_players(self) -> List[Player]:
        return [p for p in self._players.values() if p.is_alive]

    def get_alive_mafia(self) -> List[Player]:
        return [p for p in self.get_alive_players() if p.is_mafia]

    def get_alive_others(self) -> List[Player]:
        """Living players who are not Mafia."""
        return [p for p in self.get_alive_players() if not p.is_mafia]

    def find_role(self, role: RoleType, alive_only: bool = False) -> List[Player]:
        players = self.get_alive_players() if alive_only else self.players
        return [p for p in players if p.role is role]

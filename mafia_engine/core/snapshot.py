"""
Snapshots of match state and the sinks they are published to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Any

from .game_engine import GameSession, GamePhase
from .roles import RoleType, Team


@dataclass(frozen=True)
class PlayerView:
    """Public entry for a living player."""
    player_id: str
    display_name: str
    role: RoleType

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.player_id, "name": self.display_name, "role": self.role.value}


@dataclass(frozen=True)
class PrivateView:
    """What a single recipient is allowed to know about themselves."""
    player_id: str
    role: RoleType
    is_alive: bool
    investigations: Dict[int, Dict[str, str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.player_id,
            "role": self.role.value,
            "is_alive": self.is_alive,
            "investigations": {str(n): dict(r) for n, r in self.investigations.items()},
        }


@dataclass(frozen=True)
class Snapshot:
    """State emitted after every phase transition."""
    sequence: int
    phase: GamePhase
    phase_timer: float
    night_number: int
    day_number: int
    winner: Optional[Team]
    alive_players: Tuple[PlayerView, ...]
    private_views: Dict[str, PrivateView] = field(default_factory=dict, compare=False)

    @classmethod
    def from_session(cls, session: GameSession, sequence: int) -> "Snapshot":
        alive = tuple(
            PlayerView(p.player_id, p.display_name, p.role)
            for p in session.get_alive_players()
        )
        private = {
            p.player_id: PrivateView(
                player_id=p.player_id,
                role=p.role,
                is_alive=p.is_alive,
                investigations={n: dict(r) for n, r in p.investigations.items()},
            )
            for p in session.roster
        }
        return cls(
            sequence=sequence,
            phase=session.phase,
            phase_timer=session.phase_timer,
            night_number=session.night_number,
            day_number=session.day_number,
            winner=session.winner,
            alive_players=alive,
            private_views=private,
        )

    @property
    def alive_ids(self) -> List[str]:
        return [view.player_id for view in self.alive_players]

    def private_view(self, player_id: str) -> Optional[PrivateView]:
        """Private view for one recipient, or None for unknown ids."""
        return self.private_views.get(player_id)

    def to_dict(self, include_private: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "sequence": self.sequence,
            "phase": self.phase.value,
            "phase_timer": self.phase_timer,
            "night_number": self.night_number,
            "day_number": self.day_number,
            "winner": self.winner.value if self.winner else None,
            "alive_players": [view.to_dict() for view in self.alive_players],
        }
        if include_private:
            data["private"] = {pid: view.to_dict() for pid, view in self.private_views.items()}
        return data


class SnapshotSink(ABC):
    """Receiver of state snapshots (renderer, network broadcast, recorder...)."""

    @abstractmethod
    def publish(self, snapshot: Snapshot) -> None:
        pass


class CompositeSink(SnapshotSink):
    """Fans a snapshot out to several sinks in registration order."""

    def __init__(self, sinks: Optional[Iterable[SnapshotSink]] = None):
        self.sinks: List[SnapshotSink] = list(sinks or [])

    def add(self, sink: SnapshotSink) -> None:
        self.sinks.append(sink)

    def publish(self, snapshot: Snapshot) -> None:
        for sink in self.sinks:
            sink.publish(snapshot)


class SnapshotHistory(SnapshotSink):
    """Keeps every published snapshot in memory."""

    def __init__(self):
        self.snapshots: List[Snapshot] = []

    def publish(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def latest(self) -> Optional[Snapshot]:
        return self.snapshots[-1] if self.snapshots else None

    @property
    def phases(self) -> List[GamePhase]:
        return [s.phase for s in self.snapshots]

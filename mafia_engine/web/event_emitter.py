"""
Event emitter for recording match events to files and notifying listeners.
"""

from typing import Callable, Dict, Any, Optional, List
from threading import Lock

from ..core.snapshot import Snapshot, SnapshotSink
from .run_recorder import RunRecorder

Listener = Callable[[str, Dict[str, Any]], None]


class EventEmitter(SnapshotSink):
    """Snapshot sink that records every match event and forwards it to listeners."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder
        self._listeners: List[Listener] = []
        self._lock = Lock()

    def register_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event to the recorder and every listener."""
        with self._lock:
            listeners = list(self._listeners)
        try:
            if self.run_recorder:
                self.run_recorder.record_event(event_type, data)
            for listener in listeners:
                listener(event_type, data)
        except Exception as e:
            # Don't let recording errors break the match
            print(f"Error recording event: {e}")

    def publish(self, snapshot: Snapshot) -> None:
        """Record a full snapshot, private views included."""
        self._emit("snapshot", snapshot.to_dict(include_private=True))

    def emit_game_start(self, roles: Dict[str, str]) -> None:
        """Emit game start event."""
        self._emit("game_start", {
            "players": list(roles),
            "roles": roles,
        })

    def emit_phase_change(self, phase: str, day_number: int, night_number: int) -> None:
        """Emit phase change event."""
        self._emit("phase_change", {
            "phase": phase,
            "day_number": day_number,
            "night_number": night_number
        })

    def emit_night_result(self, outcome: Dict[str, Any]) -> None:
        self._emit("night_result", outcome)

    def emit_vote(self, voter: str, target: str, day_number: int) -> None:
        """Emit individual vote event."""
        self._emit("vote", {
            "voter": voter,
            "target": target,
            "day_number": day_number,
        })

    def emit_vote_results(self, vote_counts: Dict[str, int], voters: Dict[str, List[str]], day_number: int) -> None:
        """Emit voting results event."""
        self._emit("vote_results", {
            "vote_counts": vote_counts,
            "voters": voters,
            "day_number": day_number
        })

    def emit_elimination(self, player_id: str, reason: str, day_number: Optional[int] = None,
                         night_number: Optional[int] = None, voters: Optional[List[str]] = None) -> None:
        """Emit player elimination event."""
        self._emit("elimination", {
            "player": player_id,
            "reason": reason,
            "day_number": day_number,
            "night_number": night_number,
            "voters": voters or []
        })

    def emit_announcement(self, message: str, phase: str, day_number: int, night_number: int) -> None:
        """Emit moderator announcement event."""
        self._emit("announcement", {
            "message": message,
            "phase": phase,
            "day_number": day_number,
            "night_number": night_number
        })

    def emit_game_over(self, winner: Optional[str], day_number: int, night_number: int) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "winner": winner,
            "day_number": day_number,
            "night_number": night_number
        })

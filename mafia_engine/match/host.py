"""
Serialized command processing for a single authoritative match.
"""

import queue
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..core.game_engine import GamePhase
from ..core.moderator import CommandResult
from ..core.roles import RoleType
from .state_machine import PhaseStateMachine


class Command(ABC):
    """A player or admin request, applied by the match loop."""

    @abstractmethod
    def apply(self, machine: PhaseStateMachine) -> CommandResult:
        pass


@dataclass(frozen=True)
class JoinCommand(Command):
    player_id: str
    display_name: Optional[str] = None

    def apply(self, machine: PhaseStateMachine) -> CommandResult:
        return machine.join(self.player_id, self.display_name)


@dataclass(frozen=True)
class DisconnectCommand(Command):
    player_id: str

    def apply(self, machine: PhaseStateMachine) -> CommandResult:
        return machine.disconnect(self.player_id)


@dataclass(frozen=True)
class StartMatchCommand(Command):
    def apply(self, machine: PhaseStateMachine) -> CommandResult:
        return machine.start_match()


@dataclass(frozen=True)
class NightTargetCommand(Command):
    role: RoleType
    actor_id: str
    target_id: str

    def apply(self, machine: PhaseStateMachine) -> CommandResult:
        return machine.record_night_target(self.role, self.actor_id, self.target_id)


@dataclass(frozen=True)
class VoteCommand(Command):
    voter_id: str
    target_id: str

    def apply(self, machine: PhaseStateMachine) -> CommandResult:
        return machine.record_vote(self.voter_id, self.target_id)


@dataclass(frozen=True)
class AdvancePhaseCommand(Command):
    def apply(self, machine: PhaseStateMachine) -> CommandResult:
        return machine.advance_phase()


class MatchHost:
    """
    Single writer for a PhaseStateMachine.

    Any thread may submit commands; they are queued and applied in arrival
    order by whoever calls process_pending() or tick(), normally the loop
    thread started with start().
    """

    def __init__(self, machine: PhaseStateMachine, tick_interval: Optional[float] = None):
        self.machine = machine
        self.tick_interval = tick_interval or machine.config.tick_interval
        self._commands: "queue.Queue[Command]" = queue.Queue()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def submit(self, command: Command) -> None:
        """Queue a command. Safe to call from any thread."""
        self._commands.put(command)

    def process_pending(self) -> List[CommandResult]:
        """Apply every queued command in arrival order."""
        with self._lock:
            return self._drain()

    def execute(self, command: Command) -> CommandResult:
        """Apply one command right away, after everything already queued."""
        with self._lock:
            self._drain()
            return command.apply(self.machine)

    def tick(self, dt: float) -> bool:
        """Apply queued commands, then advance the phase timer."""
        with self._lock:
            self._drain()
            return self.machine.tick(dt)

    def _drain(self) -> List[CommandResult]:
        results = []
        while True:
            try:
                command = self._commands.get_nowait()
            except queue.Empty:
                break
            results.append(command.apply(self.machine))
        return results

    # ------------------------------------------------------------------
    # Background loop

    def start(self) -> None:
        """Run the match loop in a background thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()

    def run(self) -> None:
        """Tick the match until it ends or stop() is called."""
        last = time.monotonic()
        while not self._stop.is_set():
            self._stop.wait(self.tick_interval)
            now = time.monotonic()
            self.tick(now - last)
            last = now
            if self.machine.phase == GamePhase.GAME_END:
                break

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)

"""
Phase state machine driving a match from lobby to game end.
"""

from typing import Optional, TYPE_CHECKING

from ..core.game_engine import GameSession, GamePhase, NIGHT_PHASE_ROLES
from ..core.moderator import Moderator, CommandResult
from ..core.role_assigner import RoleAssigner
from ..core.roles import RoleType, Team
from ..core.snapshot import Snapshot, SnapshotSink
from ..core.win_evaluator import WinEvaluator
from ..config.game_config import GameConfig, default_config
from ..phases.night_phase import NightResolver, NightOutcome
from ..phases.voting import VoteTally

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


class PhaseStateMachine:
    """
    Authoritative owner of a GameSession.

    Every command returns a CommandResult and never raises on bad input.
    Each phase transition publishes exactly one Snapshot to the sink.
    Not thread-safe on its own; wrap it in a MatchHost when commands come
    from several threads.
    """

    def __init__(self, config: GameConfig = default_config,
                 sink: Optional[SnapshotSink] = None,
                 session: Optional[GameSession] = None,
                 role_assigner: Optional[RoleAssigner] = None,
                 event_emitter: Optional['EventEmitter'] = None):
        self.config = config.validate()
        self.session = session or GameSession()
        self.sink = sink
        self.event_emitter = event_emitter
        self.moderator = Moderator(config, event_emitter)
        self.role_assigner = role_assigner or RoleAssigner(config.random_seed)
        self.night_resolver = NightResolver(self.moderator, event_emitter)
        self.vote_tally = VoteTally(self.session, self.moderator, event_emitter)
        self.win_evaluator = WinEvaluator()
        self.snapshots_emitted = 0
        self.last_night: Optional[NightOutcome] = None
        self.last_eliminated: Optional[str] = None

    @property
    def phase(self) -> GamePhase:
        return self.session.phase

    @property
    def is_over(self) -> bool:
        return self.session.phase == GamePhase.GAME_END

    # ------------------------------------------------------------------
    # Lobby commands

    def join(self, player_id: str, display_name: Optional[str] = None) -> CommandResult:
        """Add a player while the match is still in the lobby."""
        if self.session.phase != GamePhase.LOBBY:
            return CommandResult(False, "Match already started")
        if len(self.session.roster) >= self.config.max_players:
            return CommandResult(False, "Lobby is full")
        player = self.session.roster.join(player_id, display_name)
        if player is None:
            return CommandResult(False, f"Player id {player_id!r} is taken")
        self.session.log_action("player_joined", {"player": player_id})
        return CommandResult(True, "Joined")

    def disconnect(self, player_id: str) -> CommandResult:
        """
        Remove a player from the lobby, or mark them disconnected once the
        match has started.
        """
        if self.session.phase == GamePhase.LOBBY:
            if self.session.roster.remove(player_id):
                return CommandResult(True, "Left lobby")
            return CommandResult(False, f"Unknown player {player_id}")

        player = self.session.get_player(player_id)
        if player is None or not player.is_alive or self.is_over:
            return CommandResult(False, f"Player {player_id} is not in play")
        player.disconnect()
        self.session.log_action("player_disconnected", {"player": player_id})
        self.moderator.announce(f"{player.display_name} has left the match.", self.session)
        return CommandResult(True, "Disconnected")

    def start_match(self) -> CommandResult:
        """Deal roles and move from the lobby to the first night."""
        if self.session.phase != GamePhase.LOBBY:
            return CommandResult(False, "Match already started")
        return self.advance_phase()

    # ------------------------------------------------------------------
    # In-match commands

    def record_night_target(self, role: RoleType, actor_id: str, target_id: str) -> CommandResult:
        """Submit a kill, save or investigation. Later submissions overwrite earlier ones."""
        result = self.moderator.check_night_target(self.session, role, actor_id, target_id)
        if not result:
            return result

        self.session.set_night_target(role, target_id)
        self.session.log_action("night_target", {"role": role.value, "actor": actor_id, "target": target_id})

        if self.config.auto_advance_night:
            self.advance_phase()
        return result

    def record_vote(self, voter_id: str, target_id: str) -> CommandResult:
        """Cast a day vote."""
        result = self.moderator.check_vote(self.session, voter_id, target_id)
        if not result:
            return result
        if not self.vote_tally.record_vote(voter_id, target_id):
            return CommandResult(False, f"Player {voter_id} cannot vote")
        return result

    def tick(self, dt: float) -> bool:
        """
        Advance the countdown by `dt` seconds.
        Returns True if the timer expired and the phase advanced.
        """
        if not self.session.phase.is_timed or dt <= 0:
            return False
        self.session.phase_timer = max(0.0, self.session.phase_timer - dt)
        if self.session.phase_timer > 0:
            return False
        return bool(self.advance_phase())

    def advance_phase(self) -> CommandResult:
        """Move to the next phase, running whatever resolution the transition needs."""
        phase = self.session.phase

        if phase == GamePhase.GAME_END:
            return CommandResult(False, "Match is over")

        if phase == GamePhase.LOBBY:
            if len(self.session.roster) < max(1, self.config.min_players):
                return CommandResult(False, "Not enough players")
            self._assign_roles()
            self._enter_night()

        elif phase == GamePhase.ROLE_ASSIGNMENT:
            self._enter_night()

        elif phase == GamePhase.NIGHT_MAFIA:
            self._set_phase(GamePhase.NIGHT_DOCTOR)

        elif phase == GamePhase.NIGHT_DOCTOR:
            self._set_phase(GamePhase.NIGHT_DETECTIVE)

        elif phase == GamePhase.NIGHT_DETECTIVE:
            self.last_night = self.night_resolver.resolve(self.session)
            if not self._check_winner():
                self.session.day_number += 1
                self._set_phase(GamePhase.DAY_DISCUSSION, self.config.discussion_seconds)
                self.moderator.announce("Morning has come. Discuss.", self.session)

        elif phase == GamePhase.DAY_DISCUSSION:
            self._set_phase(GamePhase.DAY_VOTING, self.config.voting_seconds)
            self.moderator.announce("It is voting time.", self.session)

        elif phase == GamePhase.DAY_VOTING:
            self.last_eliminated = self.vote_tally.resolve()
            if not self._check_winner():
                self._enter_night()

        elif phase == GamePhase.ELIMINATION:
            if not self._check_winner():
                self._enter_night()

        self._publish()
        return CommandResult(True, self.session.phase.value)

    def force_phase(self, phase: GamePhase, timer: float = 0.0) -> CommandResult:
        """
        Admin hook: jump straight to `phase` without running any resolution.
        Only allowed once the match has started and before it has ended.
        """
        outside = (GamePhase.LOBBY, GamePhase.GAME_END)
        if self.session.phase in outside or phase in outside:
            return CommandResult(False, f"Cannot force {phase.value}")
        self._set_phase(phase, timer)
        self._publish()
        return CommandResult(True, phase.value)

    # ------------------------------------------------------------------
    # Snapshots

    def current_snapshot(self) -> Snapshot:
        """Snapshot of the present state, without publishing it."""
        return Snapshot.from_session(self.session, self.snapshots_emitted)

    def acting_role(self) -> Optional[RoleType]:
        """Role expected to act in the current phase, if any."""
        return NIGHT_PHASE_ROLES.get(self.session.phase)

    # ------------------------------------------------------------------
    # Internals

    def _assign_roles(self) -> None:
        self.session.phase = GamePhase.ROLE_ASSIGNMENT
        self.role_assigner.assign(self.session.roster.players)
        self.session.roster.freeze()
        self.session.log_action("roles_assigned", {
            "players": [p.player_id for p in self.session.roster],
        })
        if self.event_emitter:
            self.event_emitter.emit_game_start(
                {p.player_id: p.role.value for p in self.session.roster}
            )

    def _enter_night(self) -> None:
        self.session.clear_night_targets()
        self.session.night_number += 1
        self._set_phase(GamePhase.NIGHT_MAFIA)
        self.moderator.announce("Night falls. The mafia goes hunting.", self.session)

    def _set_phase(self, phase: GamePhase, timer: float = 0.0) -> None:
        self.session.phase = phase
        self.session.phase_timer = timer
        self.session.log_action("phase_change", {"phase": phase.value})
        if self.event_emitter:
            self.event_emitter.emit_phase_change(phase.value, self.session.day_number, self.session.night_number)

    def _check_winner(self) -> Optional[Team]:
        winner = self.win_evaluator.check(self.session)
        if winner is None:
            return None
        self.session.end_game(winner)
        self.moderator.announce(f"Game over! {winner.value} win.", self.session)
        if self.event_emitter:
            self.event_emitter.emit_game_over(winner.value, self.session.day_number, self.session.night_number)
        return winner

    def _publish(self) -> None:
        snapshot = Snapshot.from_session(self.session, self.snapshots_emitted)
        self.snapshots_emitted += 1
        if self.sink is not None:
            self.sink.publish(snapshot)

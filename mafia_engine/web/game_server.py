"""
Web server exposing a match to browser clients over Socket.IO.
"""

from threading import Lock
from typing import Optional, Dict, Any, List
from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit, join_room

from ..config.game_config import GameConfig, default_config
from ..core.moderator import CommandResult
from ..core.roles import RoleType
from ..core.snapshot import CompositeSink, Snapshot, SnapshotSink
from ..match.host import (
    MatchHost, JoinCommand, DisconnectCommand, StartMatchCommand,
    NightTargetCommand, VoteCommand, AdvancePhaseCommand,
)
from ..match.state_machine import PhaseStateMachine
from .event_emitter import EventEmitter

# Events that are safe to show every client
PUBLIC_EVENTS = {"phase_change", "announcement", "elimination", "vote_results", "game_over"}


class GameServer(SnapshotSink):
    """
    Socket.IO transport for one match.

    Inbound socket events are queued on the MatchHost, except joins, which
    are applied at once so a socket is bound to a player id only after the
    match accepted it. Each id belongs to at most one socket and each socket
    to at most one id. snapshots come back
    through publish() and are broadcast publicly, with each player's private
    view sent only to that player's room. The first connected client is the
    master and is the only one allowed to start the match or force a phase.
    """

    def __init__(self, config: GameConfig = default_config, port: int = 5000, host: str = '127.0.0.1',
                 event_emitter: Optional[EventEmitter] = None):
        self.port = port
        self.host = host

        self.app = Flask(__name__)
        self.socketio = SocketIO(self.app, cors_allowed_origins="*", async_mode='threading')

        self.event_emitter = event_emitter or EventEmitter()
        self.event_emitter.register_listener(self._broadcast_event)

        self.machine = PhaseStateMachine(
            config,
            sink=CompositeSink([self.event_emitter, self]),
            event_emitter=self.event_emitter
        )
        self.match_host = MatchHost(self.machine)

        self.latest_state: Dict[str, Any] = self.machine.current_snapshot().to_dict()
        self.player_sessions: Dict[str, str] = {}  # {sid: player_id}
        self.connected: List[str] = []
        self.master_sid: Optional[str] = None
        self._sessions_lock = Lock()

        self._setup_routes()
        self._setup_socketio()

    def _setup_routes(self):
        """Setup Flask routes."""
        @self.app.route('/api/state')
        def get_state():
            return jsonify(self.latest_state)

    def _setup_socketio(self):
        """Setup SocketIO event handlers."""
        @self.socketio.on('connect')
        def handle_connect(*args):
            self.connected.append(request.sid)
            if self.master_sid is None:
                self.master_sid = request.sid
            print(f"Client connected. Total clients: {len(self.connected)}")
            emit('game_state_update', self.latest_state)

        @self.socketio.on('disconnect')
        def handle_disconnect(*args):
            sid = request.sid
            if sid in self.connected:
                self.connected.remove(sid)
            if sid == self.master_sid:
                self.master_sid = self.connected[0] if self.connected else None
            with self._sessions_lock:
                player_id = self.player_sessions.pop(sid, None)
            if player_id:
                self.match_host.submit(DisconnectCommand(player_id))
            print(f"Client disconnected. Total clients: {len(self.connected)}")

        @self.socketio.on('join')
        def handle_join(data):
            data = data or {}
            player_id = data.get('player_id')
            if not player_id:
                return
            result = self._bind_player(request.sid, player_id, data.get('name'))
            if not result:
                emit('join_rejected', {'player_id': player_id, 'reason': result.message})
                return
            join_room(player_id)
            emit('joined', {'player_id': player_id})

        @self.socketio.on('start_match')
        def handle_start_match(*args):
            if request.sid == self.master_sid:
                self.match_host.submit(StartMatchCommand())

        @self.socketio.on('advance')
        def handle_advance(*args):
            if request.sid == self.master_sid:
                self.match_host.submit(AdvancePhaseCommand())

        @self.socketio.on('night_target')
        def handle_night_target(data):
            actor_id = self.player_sessions.get(request.sid)
            data = data or {}
            try:
                role = RoleType(data.get('role'))
            except ValueError:
                return
            if actor_id and data.get('target_id'):
                self.match_host.submit(NightTargetCommand(role, actor_id, data['target_id']))

        @self.socketio.on('vote')
        def handle_vote(data):
            voter_id = self.player_sessions.get(request.sid)
            target_id = (data or {}).get('target_id')
            if voter_id and target_id:
                self.match_host.submit(VoteCommand(voter_id, target_id))

    def _bind_player(self, sid: str, player_id: str, name: Optional[str]) -> CommandResult:
        """Join the match as `player_id` and tie that id to `sid` if the join is accepted."""
        with self._sessions_lock:
            if sid in self.player_sessions:
                return CommandResult(False, f"Already joined as {self.player_sessions[sid]}")
            if player_id in self.player_sessions.values():
                return CommandResult(False, f"Player id {player_id!r} is taken")
            result = self.match_host.execute(JoinCommand(player_id, name))
            if result:
                self.player_sessions[sid] = player_id
            return result

    def publish(self, snapshot: Snapshot) -> None:
        """Broadcast the public snapshot and send each player their private view."""
        self.latest_state = snapshot.to_dict()
        try:
            self.socketio.emit('game_state_update', self.latest_state)
            for player_id, view in snapshot.private_views.items():
                self.socketio.emit('private_state', view.to_dict(), to=player_id)
        except Exception as e:
            print(f"Error broadcasting snapshot: {e}")

    def _broadcast_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Broadcast a public event to all connected clients."""
        if event_type in PUBLIC_EVENTS and self.connected:
            self.socketio.emit(event_type, data)

    def start(self) -> None:
        """Start the match loop and the web server."""
        self.match_host.start()
        print(f"\n{'='*60}")
        print(f"Starting web server on http://{self.host}:{self.port}")
        print(f"{'='*60}\n")
        self.socketio.run(self.app, host=self.host, port=self.port, debug=False, allow_unsafe_werkzeug=True)

    def stop(self) -> None:
        self.match_host.stop(timeout=1.0)

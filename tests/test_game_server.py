"""
Tests for the Socket.IO game server.
"""

import pytest
from mafia_engine.config.game_config import GameConfig
from mafia_engine.core import GamePhase, RoleType
from mafia_engine.web.game_server import GameServer


@pytest.fixture
def server():
    return GameServer(GameConfig(use_moderator_announcements=False, random_seed=5))


def _received(client, name):
    return [msg["args"][0] for msg in client.get_received() if msg["name"] == name]


def _join(server, client, player_id):
    client.emit("join", {"player_id": player_id, "name": player_id.title()})


def test_state_endpoint(server):
    response = server.app.test_client().get("/api/state")
    assert response.status_code == 200
    data = response.get_json()
    assert data["phase"] == "lobby"
    assert data["alive_players"] == []


def test_connect_sends_current_state(server):
    client = server.socketio.test_client(server.app)
    states = _received(client, "game_state_update")
    assert states and states[0]["phase"] == "lobby"
    assert server.master_sid is not None


def test_join_and_start_by_master(server):
    master = server.socketio.test_client(server.app)
    other = server.socketio.test_client(server.app)
    third = server.socketio.test_client(server.app)
    for client, pid in ((master, "alice"), (other, "bob"), (third, "carol")):
        _join(server, client, pid)
    assert [p.player_id for p in server.machine.session.roster] == ["alice", "bob", "carol"]
    assert sorted(server.player_sessions.values()) == ["alice", "bob", "carol"]

    other.emit("start_match")
    server.match_host.process_pending()
    assert server.machine.phase == GamePhase.LOBBY

    master.emit("start_match")
    server.match_host.process_pending()
    assert server.machine.phase == GamePhase.NIGHT_MAFIA

    response = server.app.test_client().get("/api/state")
    assert response.get_json()["phase"] == "night_mafia"


def test_private_state_goes_to_own_room(server):
    master = server.socketio.test_client(server.app)
    other = server.socketio.test_client(server.app)
    _join(server, master, "alice")
    _join(server, other, "bob")
    server.match_host.process_pending()
    master.get_received()
    other.get_received()

    master.emit("start_match")
    server.match_host.process_pending()

    private = _received(other, "private_state")
    assert [view["id"] for view in private] == ["bob"]
    assert private[0]["role"] == server.machine.session.get_player("bob").role.value


def test_only_master_advances(server):
    master = server.socketio.test_client(server.app)
    other = server.socketio.test_client(server.app)
    _join(server, master, "alice")
    _join(server, other, "bob")
    master.emit("start_match")
    server.match_host.process_pending()

    other.emit("advance")
    server.match_host.process_pending()
    assert server.machine.phase == GamePhase.NIGHT_MAFIA

    master.emit("advance")
    server.match_host.process_pending()
    assert server.machine.phase == GamePhase.NIGHT_DOCTOR


def test_night_target_and_vote(server):
    clients = {}
    for pid in ("alice", "bob", "carol", "dave"):
        clients[pid] = server.socketio.test_client(server.app)
        _join(server, clients[pid], pid)
    master = clients["alice"]
    master.emit("start_match")
    server.match_host.process_pending()

    session = server.machine.session
    mafia = session.roster.find_role(RoleType.MAFIA)[0].player_id
    victim = next(p.player_id for p in session.roster if p.player_id != mafia)

    clients[mafia].emit("night_target", {"role": "Mafia", "target_id": victim})
    clients[mafia].emit("night_target", {"role": "Werewolf", "target_id": victim})
    server.match_host.process_pending()
    assert session.mafia_target == victim

    for _ in range(4):
        master.emit("advance")
    server.match_host.process_pending()
    assert server.machine.phase == GamePhase.DAY_VOTING

    voter = next(p.player_id for p in session.get_alive_players())
    target = next(p.player_id for p in session.get_alive_players() if p.player_id != voter)
    clients[voter].emit("vote", {"target_id": target})
    server.match_host.process_pending()
    assert session.vote_counts == {target: 1}


def test_disconnect_mid_match(server):
    master = server.socketio.test_client(server.app)
    other = server.socketio.test_client(server.app)
    _join(server, master, "alice")
    _join(server, other, "bob")
    master.emit("start_match")
    server.match_host.process_pending()

    other.disconnect()
    server.match_host.process_pending()

    assert not server.machine.session.get_player("bob").is_alive
    assert server.machine.session.get_player("bob").status.value == "disconnected"


def _start_four(server):
    clients = {}
    for pid in ("alice", "bob", "carol", "dave"):
        clients[pid] = server.socketio.test_client(server.app)
        _join(server, clients[pid], pid)
    clients["alice"].emit("start_match")
    server.match_host.process_pending()
    return clients


def test_join_reports_result(server):
    client = server.socketio.test_client(server.app)
    _join(server, client, "alice")
    assert _received(client, "joined") == [{"player_id": "alice"}]


def test_taken_id_rejected_in_lobby(server):
    owner = server.socketio.test_client(server.app)
    intruder = server.socketio.test_client(server.app)
    _join(server, owner, "alice")
    _join(server, intruder, "alice")

    rejected = _received(intruder, "join_rejected")
    assert rejected == [{"player_id": "alice", "reason": "Player id 'alice' is taken"}]
    assert sorted(server.player_sessions.values()) == ["alice"]

    intruder.disconnect()
    server.match_host.process_pending()
    assert "alice" in server.machine.session.roster


def test_one_id_per_socket(server):
    client = server.socketio.test_client(server.app)
    _join(server, client, "alice")
    _join(server, client, "bob")

    assert _received(client, "join_rejected")[0]["reason"] == "Already joined as alice"
    assert [p.player_id for p in server.machine.session.roster] == ["alice"]
    assert list(server.player_sessions.values()) == ["alice"]


def test_existing_player_cannot_be_taken_over(server):
    clients = _start_four(server)
    intruder = server.socketio.test_client(server.app)
    _join(server, intruder, "bob")
    intruder.get_received()

    clients["alice"].emit("advance")
    server.match_host.process_pending()

    assert _received(intruder, "private_state") == []
    bob = server.machine.session.get_player("bob")

    # Acting as bob must not be possible either
    intruder.emit("vote", {"target_id": "carol"})
    intruder.disconnect()
    server.match_host.process_pending()
    assert bob.is_alive
    assert not bob.has_voted


def test_late_join_gets_nothing(server):
    clients = _start_four(server)
    latecomer = server.socketio.test_client(server.app)
    _join(server, latecomer, "eve")

    assert _received(latecomer, "join_rejected")[0]["reason"] == "Match already started"
    assert "eve" not in server.machine.session.roster
    assert "eve" not in server.player_sessions.values()

    clients["alice"].emit("advance")
    server.match_host.process_pending()
    assert _received(latecomer, "private_state") == []


def test_rejoin_after_leaving_lobby(server):
    first = server.socketio.test_client(server.app)
    _join(server, first, "alice")
    first.disconnect()

    second = server.socketio.test_client(server.app)
    _join(server, second, "alice")

    assert _received(second, "joined") == [{"player_id": "alice"}]
    assert [p.player_id for p in server.machine.session.roster] == ["alice"]

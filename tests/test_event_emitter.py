"""
Tests for event recording.
"""

import json

import pytest
from mafia_engine.core import Snapshot
from mafia_engine.web import EventEmitter, RunRecorder


@pytest.fixture
def recorder(tmp_path):
    rec = RunRecorder(str(tmp_path / "runs"))
    rec.create_run("test_run")
    return rec


def test_events_written_as_jsonl(recorder):
    emitter = EventEmitter(recorder)
    emitter.emit_vote("a", "b", 1)
    emitter.emit_game_over("Mafia", 2, 2)

    events = RunRecorder.read_events(recorder.get_run_path() / "events.jsonl")
    assert [e["event_type"] for e in events] == ["vote", "game_over"]
    assert [e["sequence"] for e in events] == [0, 1]
    assert events[0]["data"] == {"voter": "a", "target": "b", "day_number": 1}


def test_no_writes_before_create_run(tmp_path):
    rec = RunRecorder(str(tmp_path / "runs"))
    rec.record_event("vote", {})
    rec.save_metadata({"x": 1})
    assert not (tmp_path / "runs").exists()


def test_corrupt_lines_skipped(recorder):
    events_file = recorder.get_run_path() / "events.jsonl"
    recorder.record_event("vote", {"voter": "a"})
    with open(events_file, "a") as f:
        f.write("{not json\n\n")
    recorder.record_event("vote", {"voter": "b"})

    events = RunRecorder.read_events(events_file)
    assert [e["data"]["voter"] for e in events] == ["a", "b"]


def test_list_runs(recorder, tmp_path):
    recorder.save_metadata({"players": ["a", "b"]})
    EventEmitter(recorder).emit_game_over("Civilians", 3, 3)

    unfinished = RunRecorder(str(tmp_path / "runs"))
    unfinished.create_run("other_run")

    runs = {run["name"]: run for run in recorder.list_runs()}
    assert runs["test_run"]["game_outcome"] == "Civilians Win"
    assert runs["test_run"]["metadata"] == {"players": ["a", "b"]}
    assert runs["test_run"]["event_count"] == 1
    assert not runs["other_run"]["has_events"]
    assert "game_outcome" not in runs["other_run"]


def test_publish_records_snapshot(recorder, session):
    emitter = EventEmitter(recorder)
    emitter.publish(Snapshot.from_session(session, 0))

    line = (recorder.get_run_path() / "events.jsonl").read_text().splitlines()[0]
    event = json.loads(line)
    assert event["event_type"] == "snapshot"
    assert event["data"]["phase"] == "night_mafia"
    assert event["data"]["private"]["detective"]["role"] == "Detective"


def test_listeners_notified():
    emitter = EventEmitter()
    seen = []
    emitter.register_listener(lambda event_type, data: seen.append((event_type, data)))

    emitter.emit_announcement("Night falls.", "night_mafia", 0, 1)

    assert seen == [("announcement", {
        "message": "Night falls.",
        "phase": "night_mafia",
        "day_number": 0,
        "night_number": 1,
    })]


def test_listener_errors_do_not_propagate(capsys):
    emitter = EventEmitter()

    def broken(event_type, data):
        raise RuntimeError("socket closed")

    emitter.register_listener(broken)
    emitter.emit_phase_change("day_voting", 1, 1)

    assert "Error recording event: socket closed" in capsys.readouterr().out


def test_summarize_finished_run(recorder):
    emitter = EventEmitter(recorder)
    emitter.emit_phase_change("night_mafia", 0, 1)
    emitter.emit_game_over("Mafia", 2, 3)

    summary = RunRecorder.summarize_run(recorder.get_run_path())

    assert summary["winner"] == "Mafia"
    assert summary["days"] == 2
    assert summary["event_count"] == 2
    assert not summary["has_metadata"]


def test_new_run_restarts_numbering(recorder):
    recorder.record_event("vote", {})
    recorder.create_run("second")
    recorder.record_event("vote", {})

    events = RunRecorder.read_events(recorder.get_run_path() / "events.jsonl")
    assert [e["sequence"] for e in events] == [0]

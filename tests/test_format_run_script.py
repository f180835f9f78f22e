"""
Tests for the run transcript formatter.
"""

import json

from scripts.format_run_script import format_event, format_run


def test_format_elimination_by_vote():
    text = format_event({
        "event_type": "elimination",
        "timestamp": "2026-01-11T02:40:40",
        "data": {"player": "p3", "reason": "voted out", "day_number": 2, "voters": ["p1", "p4"]},
    })
    assert "p3 was ELIMINATED (Day 2)" in text
    assert "Voted by: p1, p4" in text


def test_format_night_kill():
    text = format_event({
        "event_type": "elimination",
        "data": {"player": "p2", "reason": "night kill", "night_number": 1},
    })
    assert "p2 was KILLED (Night 1)" in text


def test_snapshots_not_shown():
    assert format_event({"event_type": "snapshot", "data": {"phase": "lobby"}}) == ""


def test_format_run(tmp_path):
    run_dir = tmp_path / "run_1"
    run_dir.mkdir()
    events = [
        {"event_type": "game_start", "data": {"roles": {"p1": "Mafia", "p2": "Doctor"}}},
        {"event_type": "phase_change", "data": {"phase": "night_mafia", "day_number": 0, "night_number": 1}},
        {"event_type": "game_over", "data": {"winner": "Mafia", "day_number": 0, "night_number": 1}},
    ]
    with open(run_dir / "events.jsonl", "w") as f:
        for event in events:
            f.write(json.dumps(event) + "\n")
        f.write("garbage\n")
    (run_dir / "metadata.json").write_text(json.dumps({"config": {"random_seed": 42}}))

    output = tmp_path / "out" / "transcript.txt"
    assert format_run(str(run_dir), str(output))

    text = output.read_text()
    assert "Seed: 42" in text
    assert "p1: Mafia" in text
    assert "--- NIGHT MAFIA (Day 0, Night 1) ---" in text
    assert "GAME OVER - Winner: MAFIA" in text


def test_missing_events_file(tmp_path):
    assert not format_run(str(tmp_path), str(tmp_path / "out.txt"))

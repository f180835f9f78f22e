#!/usr/bin/env python3
"""
Format a match run's events.jsonl into a readable transcript.
"""

import json
import sys
from pathlib import Path
from datetime import datetime


def format_timestamp(ts_str):
    """Format ISO timestamp to readable format."""
    try:
        return datetime.fromisoformat(ts_str).strftime("%H:%M:%S")
    except (TypeError, ValueError):
        return ts_str


def format_event(event):
    """Format a single event into readable text. Returns "" for events that are not shown."""
    event_type = event.get("event_type", "unknown")
    data = event.get("data", {})
    timestamp = format_timestamp(event.get("timestamp", ""))

    lines = []

    if event_type == "game_start":
        lines.append("=" * 80)
        lines.append("GAME START")
        lines.append("=" * 80)
        for player, role in data.get("roles", {}).items():
            lines.append(f"{player}: {role}")
        lines.append("")

    elif event_type == "phase_change":
        phase = data.get("phase", "").replace("_", " ").upper()
        lines.append("")
        lines.append(f"--- {phase} (Day {data.get('day_number', 0)}, Night {data.get('night_number', 0)}) ---")

    elif event_type == "announcement":
        lines.append(f"[{timestamp}] {data.get('message', '')}")

    elif event_type == "vote":
        lines.append(f"[{timestamp}] {data.get('voter', '?')} votes for {data.get('target', '?')}")

    elif event_type == "vote_results":
        lines.append("VOTE RESULTS:")
        for player, count in sorted(data.get("vote_counts", {}).items(), key=lambda x: -x[1]):
            lines.append(f"  {player}: {count} votes")

    elif event_type == "elimination":
        player = data.get("player", "?")
        lines.append("!" * 80)
        if data.get("reason") == "night kill":
            lines.append(f"{player} was KILLED (Night {data.get('night_number')})")
        else:
            lines.append(f"{player} was ELIMINATED (Day {data.get('day_number')})")
        voters = data.get("voters", [])
        if voters:
            lines.append(f"Voted by: {', '.join(voters)}")
        lines.append("!" * 80)

    elif event_type == "game_over":
        lines.append("")
        lines.append("=" * 80)
        lines.append(f"GAME OVER - Winner: {(data.get('winner') or 'nobody').upper()}")
        lines.append(f"Ended: Day {data.get('day_number', '?')}, Night {data.get('night_number', '?')}")
        lines.append("=" * 80)

    return "\n".join(lines)


def format_run(run_dir, output_file):
    """Format a complete match run into a readable transcript."""
    events_file = Path(run_dir) / "events.jsonl"
    metadata_file = Path(run_dir) / "metadata.json"

    if not events_file.exists():
        print(f"Error: {events_file} not found")
        return False

    metadata = {}
    if metadata_file.exists():
        with open(metadata_file, 'r') as f:
            metadata = json.load(f)

    output_lines = [
        "=" * 80,
        "MAFIA GAME TRANSCRIPT",
        "=" * 80,
        f"Run: {Path(run_dir).name}",
    ]
    if metadata:
        output_lines.append(f"Seed: {metadata.get('config', {}).get('random_seed', 'N/A')}")
    output_lines.append("")

    with open(events_file, 'r') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                event = json.loads(line)
            except json.JSONDecodeError as e:
                print(f"Warning: Failed to parse line: {e}")
                continue
            formatted = format_event(event)
            if formatted:
                output_lines.append(formatted)

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("\n".join(output_lines))

    print(f"Formatted script saved to: {output_path}")
    return True


def main():
    if len(sys.argv) < 2:
        print("Usage: format_run_script.py <run_directory> [output_file]")
        print("Example: format_run_script.py runs/run_20260111_024040 scripts/run_20260111_024040.txt")
        sys.exit(1)

    run_dir = sys.argv[1]
    if len(sys.argv) >= 3:
        output_file = sys.argv[2]
    else:
        output_file = f"scripts/{Path(run_dir).name}.txt"

    format_run(run_dir, output_file)


if __name__ == "__main__":
    main()

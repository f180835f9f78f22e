"""
On-disk record of a match: one directory per run under `runs_dir`.

    runs/<run_name>/events.jsonl   one JSON event per line, numbered from 0
    runs/<run_name>/metadata.json  players, dealt roles and config of the run
"""

import json
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional

EVENTS_FILE = "events.jsonl"
METADATA_FILE = "metadata.json"


class RunRecorder:
    """Appends match events to the current run directory."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.current_run_dir: Optional[Path] = None
        self._sequence = 0
        self._lock = Lock()

    @property
    def events_file(self) -> Optional[Path]:
        return self.current_run_dir / EVENTS_FILE if self.current_run_dir else None

    @property
    def metadata_file(self) -> Optional[Path]:
        return self.current_run_dir / METADATA_FILE if self.current_run_dir else None

    def create_run(self, run_name: Optional[str] = None) -> str:
        """Open a run directory (timestamped when unnamed) and restart numbering."""
        name = run_name or datetime.now().strftime("run_%Y%m%d_%H%M%S")
        run_dir = self.runs_dir / name
        run_dir.mkdir(parents=True, exist_ok=True)
        with self._lock:
            self.current_run_dir = run_dir
            self._sequence = 0
        return name

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Append one event. Ignored until a run has been created."""
        with self._lock:
            if self.current_run_dir is None:
                return
            line = json.dumps({
                "sequence": self._sequence,
                "timestamp": datetime.now().isoformat(),
                "event_type": event_type,
                "data": data,
            })
            with self.events_file.open('a') as f:
                f.write(line + '\n')
            self._sequence += 1

    def save_metadata(self, metadata: Dict[str, Any]) -> None:
        with self._lock:
            if self.current_run_dir is None:
                return
            self.metadata_file.write_text(json.dumps(metadata, indent=2))

    def get_run_path(self) -> Optional[Path]:
        return self.current_run_dir

    @staticmethod
    def iter_events(events_file: Path) -> Iterator[Dict[str, Any]]:
        """Yield the events of a run, skipping blank and unreadable lines."""
        with open(events_file, 'r') as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError:
                    continue

    @classmethod
    def read_events(cls, events_file: Path) -> List[Dict[str, Any]]:
        return list(cls.iter_events(events_file))

    @classmethod
    def summarize_run(cls, run_dir: Path) -> Dict[str, Any]:
        """
        Describe one run directory: its metadata, event count and, once a
        `game_over` event was written, the winner as `game_outcome`.
        """
        events_file = run_dir / EVENTS_FILE
        metadata_file = run_dir / METADATA_FILE
        summary: Dict[str, Any] = {
            "name": run_dir.name,
            "path": str(run_dir),
            "has_metadata": metadata_file.exists(),
            "has_events": events_file.exists(),
        }

        if summary["has_metadata"]:
            try:
                summary["metadata"] = json.loads(metadata_file.read_text())
            except (OSError, json.JSONDecodeError):
                summary["metadata"] = None

        if summary["has_events"]:
            count = 0
            game_over = None
            for event in cls.iter_events(events_file):
                count += 1
                if event.get("event_type") == "game_over":
                    game_over = event.get("data", {})
            summary["event_count"] = count
            if game_over is not None:
                winner = game_over.get("winner")
                summary["winner"] = winner
                summary["days"] = game_over.get("day_number")
                summary["game_outcome"] = f"{winner} Win" if winner else "Unfinished"

        return summary

    def list_runs(self) -> List[Dict[str, Any]]:
        """Summaries of every run under `runs_dir`, newest name first."""
        if not self.runs_dir.exists():
            return []
        return [
            self.summarize_run(run_dir)
            for run_dir in sorted(self.runs_dir.iterdir(), reverse=True)
            if run_dir.is_dir()
        ]

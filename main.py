"""
Simulated Mafia match played by bots through the rules engine.
"""

import argparse
import random
from dataclasses import replace
from typing import Dict, Optional

from mafia_engine.core import GamePhase, NIGHT_PHASE_ROLES, CompositeSink, SnapshotHistory
from mafia_engine.agents import BaseAgent, DummyAgent
from mafia_engine.config import GameConfig, load_config
from mafia_engine.match import PhaseStateMachine
from mafia_engine.web import EventEmitter, RunRecorder


class MafiaGame:
    """Runs one match with a bot in every seat."""

    def __init__(self, config: Optional[GameConfig] = None, player_count: int = 6,
                 run_name: Optional[str] = None, record: bool = True):
        # Private copy: the generated seed must not leak into a shared config
        self.config = replace(config) if config is not None else GameConfig()

        # Generate seed if not provided
        if self.config.random_seed is None:
            self.config.random_seed = random.randint(0, 2**31 - 1)

        self.run_recorder: Optional[RunRecorder] = None
        if record:
            self.run_recorder = RunRecorder(self.config.runs_dir)
            run_name = self.run_recorder.create_run(run_name)
            print(f"Recording game to: {self.config.runs_dir}/{run_name}/")
        self.event_emitter = EventEmitter(self.run_recorder)

        self.history = SnapshotHistory()
        self.machine = PhaseStateMachine(
            self.config,
            sink=CompositeSink([self.event_emitter, self.history]),
            event_emitter=self.event_emitter
        )
        self.session = self.machine.session

        self.agents: Dict[str, BaseAgent] = {}
        for seat in range(1, player_count + 1):
            player_id = f"p{seat}"
            self.machine.join(player_id, f"Player {seat}")
            player = self.session.get_player(player_id)
            if player is not None:
                self.agents[player_id] = DummyAgent(player, self.config, seat=seat)

    def run_game(self) -> str:
        """
        Play the match until a team wins or the cycle limit is reached.
        Returns the winning team name, or "Draw".
        """
        if not self.machine.start_match():
            print("Match could not start: not enough players")
            return "Draw"

        if self.run_recorder:
            self.run_recorder.save_metadata({
                "players": list(self.agents),
                "roles": {p.player_id: p.role.value for p in self.session.roster},
                "config": {
                    "discussion_seconds": self.config.discussion_seconds,
                    "voting_seconds": self.config.voting_seconds,
                    "random_seed": self.config.random_seed,
                }
            })

        print("=" * 60)
        print("MAFIA GAME - Starting")
        print("=" * 60)
        for player in self.session.roster:
            print(f"{player.display_name}: {player.role.value}")
        print("=" * 60)

        while not self.machine.is_over and self.session.night_number <= self.config.max_cycles:
            phase = self.machine.phase
            if phase.is_night:
                self._play_night(phase)
            elif phase == GamePhase.DAY_DISCUSSION:
                self.machine.tick(self.config.discussion_seconds)
            elif phase == GamePhase.DAY_VOTING:
                self._play_voting()
                self.machine.tick(self.config.voting_seconds)
            else:
                self.machine.advance_phase()

        winner = self.session.winner
        self._print_game_summary()
        return winner.value if winner else "Draw"

    def _play_night(self, phase: GamePhase) -> None:
        role = NIGHT_PHASE_ROLES[phase]
        snapshot = self.machine.current_snapshot()
        for player in self.session.roster.find_role(role, alive_only=True):
            agent = self.agents[player.player_id]
            target = agent.get_night_target(agent.build_context(snapshot))
            if target is not None:
                self.machine.record_night_target(role, player.player_id, target)
        # With auto_advance_night the submission may already have moved us on
        if self.machine.phase == phase:
            self.machine.advance_phase()

    def _play_voting(self) -> None:
        snapshot = self.machine.current_snapshot()
        for player in self.session.get_alive_players():
            agent = self.agents[player.player_id]
            target = agent.get_vote_choice(agent.build_context(snapshot))
            if target is not None:
                self.machine.record_vote(player.player_id, target)

    def _print_game_summary(self) -> None:
        """Print a formatted match summary."""
        print("\n" + "=" * 60)
        if self.session.winner:
            print(f"GAME OVER - {self.session.winner.value.upper()} WIN!")
        else:
            print(f"Game stopped after {self.config.max_cycles} cycles without a winner")
        print("=" * 60)
        print(f"Nights: {self.session.night_number}")
        print(f"Days: {self.session.day_number}")
        print(f"Random Seed: {self.config.random_seed}")

        print("\nPlayers:")
        for player in self.session.roster:
            state = "alive" if player.is_alive else player.status.value
            print(f"  - {player.display_name}: {player.role.value} ({state})")

    def get_game_summary(self) -> Dict:
        """Get final match summary as dictionary."""
        return {
            "winner": self.session.winner.value if self.session.winner else None,
            "snapshots": len(self.history.snapshots),
            "final_state": self.session.get_game_summary(),
            "action_log": self.session.action_log[-10:],  # Last 10 actions
        }


def main():
    """Entry point for running a simulated match."""
    parser = argparse.ArgumentParser(
        description="Run a simulated Mafia match with bot players",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                               # 6 bots, default config
  python main.py --players 8 --seed 42         # Reproducible 8-player match
  python main.py --config configs/fast.yaml    # Use a YAML config
        """
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="Path to YAML configuration file (default: use default config)"
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for roles and bots (generated and shown if not provided)"
    )
    parser.add_argument(
        "--players", "-p", type=int, default=6,
        help="Number of bot players (default: 6)"
    )
    parser.add_argument(
        "--run-name", "-r", type=str, default=None,
        help="Custom name for this run (default: auto-generated timestamp)"
    )
    parser.add_argument(
        "--no-record", action="store_true",
        help="Do not write events to the runs directory"
    )

    args = parser.parse_args()

    config = load_config(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config = replace(config, random_seed=args.seed)

    game = MafiaGame(config=config, player_count=args.players, run_name=args.run_name,
                     record=not args.no_record)
    game.run_game()

    if game.run_recorder:
        run_path = game.run_recorder.get_run_path()
        if run_path:
            print(f"\nGame events saved to: {run_path}")


if __name__ == "__main__":
    main()

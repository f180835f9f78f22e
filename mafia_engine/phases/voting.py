"""
Day voting: vote recording and elimination.
"""

from typing import Dict, List, Optional, TYPE_CHECKING

from ..core.game_engine import GameSession
from ..core.moderator import Moderator

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


class VoteTally:
    """Records day votes and eliminates the most-voted player."""

    def __init__(self, session: GameSession, moderator: Optional[Moderator] = None,
                 event_emitter: Optional['EventEmitter'] = None):
        self.session = session
        self.moderator = moderator
        self.event_emitter = event_emitter

    def record_vote(self, voter_id: str, target_id: str) -> bool:
        """
        Record a vote from a player.
        Returns True if the vote was counted. A player cannot change a vote
        once cast.
        """
        voter = self.session.get_player(voter_id)
        if voter is None or not voter.is_alive or voter.has_voted:
            return False
        if target_id not in self.session.roster:
            return False

        voter.vote(target_id)
        self.session.vote_counts[target_id] = self.session.vote_counts.get(target_id, 0) + 1

        if self.event_emitter:
            self.event_emitter.emit_vote(voter_id, target_id, self.session.day_number)
        return True

    def get_voters(self) -> Dict[str, List[str]]:
        """Who voted for whom: {target_id: [voter_ids]}."""
        voters: Dict[str, List[str]] = {target: [] for target in self.session.vote_counts}
        for player in self.session.roster:
            if player.has_voted and player.vote_target in voters:
                voters[player.vote_target].append(player.player_id)
        return voters

    def get_elimination_target(self) -> Optional[str]:
        """
        Player with strictly the most votes. On a tie the target that
        received its first vote earliest wins, since vote_counts keeps
        insertion order.
        """
        max_votes = 0
        target = None
        for candidate, votes in self.session.vote_counts.items():
            if votes > max_votes:
                max_votes = votes
                target = candidate
        return target

    def resolve(self) -> Optional[str]:
        """
        Eliminate the vote winner, then reset the votes.
        Returns the eliminated player's id, or None.
        """
        counts = dict(self.session.vote_counts)
        voters = self.get_voters()
        target = self.get_elimination_target()

        eliminated = None
        if target is not None and self.session.eliminate_player(target, "voted out") is not None:
            eliminated = target

        if self.event_emitter:
            self.event_emitter.emit_vote_results(counts, voters, self.session.day_number)
            if eliminated:
                self.event_emitter.emit_elimination(
                    eliminated, "voted out",
                    day_number=self.session.day_number,
                    voters=voters.get(eliminated, [])
                )

        if self.moderator:
            if eliminated:
                player = self.session.get_player(eliminated)
                self.moderator.announce(
                    f"{player.display_name} was eliminated with {counts[eliminated]} votes.",
                    self.session
                )
            elif target is not None:
                player = self.session.get_player(target)
                self.moderator.announce(
                    f"{player.display_name} has already left the match. Nobody is eliminated.",
                    self.session
                )
            else:
                self.moderator.announce("No votes were cast. Nobody is eliminated.", self.session)

        self.reset_votes()
        return eliminated

    def reset_votes(self) -> None:
        """Clear every player's vote and empty the tally."""
        for player in self.session.roster:
            player.clear_vote()
        self.session.vote_counts.clear()

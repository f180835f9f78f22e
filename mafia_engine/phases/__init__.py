"""
Phase resolution for the night and the day vote.
"""

from .night_phase import NightResolver, NightOutcome
from .voting import VoteTally

__all__ = ['NightResolver', 'NightOutcome', 'VoteTally']

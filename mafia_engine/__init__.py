"""
Rules engine for a Mafia party game.
"""

__version__ = "0.1.0"

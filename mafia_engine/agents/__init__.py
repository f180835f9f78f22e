"""
Bot players that drive a match through the command inlet.
"""

from .base_agent import BaseAgent, AgentContext
from .dummy_agent import DummyAgent

__all__ = ['BaseAgent', 'AgentContext', 'DummyAgent']

"""
Event recording for matches. The Socket.IO transport lives in `game_server`.
"""

from .event_emitter import EventEmitter
from .run_recorder import RunRecorder

__all__ = ['EventEmitter', 'RunRecorder']

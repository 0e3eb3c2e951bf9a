"""
Response sinks - where dispatched contracts are written.
"""

from .base import DispatchState, ResponseSink, TERMINAL_STATES
from .flask_sink import FlaskResponseSink
from .recording import RecordingSink

__all__ = [
    'DispatchState',
    'ResponseSink',
    'TERMINAL_STATES',
    'FlaskResponseSink',
    'RecordingSink',
]

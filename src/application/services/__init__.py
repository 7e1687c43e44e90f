"""
Application Services Package

Stateful collaborators used by the use cases: alert dispatching,
per-case session management and stream translation.
"""

from .alert_dispatcher import AlertDispatcher
from .session_registry import SessionRegistry
from .stream_multiplexer import StreamMultiplexer

__all__ = ["AlertDispatcher", "SessionRegistry", "StreamMultiplexer"]

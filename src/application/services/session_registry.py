"""
Session Registry - Application Layer

Maps a case identifier to the long-lived conversational engine that
holds that conversation's memory.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Dict, List, Optional

from src.domain.ports.conversational_engine import EngineFactory, IConversationalEngine
from src.shared import get_logger

logger = get_logger(__name__)


class SessionRegistry:
    """Creates engines on first use and keeps them until reset.

    Construction is exactly-once per key: concurrent first resolutions of
    the same case serialize on a per-key lock and all observe the instance
    built by the first caller. Resolutions of other keys are not blocked
    while an engine is being built.

    Args:
        engine_factory: Builds a fresh engine for a new session.
        max_sessions: When set, the least recently used session is evicted
            once the limit is exceeded. ``None`` keeps sessions until an
            explicit reset or shutdown.
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        max_sessions: Optional[int] = None,
    ) -> None:
        if max_sessions is not None and max_sessions <= 0:
            raise ValueError("max_sessions must be positive")
        self._engine_factory = engine_factory
        self._max_sessions = max_sessions
        self._sessions: "OrderedDict[str, IConversationalEngine]" = OrderedDict()
        self._key_locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def resolve(self, case_id: str) -> IConversationalEngine:
        with self._guard:
            session = self._sessions.get(case_id)
            if session is not None:
                self._sessions.move_to_end(case_id)
                return session
            key_lock = self._key_locks.setdefault(case_id, threading.Lock())

        with key_lock:
            with self._guard:
                session = self._sessions.get(case_id)
            if session is not None:
                return session

            session = self._engine_factory()
            with self._guard:
                self._sessions[case_id] = session
                self._key_locks.pop(case_id, None)
                evicted = self._evict_overflow()

        logger.info("session.created", case_id=case_id, active_sessions=len(self))
        for evicted_id in evicted:
            logger.info("session.evicted", case_id=evicted_id)
        return session

    def reset(self, case_id: str) -> bool:
        """Forget the session of ``case_id``. Returns True if one existed."""
        with self._guard:
            removed = self._sessions.pop(case_id, None) is not None
        logger.info("session.reset", case_id=case_id, existed=removed)
        return removed

    def touch(self, case_id: str) -> None:
        """Mark a session as recently used."""
        with self._guard:
            if case_id in self._sessions:
                self._sessions.move_to_end(case_id)

    def clear(self) -> None:
        with self._guard:
            count = len(self._sessions)
            self._sessions.clear()
        logger.info("session.registry.cleared", sessions=count)

    def case_ids(self) -> List[str]:
        with self._guard:
            return list(self._sessions)

    def __contains__(self, case_id: object) -> bool:
        with self._guard:
            return case_id in self._sessions

    def __len__(self) -> int:
        with self._guard:
            return len(self._sessions)

    def _evict_overflow(self) -> List[str]:
        evicted: List[str] = []
        if self._max_sessions is None:
            return evicted
        while len(self._sessions) > self._max_sessions:
            case_id, _ = self._sessions.popitem(last=False)
            evicted.append(case_id)
        return evicted

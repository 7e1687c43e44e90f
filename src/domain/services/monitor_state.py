"""
Monitor state - Domain service.

Holds the latest health snapshot of the monitored API and the buffer of
monitor log entries reported by cases. One instance is created by the
composition root and shared by every request handler and agent tool.
"""

from __future__ import annotations

import threading
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional, Sequence

from src.domain.entities.monitor import LogEntry, MonitorSnapshot, is_success_status
from src.shared import get_logger

logger = get_logger(__name__)


class MonitorState:
    """Thread-safe holder of the monitor snapshot and log buffer.

    The snapshot is an immutable value replaced by a single reference
    assignment, so readers never observe a partially built snapshot. The
    log buffer is guarded by a lock for append, clear and copy.

    Args:
        log_buffer_limit: Maximum number of retained log entries. ``None``
            keeps every entry; otherwise the oldest entries are dropped.
    """

    def __init__(self, log_buffer_limit: Optional[int] = None) -> None:
        if log_buffer_limit is not None and log_buffer_limit <= 0:
            raise ValueError("log_buffer_limit must be positive")
        self._snapshot: Optional[MonitorSnapshot] = None
        self._logs: Deque[LogEntry] = deque(maxlen=log_buffer_limit)
        self._lock = threading.Lock()

    def update(
        self,
        status: Optional[str],
        response_time: Optional[str],
        logs: Optional[Sequence[LogEntry]] = None,
    ) -> MonitorSnapshot:
        """
        Publish a new snapshot and fold ``logs`` into the buffer.

        Non-empty ``logs`` are appended after the existing entries. Without
        logs, a success status clears the buffer and any other status
        leaves it untouched.

        Returns:
            MonitorSnapshot: The snapshot that was published.
        """
        entries = list(logs or ())
        healthy = is_success_status(status)
        snapshot = MonitorSnapshot(
            status=status,
            response_time=response_time,
            healthy=healthy,
            error_count=len(entries),
            last_check_time=datetime.now(timezone.utc),
        )

        with self._lock:
            self._snapshot = snapshot
            if entries:
                self._logs.extend(entries)
            elif healthy:
                self._logs.clear()
            buffered = len(self._logs)

        logger.debug(
            "monitor.state.updated",
            status=status,
            healthy=healthy,
            error_count=snapshot.error_count,
            buffered_logs=buffered,
        )
        return snapshot

    def current_snapshot(self) -> MonitorSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            return MonitorSnapshot.unknown()
        return snapshot

    def recent_logs(self) -> List[LogEntry]:
        with self._lock:
            return list(self._logs)


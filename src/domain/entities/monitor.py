"""
Monitoring domain entities.

Value objects describing the health of the upstream API as reported by
incoming cases: individual log entries and the point-in-time snapshot
published by ``MonitorState``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

SUCCESS_STATUS = "200 OK"


def is_success_status(status: Optional[str]) -> bool:
    """Return True when ``status`` is the success literal, ignoring case."""
    if status is None:
        return False
    return status.lower() == SUCCESS_STATUS.lower()


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single monitor log line reported alongside a case."""

    timestamp: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True, slots=True)
class MonitorSnapshot:
    """Latest health of the monitored API. Replaced wholesale on update."""

    status: Optional[str]
    response_time: Optional[str]
    healthy: bool
    error_count: int
    last_check_time: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @classmethod
    def unknown(cls) -> "MonitorSnapshot":
        return cls(
            status="Unknown",
            response_time="N/A",
            healthy=True,
            error_count=0,
        )

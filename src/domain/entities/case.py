"""
Case domain entities.

A case is one inbound request: a user question plus the monitoring
context observed when it was asked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from src.domain.entities.monitor import LogEntry


class RequestState(str, Enum):
    """Lifecycle of a single case request."""

    RECEIVED = "received"
    STATUS_UPDATED = "status_updated"
    ALERT_EVALUATED = "alert_evaluated"
    SESSION_RESOLVED = "session_resolved"
    PROMPT_BUILT = "prompt_built"
    STREAMING = "streaming"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(slots=True)
class CaseRequest:
    """Inbound case. ``case_id`` doubles as the conversation session key."""

    case_id: str
    user_query: Optional[str]
    api_status: Optional[str] = None
    api_response_time: Optional[str] = None
    monitor_log: List[LogEntry] = field(default_factory=list)

    @property
    def latest_log(self) -> Optional[LogEntry]:
        """Most recent log entry; callers report newest first."""
        return self.monitor_log[0] if self.monitor_log else None


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of the alert side-effects for one case."""

    chat_notify_status: Optional[str] = None
    fault_doc_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CaseResult:
    """Terminal output of one request cycle."""

    case_id: str
    reply: str
    action_result: Optional[ActionResult] = None

    @property
    def alert_triggered(self) -> bool:
        return self.action_result is not None


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Counters reported after processing a batch of cases."""

    total_cases: int
    successful_replies: int
    alerts_triggered: int

    @classmethod
    def from_results(cls, results: List[CaseResult]) -> "BatchSummary":
        return cls(
            total_cases=len(results),
            successful_replies=sum(1 for result in results if result.reply),
            alerts_triggered=sum(1 for result in results if result.alert_triggered),
        )

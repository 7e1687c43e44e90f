"""
Notification domain entities.

Outbound notifiers report their outcome as values instead of raising, so
callers decide how each outcome degrades.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NotificationStatus(str, Enum):
    DELIVERED = "delivered"
    SIMULATED = "simulated"
    FAILED = "failed"


class NotificationFailure(str, Enum):
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True, slots=True)
class NotificationResult:
    """Outcome of one notifier call.

    ``value`` holds the notifier's answer for delivered and simulated
    calls (a status string or a document identifier). Failed calls carry
    a ``failure`` reason and a human readable ``detail``.
    """

    status: NotificationStatus
    value: Optional[str] = None
    failure: Optional[NotificationFailure] = None
    detail: Optional[str] = None

    @classmethod
    def delivered(cls, value: str) -> "NotificationResult":
        return cls(status=NotificationStatus.DELIVERED, value=value)

    @classmethod
    def simulated(cls, value: str, detail: Optional[str] = None) -> "NotificationResult":
        return cls(status=NotificationStatus.SIMULATED, value=value, detail=detail)

    @classmethod
    def failed(cls, failure: NotificationFailure, detail: str) -> "NotificationResult":
        return cls(status=NotificationStatus.FAILED, failure=failure, detail=detail)

"""Domain rules deciding when an API status warrants an alert."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Optional

from src.domain.entities.monitor import is_success_status


class AlertPolicy(str, Enum):
    """How often alerts fire for a status that stays abnormal.

    EVERY_REQUEST re-fires on each request carrying a non-success status.
    PER_INCIDENT fires once per run of identical non-success statuses.
    """

    EVERY_REQUEST = "every_request"
    PER_INCIDENT = "per_incident"


def needs_alert(status: Optional[str]) -> bool:
    """Return True unless ``status`` is the success literal (ignoring case)."""
    return not is_success_status(status)


class AlertGate:
    """Applies an ``AlertPolicy`` on top of ``needs_alert``.

    Under PER_INCIDENT the gate remembers the status of the open incident.
    A success status closes it; a different abnormal status opens a new
    one and fires again.
    """

    def __init__(self, policy: AlertPolicy = AlertPolicy.EVERY_REQUEST) -> None:
        self._policy = AlertPolicy(policy)
        self._open_incident: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def policy(self) -> AlertPolicy:
        return self._policy

    def should_fire(self, status: Optional[str]) -> bool:
        alert = needs_alert(status)
        if self._policy is AlertPolicy.EVERY_REQUEST:
            return alert

        incident_key = (status or "").lower()
        with self._lock:
            if not alert:
                self._open_incident = None
                return False
            if self._open_incident == incident_key:
                return False
            self._open_incident = incident_key
            return True

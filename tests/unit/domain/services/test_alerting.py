from __future__ import annotations

import pytest

from src.domain.services.alerting import AlertGate, AlertPolicy, needs_alert


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("200 OK", False),
        ("200 oK", False),
        ("500 Internal Server Error", True),
        ("Timeout", True),
        ("", True),
        (None, True),
    ],
)
def test_needs_alert(status, expected) -> None:
    assert needs_alert(status) is expected


def test_every_request_policy_refires() -> None:
    gate = AlertGate(AlertPolicy.EVERY_REQUEST)
    assert gate.should_fire("500")
    assert gate.should_fire("500")
    assert not gate.should_fire("200 OK")


def test_per_incident_policy_fires_once_per_incident() -> None:
    gate = AlertGate(AlertPolicy.PER_INCIDENT)

    assert gate.should_fire("500") is True
    assert gate.should_fire("500") is False
    assert gate.should_fire("503") is True
    assert gate.should_fire("200 OK") is False
    assert gate.should_fire("503") is True


def test_policy_accepts_string_value() -> None:
    assert AlertGate("per_incident").policy is AlertPolicy.PER_INCIDENT

from __future__ import annotations

import pytest

from src.domain.entities.health import DependencyCheck, ServiceStatus, SystemHealth


def _check(name: str, status: ServiceStatus) -> DependencyCheck:
    return DependencyCheck(name=name, status=status)


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([ServiceStatus.UP, ServiceStatus.UP], ServiceStatus.UP),
        ([ServiceStatus.UP, ServiceStatus.UNKNOWN], ServiceStatus.UNKNOWN),
        ([ServiceStatus.UNKNOWN, ServiceStatus.DEGRADED], ServiceStatus.DEGRADED),
        ([ServiceStatus.DEGRADED, ServiceStatus.DOWN, ServiceStatus.UP], ServiceStatus.DOWN),
    ],
)
def test_overall_status_is_most_severe_check(statuses, expected) -> None:
    checks = [_check(f"dep-{index}", status) for index, status in enumerate(statuses)]

    health = SystemHealth.from_checks(checks)

    assert health.status is expected
    assert [check.name for check in health.checks] == [check.name for check in checks]


def test_no_checks_is_unknown() -> None:
    assert SystemHealth.from_checks([]).status is ServiceStatus.UNKNOWN


def test_check_lookup_by_name() -> None:
    health = SystemHealth.from_checks(
        [_check("llm", ServiceStatus.UP), _check("feishu", ServiceStatus.UNKNOWN)]
    )

    assert health.check("feishu").status is ServiceStatus.UNKNOWN
    assert health.check("apifox") is None

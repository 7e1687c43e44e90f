"""
Health of the agent's collaborators.

The agent stays usable with simulated notifiers and an empty knowledge
base, so only an unreachable LLM endpoint takes it down. The overall
status is the most severe status among the individual checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple


class ServiceStatus(str, Enum):
    UP = "up"
    UNKNOWN = "unknown"
    DEGRADED = "degraded"
    DOWN = "down"


_SEVERITY = {
    ServiceStatus.UP: 0,
    ServiceStatus.UNKNOWN: 1,
    ServiceStatus.DEGRADED: 2,
    ServiceStatus.DOWN: 3,
}


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Outcome of probing one collaborator (llm, feishu, apifox, knowledge_base)."""

    name: str
    status: ServiceStatus
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SystemHealth:
    status: ServiceStatus
    checks: Tuple[DependencyCheck, ...] = ()

    @classmethod
    def from_checks(cls, checks: Iterable[DependencyCheck]) -> "SystemHealth":
        checks = tuple(checks)
        if not checks:
            return cls(status=ServiceStatus.UNKNOWN)
        worst = max(checks, key=lambda check: _SEVERITY[check.status])
        return cls(status=worst.status, checks=checks)

    def check(self, name: str) -> Optional[DependencyCheck]:
        return next((check for check in self.checks if check.name == name), None)


@dataclass(frozen=True, slots=True)
class AgentInfo:
    """Build, runtime and routing facts reported by ``/api/info``."""

    name: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    health: ServiceStatus
    active_sessions: int
    llm_endpoint: str
    model_name: str
    alert_policy: str
    endpoints: Dict[str, str] = field(default_factory=dict)

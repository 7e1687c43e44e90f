"""Domain port for collaborator health checks."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Reports whether the agent's collaborators are usable."""

    async def evaluate(self) -> SystemHealth:
        """Probe every collaborator and aggregate the result."""
        ...

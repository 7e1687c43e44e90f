"""DTOs for the /api/health and /api/info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from src.domain.entities.health import (
    AgentInfo,
    DependencyCheck,
    ServiceStatus,
    SystemHealth,
)


class DependencyCheckDTO(BaseModel):
    name: str
    status: ServiceStatus
    message: str = ""
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, check: DependencyCheck) -> "DependencyCheckDTO":
        return cls(
            name=check.name,
            status=check.status,
            message=check.message,
            details=dict(check.details),
        )


class SystemHealthDTO(BaseModel):
    """Overall agent status plus one entry per collaborator."""

    status: ServiceStatus
    checks: List[DependencyCheckDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            checks=[DependencyCheckDTO.from_domain(check) for check in health.checks],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "degraded",
                "checks": [
                    {
                        "name": "llm",
                        "status": "up",
                        "message": "HTTP 200",
                        "details": {"url": "http://localhost:11434/v1/models"},
                    },
                    {
                        "name": "knowledge_base",
                        "status": "degraded",
                        "message": "No knowledge documents loaded",
                        "details": {"documents": 0},
                    },
                ],
            }
        }
    }


class AgentInfoDTO(BaseModel):
    name: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float = Field(description="Seconds since the app started")
    health: ServiceStatus = Field(description="Overall status at request time")
    active_sessions: int = Field(description="Open conversation sessions")
    llm_endpoint: str = Field(description="LLM endpoint, credentials removed")
    model_name: str
    alert_policy: str
    endpoints: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, info: AgentInfo) -> "AgentInfoDTO":
        return cls(
            name=info.name,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            health=info.health,
            active_sessions=info.active_sessions,
            llm_endpoint=info.llm_endpoint,
            model_name=info.model_name,
            alert_policy=info.alert_policy,
            endpoints=dict(info.endpoints),
        )

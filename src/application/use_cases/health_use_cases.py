"""Use cases behind /api/health and /api/info."""

from datetime import datetime, timezone
from typing import Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from src.application.dtos.health_dto import AgentInfoDTO, SystemHealthDTO
from src.application.models import SystemInfo
from src.application.services.session_registry import SessionRegistry
from src.domain.entities.health import AgentInfo
from src.domain.ports.health_check import IHealthCheckService


def strip_credentials(url: str) -> str:
    """Drop ``user:password@`` from a URL before it is reported."""
    parsed = urlsplit(url)
    if not (parsed.username or parsed.password):
        return url
    netloc = parsed.hostname or ""
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return urlunsplit(parsed._replace(netloc=netloc))


class GetHealthStatusUseCase:
    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        return SystemHealthDTO.from_domain(await self._health_check_service.evaluate())


class GetApplicationInfoUseCase:
    """Reports version, uptime, open sessions and the route catalogue."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
        session_registry: SessionRegistry,
        endpoints: Optional[Dict[str, str]] = None,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info
        self._session_registry = session_registry
        self._endpoints = dict(endpoints or {})

    async def execute(self, started_at: Optional[datetime]) -> AgentInfoDTO:
        health = await self._health_check_service.evaluate()
        now = datetime.now(timezone.utc)
        started = started_at or now

        return AgentInfoDTO.from_domain(
            AgentInfo(
                name=self._info.title,
                version=self._info.version,
                environment=self._info.environment,
                git_commit=self._info.git_commit,
                build_time=self._info.build_time,
                started_at=started,
                uptime_seconds=max(0.0, (now - started).total_seconds()),
                health=health.status,
                active_sessions=len(self._session_registry),
                llm_endpoint=strip_credentials(self._info.llm_base_url),
                model_name=self._info.llm_model_name,
                alert_policy=self._info.alert_policy,
                endpoints=self._endpoints,
            )
        )

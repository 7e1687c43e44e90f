"""Health checks for the agent's collaborators - Infrastructure layer."""

from __future__ import annotations

from time import perf_counter
from typing import Dict, Optional

import httpx

from src.domain.entities.health import DependencyCheck, ServiceStatus, SystemHealth
from src.domain.gateways.notification_gateways import (
    IChatNotifierGateway,
    IFaultDocumentGateway,
)
from src.domain.ports.health_check import IHealthCheckService
from src.domain.ports.knowledge_base import IKnowledgeBase
from src.shared import get_logger

logger = get_logger(__name__)


class HealthCheckService(IHealthCheckService):
    """Probes the LLM endpoint and inspects notifier and knowledge setup.

    Only the LLM check touches the network; notifiers are reported from
    their configuration.
    """

    def __init__(
        self,
        llm_base_url: str,
        chat_notifier: IChatNotifierGateway,
        fault_document_gateway: IFaultDocumentGateway,
        knowledge_base: IKnowledgeBase,
        llm_api_key: Optional[str] = None,
        *,
        http_timeout: float = 5.0,
    ) -> None:
        self._llm_base_url = llm_base_url
        self._llm_api_key = llm_api_key
        self._chat_notifier = chat_notifier
        self._fault_document_gateway = fault_document_gateway
        self._knowledge_base = knowledge_base
        self._http_timeout = http_timeout

    async def evaluate(self) -> SystemHealth:
        health = SystemHealth.from_checks(
            [
                await self.check_llm(),
                self._notifier_check(
                    "feishu", self._chat_notifier.is_configured(), "Feishu webhook"
                ),
                self._notifier_check(
                    "apifox",
                    self._fault_document_gateway.is_configured(),
                    "Apifox API",
                ),
                self._knowledge_check(),
            ]
        )
        logger.debug("health.evaluated", status=health.status.value)
        return health

    async def check_llm(self) -> DependencyCheck:
        if not self._llm_base_url:
            return DependencyCheck(
                name="llm", status=ServiceStatus.UNKNOWN, message="LLM URL not configured"
            )

        url = f"{self._llm_base_url.rstrip('/')}/models"
        headers: Dict[str, str] = {}
        if self._llm_api_key:
            headers["Authorization"] = f"Bearer {self._llm_api_key}"

        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("health.llm.unreachable", url=url, error=str(exc))
            return DependencyCheck(
                name="llm",
                status=ServiceStatus.DOWN,
                message=f"LLM endpoint unreachable: {exc}",
                details={"url": url},
            )

        latency_ms = round((perf_counter() - start) * 1000, 1)
        # A 4xx from /models still means the endpoint is serving.
        if response.status_code >= 500:
            status = ServiceStatus.DOWN
        elif response.status_code >= 400:
            status = ServiceStatus.DEGRADED
        else:
            status = ServiceStatus.UP
        return DependencyCheck(
            name="llm",
            status=status,
            message=f"HTTP {response.status_code}",
            details={
                "url": url,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
            },
        )

    @staticmethod
    def _notifier_check(name: str, configured: bool, label: str) -> DependencyCheck:
        if configured:
            return DependencyCheck(
                name=name, status=ServiceStatus.UP, message=f"{label} configured"
            )
        return DependencyCheck(
            name=name,
            status=ServiceStatus.UNKNOWN,
            message=f"{label} not configured; alerts are simulated",
        )

    def _knowledge_check(self) -> DependencyCheck:
        documents = self._knowledge_base.document_count
        return DependencyCheck(
            name="knowledge_base",
            status=ServiceStatus.UP if documents else ServiceStatus.DEGRADED,
            message=(
                f"{documents} knowledge documents loaded"
                if documents
                else "No knowledge documents loaded"
            ),
            details={"documents": documents},
        )

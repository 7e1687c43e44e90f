from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.application.models import SystemInfo
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.domain.entities.health import DependencyCheck, ServiceStatus, SystemHealth
from src.main.app import create_app
from src.main.container import get_container


class _StubKnowledgeBase:
    document_count = 0

    def load(self) -> int:
        return 0

    def search(self, query, limit=None):
        return []


class _HealthCheckService:
    def __init__(self, llm_status: ServiceStatus):
        self.llm_status = llm_status

    async def evaluate(self) -> SystemHealth:
        return SystemHealth.from_checks(
            [
                DependencyCheck(name="llm", status=self.llm_status),
                DependencyCheck(name="feishu", status=ServiceStatus.UP),
            ]
        )


@pytest.fixture()
def health_service() -> _HealthCheckService:
    return _HealthCheckService(ServiceStatus.UP)


@pytest.fixture()
def client(health_service):
    app = create_app()
    container = get_container()
    container.knowledge_base.override(providers.Object(_StubKnowledgeBase()))

    system_info = SystemInfo(
        title="Monitor Agent",
        version="1.0",
        environment="dev",
        git_commit="abc",
        build_time="now",
        llm_base_url="http://llm.local/v1",
        llm_model_name="test-model",
        alert_policy="every_request",
    )
    container.get_health_status_use_case.override(
        providers.Object(GetHealthStatusUseCase(health_service))
    )
    container.get_application_info_use_case.override(
        providers.Factory(
            GetApplicationInfoUseCase,
            health_check_service=health_service,
            system_info=system_info,
            session_registry=container.session_registry,
            endpoints={"health": "GET /api/health"},
        )
    )

    with TestClient(app) as test_client:
        yield test_client


def test_health_endpoint(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "up"
    assert [check["name"] for check in body["checks"]] == ["llm", "feishu"]


def test_health_endpoint_unavailable_when_llm_down(client, health_service):
    health_service.llm_status = ServiceStatus.DOWN

    response = client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "down"


def test_info_endpoint(client):
    response = client.get("/api/info")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Monitor Agent"
    assert body["active_sessions"] == 0
    assert body["endpoints"] == {"health": "GET /api/health"}
    assert body["model_name"] == "test-model"
    assert body["health"] == "up"

from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi import FastAPI

from src.main import app as module_app
from src.main.app import create_app
from src.main.container import get_container
from src.shared import API_ENDPOINTS


class _StubKnowledgeBase:
    document_count = 0

    def load(self) -> int:
        return 0

    def search(self, query, limit=None):
        return []


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan() -> None:
    app = create_app()
    get_container().knowledge_base.override(providers.Object(_StubKnowledgeBase()))
    assert app.title

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None

    # Ensure module-level app is instantiated
    assert isinstance(module_app.app, FastAPI)


def test_create_app_registers_catalogued_routes() -> None:
    app = create_app()
    routes = {
        (method, route.path)
        for route in app.routes
        for method in getattr(route, "methods", None) or set()
    }

    for entry in API_ENDPOINTS.values():
        method, path = entry.split(" ", 1)
        assert (method, path) in routes

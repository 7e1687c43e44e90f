from __future__ import annotations

import pytest

from src.application.services.session_registry import SessionRegistry
from src.application.use_cases.session_use_cases import ResetSessionUseCase
from src.domain.entities.errors import InvalidCaseRequestError


@pytest.mark.asyncio
async def test_reset_session_drops_memory() -> None:
    registry = SessionRegistry(engine_factory=object)
    registry.resolve("case-1")

    response = await ResetSessionUseCase(registry).execute("case-1")

    assert response.status == "success"
    assert response.message == "Session case-1 has been reset"
    assert "case-1" not in registry


@pytest.mark.asyncio
async def test_reset_unknown_session_succeeds() -> None:
    response = await ResetSessionUseCase(SessionRegistry(engine_factory=object)).execute("ghost")
    assert response.status == "success"


@pytest.mark.asyncio
async def test_reset_requires_case_id() -> None:
    with pytest.raises(InvalidCaseRequestError):
        await ResetSessionUseCase(SessionRegistry(engine_factory=object)).execute(" ")

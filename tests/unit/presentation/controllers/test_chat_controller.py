from __future__ import annotations

import pytest
from fastapi import HTTPException

from src.application.dtos.case_dto import ChatRequestDTO
from src.application.use_cases.chat_use_cases import SimpleChatUseCase
from src.presentation.controllers.chat_controller import chat
from tests.conftest import FakeEngine


@pytest.mark.asyncio
async def test_chat_endpoint_returns_reply() -> None:
    dto = await chat(
        chat_request=ChatRequestDTO(query="What plans exist?"),
        simple_chat_use_case=SimpleChatUseCase(FakeEngine(reply="Basic and Pro.")),
    )
    assert dto.reply == "Basic and Pro."


@pytest.mark.asyncio
async def test_chat_endpoint_requires_query() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await chat(
            chat_request=ChatRequestDTO(),
            simple_chat_use_case=SimpleChatUseCase(FakeEngine()),
        )
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Field 'query' is required"

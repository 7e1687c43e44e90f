from __future__ import annotations

import pytest

from src.application.use_cases.chat_use_cases import NO_REPLY, SimpleChatUseCase
from src.domain.entities.errors import InvalidCaseRequestError
from tests.conftest import FakeEngine


@pytest.mark.asyncio
async def test_chat_passes_query_verbatim() -> None:
    engine = FakeEngine(reply="Basic plan costs 10 USD.")

    response = await SimpleChatUseCase(engine).execute("How much is Basic?")

    assert response.reply == "Basic plan costs 10 USD."
    assert engine.prompts == ["How much is Basic?"]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "   "])
async def test_chat_requires_query(query) -> None:
    with pytest.raises(InvalidCaseRequestError) as exc_info:
        await SimpleChatUseCase(FakeEngine()).execute(query)
    assert exc_info.value.message == "Field 'query' is required"


@pytest.mark.asyncio
async def test_chat_empty_reply_and_failure() -> None:
    assert (await SimpleChatUseCase(FakeEngine(reply="")).execute("hi")).reply == NO_REPLY

    failing = SimpleChatUseCase(FakeEngine(error=RuntimeError("boom")))
    response = await failing.execute("hi")
    assert response.reply == "Sorry, an error occurred while chatting: boom"

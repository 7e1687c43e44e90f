"""Use case for context-free chat with the shared conversational engine."""

from typing import Optional

import structlog

from src.application.dtos.case_dto import ChatResponseDTO
from src.domain.entities.errors import InvalidCaseRequestError
from src.domain.ports.conversational_engine import IConversationalEngine

logger = structlog.get_logger(__name__)

CHAT_ERROR_REPLY = "Sorry, an error occurred while chatting: {message}"
NO_REPLY = "No reply could be obtained"


class SimpleChatUseCase:
    """Answers a bare question without monitoring context or per-case memory."""

    def __init__(self, conversational_engine: IConversationalEngine) -> None:
        self._engine = conversational_engine

    async def execute(self, query: Optional[str]) -> ChatResponseDTO:
        if not query or not query.strip():
            raise InvalidCaseRequestError("query")

        logger.info("chat.request", query_length=len(query))
        try:
            reply = await self._engine.call(query)
        except Exception as exc:
            logger.error("chat.failed", error=str(exc), exc_info=exc)
            return ChatResponseDTO(reply=CHAT_ERROR_REPLY.format(message=exc))

        return ChatResponseDTO(reply=reply or NO_REPLY)

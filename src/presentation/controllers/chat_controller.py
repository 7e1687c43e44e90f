"""Chat endpoint without case context."""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from src.application.dtos.case_dto import ChatRequestDTO, ChatResponseDTO
from src.application.use_cases.chat_use_cases import SimpleChatUseCase
from src.domain.entities.errors import InvalidCaseRequestError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post("/chat", response_model=ChatResponseDTO)
@inject
async def chat(
    chat_request: ChatRequestDTO,
    simple_chat_use_case: SimpleChatUseCase = Depends(
        Provide["simple_chat_use_case"]
    ),
) -> ChatResponseDTO:
    """Ask the shared agent a question. No monitoring context is added."""
    try:
        return await simple_chat_use_case.execute(chat_request.query)
    except InvalidCaseRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

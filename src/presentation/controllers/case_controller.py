"""
Case Router - Presentation Layer

Endpoints that run cases through the agent: single cases (JSON or
server-sent events), batches read from disk, and session reset.
"""

from typing import AsyncIterator, Optional, Union

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse

from src.application.dtos.case_dto import (
    BatchResultDTO,
    CaseRequestDTO,
    CaseResultDTO,
    SessionResetDTO,
)
from src.application.use_cases.batch_use_case import ProcessBatchUseCase
from src.application.use_cases.process_case_use_case import ProcessCaseUseCase
from src.application.use_cases.session_use_cases import ResetSessionUseCase
from src.domain.entities.conversation import Frame
from src.domain.entities.errors import BatchProcessingError, InvalidCaseRequestError
from src.shared import SSE_MEDIA_TYPE

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Cases"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def _sse_body(frames: AsyncIterator[Frame]) -> AsyncIterator[str]:
    async for frame in frames:
        yield frame.to_sse()


def _stream_case(
    case_request: CaseRequestDTO, process_case_use_case: ProcessCaseUseCase
) -> StreamingResponse:
    try:
        frames = process_case_use_case.stream(case_request.to_domain())
    except InvalidCaseRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return StreamingResponse(
        _sse_body(frames), media_type=SSE_MEDIA_TYPE, headers=SSE_HEADERS
    )


@router.post(
    "/process",
    response_model=CaseResultDTO,
    responses={200: {"content": {SSE_MEDIA_TYPE: {}}}},
)
@inject
async def process_case(
    case_request: CaseRequestDTO,
    request: Request,
    process_case_use_case: ProcessCaseUseCase = Depends(
        Provide["process_case_use_case"]
    ),
) -> Union[CaseResultDTO, StreamingResponse]:
    """
    Process a single case.

    Answers with the final CaseResult, or with a server-sent event stream
    of reasoning, tool_result and content frames when the client accepts
    ``text/event-stream``.
    """
    if SSE_MEDIA_TYPE in request.headers.get("accept", ""):
        return _stream_case(case_request, process_case_use_case)

    try:
        result = await process_case_use_case.execute(case_request.to_domain())
    except InvalidCaseRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(
            "case.process.unhandled", case_id=case_request.case_id, error=str(e)
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred: {e}",
        )
    return CaseResultDTO.from_domain(result)


@router.post("/process/stream", response_class=StreamingResponse)
@inject
async def process_case_stream(
    case_request: CaseRequestDTO,
    process_case_use_case: ProcessCaseUseCase = Depends(
        Provide["process_case_use_case"]
    ),
) -> StreamingResponse:
    """Process a single case and stream its frames as server-sent events."""
    return _stream_case(case_request, process_case_use_case)


@router.post("/process-batch", response_model=BatchResultDTO)
@inject
async def process_batch(
    input_file: Optional[str] = Query(
        None, description="JSON file with an array of cases"
    ),
    output_file: Optional[str] = Query(
        None, description="Where the JSON array of results is written"
    ),
    process_batch_use_case: ProcessBatchUseCase = Depends(
        Provide["process_batch_use_case"]
    ),
) -> BatchResultDTO:
    """
    Process every case of a batch file sequentially.

    Defaults for both paths come from the batch settings.
    """
    try:
        return await process_batch_use_case.execute(
            input_file=input_file, output_file=output_file
        )
    except (BatchProcessingError, InvalidCaseRequestError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("batch.process.unhandled", input_file=input_file, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred: {e}",
        )


@router.post("/session/reset/{case_id}", response_model=SessionResetDTO)
@inject
async def reset_session(
    case_id: str,
    reset_session_use_case: ResetSessionUseCase = Depends(
        Provide["reset_session_use_case"]
    ),
) -> SessionResetDTO:
    """Forget the conversation memory of a case."""
    try:
        return await reset_session_use_case.execute(case_id)
    except InvalidCaseRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

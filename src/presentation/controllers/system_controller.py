"""/api/health and /api/info."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request, Response, status

from src.application.dtos.health_dto import AgentInfoDTO, SystemHealthDTO
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.domain.entities.health import ServiceStatus
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["System"])


@router.get(
    "/health",
    response_model=SystemHealthDTO,
    responses={503: {"model": SystemHealthDTO, "description": "LLM endpoint down"}},
)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """Report each collaborator; answers 503 while the agent cannot reply."""
    report = await get_health_status_use_case.execute()
    if report.status is ServiceStatus.DOWN:
        logger.warning(
            "health.down",
            failing=[check.name for check in report.checks if check.status is ServiceStatus.DOWN],
        )
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return report


@router.get("/info", response_model=AgentInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide["get_application_info_use_case"]
    ),
) -> AgentInfoDTO:
    return await get_application_info_use_case.execute(
        getattr(request.app.state, "started_at", None)
    )

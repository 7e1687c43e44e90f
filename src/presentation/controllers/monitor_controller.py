"""Read-only endpoints over the monitor state."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from src.application.dtos.monitor_dto import MonitorLogsDTO, MonitorStatusDTO
from src.application.use_cases.monitor_use_cases import (
    GetMonitorLogsUseCase,
    GetMonitorStatusUseCase,
)

router = APIRouter(prefix="/api/monitor", tags=["Monitor"])


@router.get("/status", response_model=MonitorStatusDTO)
@inject
async def monitor_status(
    get_monitor_status_use_case: GetMonitorStatusUseCase = Depends(
        Provide["get_monitor_status_use_case"]
    ),
) -> MonitorStatusDTO:
    """Return the latest snapshot of the monitored API."""
    return await get_monitor_status_use_case.execute()


@router.get("/logs", response_model=MonitorLogsDTO)
@inject
async def monitor_logs(
    get_monitor_logs_use_case: GetMonitorLogsUseCase = Depends(
        Provide["get_monitor_logs_use_case"]
    ),
) -> MonitorLogsDTO:
    return await get_monitor_logs_use_case.execute()

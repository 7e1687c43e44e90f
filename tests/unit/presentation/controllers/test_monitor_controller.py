from __future__ import annotations

import pytest

from src.application.use_cases.monitor_use_cases import (
    GetMonitorLogsUseCase,
    GetMonitorStatusUseCase,
)
from src.domain.entities.monitor import LogEntry
from src.domain.services.monitor_state import MonitorState
from src.presentation.controllers.monitor_controller import monitor_logs, monitor_status


@pytest.mark.asyncio
async def test_monitor_endpoints_expose_state() -> None:
    state = MonitorState()
    state.update("500 Internal Server Error", "Timeout", [LogEntry("11:20", "Error", "down")])

    status_dto = await monitor_status(get_monitor_status_use_case=GetMonitorStatusUseCase(state))
    logs_dto = await monitor_logs(get_monitor_logs_use_case=GetMonitorLogsUseCase(state))

    assert status_dto.status == "500 Internal Server Error"
    assert status_dto.healthy is False
    assert logs_dto.count == 1
    assert logs_dto.logs[0].msg == "down"

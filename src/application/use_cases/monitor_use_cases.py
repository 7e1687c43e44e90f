"""Read-only use cases over the shared monitor state."""

from src.application.dtos.monitor_dto import MonitorLogsDTO, MonitorStatusDTO
from src.domain.services.monitor_state import MonitorState


class GetMonitorStatusUseCase:
    """Returns the latest published monitor snapshot."""

    def __init__(self, monitor_state: MonitorState) -> None:
        self._monitor_state = monitor_state

    async def execute(self) -> MonitorStatusDTO:
        return MonitorStatusDTO.from_domain(self._monitor_state.current_snapshot())


class GetMonitorLogsUseCase:
    """Returns a copy of the buffered monitor log."""

    def __init__(self, monitor_state: MonitorState) -> None:
        self._monitor_state = monitor_state

    async def execute(self) -> MonitorLogsDTO:
        return MonitorLogsDTO.from_domain(self._monitor_state.recent_logs())

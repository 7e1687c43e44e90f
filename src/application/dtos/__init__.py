"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .case_dto import (
    ActionResultDTO,
    BatchResultDTO,
    CaseRequestDTO,
    CaseResultDTO,
    ChatRequestDTO,
    ChatResponseDTO,
    LogEntryDTO,
    SessionResetDTO,
)
from .health_dto import AgentInfoDTO, DependencyCheckDTO, SystemHealthDTO
from .monitor_dto import MonitorLogsDTO, MonitorStatusDTO

__all__ = [
    "LogEntryDTO",
    "CaseRequestDTO",
    "CaseResultDTO",
    "ActionResultDTO",
    "ChatRequestDTO",
    "ChatResponseDTO",
    "SessionResetDTO",
    "BatchResultDTO",
    "MonitorStatusDTO",
    "MonitorLogsDTO",
    "SystemHealthDTO",
    "DependencyCheckDTO",
    "AgentInfoDTO",
]

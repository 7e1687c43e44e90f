"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .batch_use_case import ProcessBatchUseCase
from .chat_use_cases import SimpleChatUseCase
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .monitor_use_cases import GetMonitorLogsUseCase, GetMonitorStatusUseCase
from .process_case_use_case import ProcessCaseUseCase
from .session_use_cases import ResetSessionUseCase

__all__ = [
    "ProcessCaseUseCase",
    "ProcessBatchUseCase",
    "SimpleChatUseCase",
    "ResetSessionUseCase",
    "GetMonitorStatusUseCase",
    "GetMonitorLogsUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]

"""
Domain Entities Package

This package contains the core domain entities of the monitor agent.
"""

from .case import ActionResult, BatchSummary, CaseRequest, CaseResult, RequestState
from .conversation import (
    ContentSegment,
    EngineEvent,
    EventType,
    Frame,
    FrameKind,
    MediaSegment,
    SegmentKind,
    StreamOptions,
    TextSegment,
    ThinkingSegment,
    ToolResultSegment,
)
from .errors import (
    BatchProcessingError,
    ConversationEngineError,
    DomainError,
    InvalidCaseRequestError,
)
from .health import AgentInfo, DependencyCheck, ServiceStatus, SystemHealth
from .monitor import SUCCESS_STATUS, LogEntry, MonitorSnapshot, is_success_status
from .notification import NotificationFailure, NotificationResult, NotificationStatus

__all__ = [
    "ActionResult",
    "BatchSummary",
    "CaseRequest",
    "CaseResult",
    "RequestState",
    "ContentSegment",
    "EngineEvent",
    "EventType",
    "Frame",
    "FrameKind",
    "MediaSegment",
    "SegmentKind",
    "StreamOptions",
    "TextSegment",
    "ThinkingSegment",
    "ToolResultSegment",
    "DomainError",
    "InvalidCaseRequestError",
    "ConversationEngineError",
    "BatchProcessingError",
    "AgentInfo",
    "DependencyCheck",
    "ServiceStatus",
    "SystemHealth",
    "SUCCESS_STATUS",
    "LogEntry",
    "MonitorSnapshot",
    "is_success_status",
    "NotificationFailure",
    "NotificationResult",
    "NotificationStatus",
]

from __future__ import annotations

import sys
from pathlib import Path
from typing import AsyncIterator, List, Optional, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.application.services.alert_dispatcher import AlertDispatcher  # noqa: E402
from src.application.services.session_registry import SessionRegistry  # noqa: E402
from src.application.services.stream_multiplexer import (  # noqa: E402
    StreamMultiplexer,
)
from src.application.use_cases.process_case_use_case import (  # noqa: E402
    ProcessCaseUseCase,
)
from src.domain.entities.case import CaseRequest  # noqa: E402
from src.domain.entities.conversation import (  # noqa: E402
    EngineEvent,
    EventType,
    StreamOptions,
    TextSegment,
    ThinkingSegment,
)
from src.domain.entities.monitor import LogEntry  # noqa: E402
from src.domain.entities.notification import NotificationResult  # noqa: E402
from src.domain.gateways.notification_gateways import (  # noqa: E402
    IChatNotifierGateway,
    IFaultDocumentGateway,
)
from src.domain.services.alerting import AlertGate, AlertPolicy  # noqa: E402
from src.domain.services.monitor_state import MonitorState  # noqa: E402


class FakeEngine:
    """Conversational engine double replaying canned events."""

    def __init__(
        self,
        reply: Optional[str] = "All systems nominal.",
        events: Optional[Sequence[EngineEvent]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.reply = reply
        self.events = list(events) if events is not None else None
        self.error = error
        self.prompts: List[str] = []
        self.stream_options: List[StreamOptions] = []
        self.streams_closed = 0

    async def call(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    async def stream(
        self, prompt: str, options: StreamOptions
    ) -> AsyncIterator[EngineEvent]:
        self.prompts.append(prompt)
        self.stream_options.append(options)
        if self.error is not None:
            raise self.error
        events = self.events
        if events is None:
            events = [
                EngineEvent(
                    EventType.REASONING, (TextSegment(self.reply or ""),), is_last=True
                )
            ]
        try:
            for event in events:
                yield event
        finally:
            self.streams_closed += 1


class FakeChatNotifier(IChatNotifierGateway):
    def __init__(
        self,
        result: Optional[NotificationResult] = None,
        error: Optional[Exception] = None,
        configured: bool = True,
    ) -> None:
        self.result = result or NotificationResult.delivered("Sent success")
        self.error = error
        self.configured = configured
        self.calls: List[Tuple[Optional[str], Optional[str], Optional[str]]] = []

    def is_configured(self) -> bool:
        return self.configured

    async def send_alert(self, timestamp, error_code, latency) -> NotificationResult:
        self.calls.append((timestamp, error_code, latency))
        if self.error is not None:
            raise self.error
        return self.result


class FakeFaultDocumentGateway(IFaultDocumentGateway):
    def __init__(
        self,
        result: Optional[NotificationResult] = None,
        error: Optional[Exception] = None,
        configured: bool = True,
    ) -> None:
        self.result = result or NotificationResult.delivered("DOC_1001")
        self.error = error
        self.configured = configured
        self.calls: List[Tuple[Optional[str], ...]] = []

    def is_configured(self) -> bool:
        return self.configured

    async def create_document(
        self, timestamp, error_code, error_message, latency
    ) -> NotificationResult:
        self.calls.append((timestamp, error_code, error_message, latency))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def healthy_case() -> CaseRequest:
    return CaseRequest(
        case_id="case-ok",
        user_query="Is the service stable today?",
        api_status="200 OK",
        api_response_time="120ms",
    )


@pytest.fixture()
def failing_case() -> CaseRequest:
    return CaseRequest(
        case_id="case-500",
        user_query="Why is checkout failing?",
        api_status="500 Internal Server Error",
        api_response_time="Timeout",
        monitor_log=[
            LogEntry(timestamp="11:20", status="Error", message="svc down"),
            LogEntry(timestamp="11:15", status="Error", message="slow upstream"),
        ],
    )


@pytest.fixture()
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def chat_notifier() -> FakeChatNotifier:
    return FakeChatNotifier()


@pytest.fixture()
def fault_document_gateway() -> FakeFaultDocumentGateway:
    return FakeFaultDocumentGateway()


@pytest.fixture()
def monitor_state() -> MonitorState:
    return MonitorState()


@pytest.fixture()
def session_registry(fake_engine: FakeEngine) -> SessionRegistry:
    return SessionRegistry(engine_factory=lambda: fake_engine)


@pytest.fixture()
def process_case_use_case(
    monitor_state: MonitorState,
    session_registry: SessionRegistry,
    chat_notifier: FakeChatNotifier,
    fault_document_gateway: FakeFaultDocumentGateway,
) -> ProcessCaseUseCase:
    return ProcessCaseUseCase(
        monitor_state=monitor_state,
        alert_gate=AlertGate(AlertPolicy.EVERY_REQUEST),
        alert_dispatcher=AlertDispatcher(chat_notifier, fault_document_gateway),
        session_registry=session_registry,
        stream_multiplexer=StreamMultiplexer(),
    )


def reasoning_event(
    text: str = "", thinking: str = "", is_last: bool = False
) -> EngineEvent:
    segments = []
    if thinking:
        segments.append(ThinkingSegment(thinking))
    if text:
        segments.append(TextSegment(text))
    return EngineEvent(EventType.REASONING, tuple(segments), is_last=is_last)

"""
Application Use Cases - Case Processing

Coordinates one inbound case end to end: publishes the reported API
status, fires alerts, resolves the case's conversation session, builds the
contextual prompt and runs the engine turn either to a single reply or as
a stream of frames.
"""

from contextlib import aclosing
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Tuple

import structlog

from src.application.services.alert_dispatcher import AlertDispatcher
from src.application.services.session_registry import SessionRegistry
from src.application.services.stream_multiplexer import (
    StreamMultiplexer,
    to_json_payload,
)
from src.domain.entities.case import ActionResult, CaseRequest, CaseResult, RequestState
from src.domain.entities.conversation import Frame, FrameKind, StreamOptions
from src.domain.entities.errors import InvalidCaseRequestError
from src.domain.ports.conversational_engine import IConversationalEngine
from src.domain.services.alerting import AlertGate
from src.domain.services.monitor_state import MonitorState
from src.domain.services.prompt_builder import build_contextual_prompt

logger = structlog.get_logger(__name__)

PROCESSING_ERROR_REPLY = (
    "Sorry, an error occurred while processing your request: {message}"
)
NO_ANSWER_REPLY = (
    "Sorry, I can't answer this question right now. Please try again later."
)


@dataclass
class _CaseRun:
    """Mutable progress of one case through the request state machine."""

    case_id: str
    state: RequestState = RequestState.RECEIVED
    action_result: Optional[ActionResult] = None

    def advance(self, state: RequestState) -> None:
        logger.debug(
            "case.state.transition",
            case_id=self.case_id,
            previous=self.state.value,
            state=state.value,
        )
        self.state = state


class ProcessCaseUseCase:
    """Use case driving a case through the request state machine."""

    def __init__(
        self,
        monitor_state: MonitorState,
        alert_gate: AlertGate,
        alert_dispatcher: AlertDispatcher,
        session_registry: SessionRegistry,
        stream_multiplexer: StreamMultiplexer,
        stream_options: Optional[StreamOptions] = None,
    ) -> None:
        self._monitor_state = monitor_state
        self._alert_gate = alert_gate
        self._alert_dispatcher = alert_dispatcher
        self._session_registry = session_registry
        self._stream_multiplexer = stream_multiplexer
        self._stream_options = stream_options or StreamOptions()

    @staticmethod
    def validate(case_request: CaseRequest) -> None:
        """Reject a case missing its identifier or its question."""
        if not case_request.case_id or not case_request.case_id.strip():
            raise InvalidCaseRequestError("case_id")
        if not case_request.user_query or not case_request.user_query.strip():
            raise InvalidCaseRequestError("user_query")

    async def execute(self, case_request: CaseRequest) -> CaseResult:
        """Process a case and block for the final reply.

        Engine failures never propagate: the reply becomes an apology that
        carries the error message, and any alert already fired is kept in
        the result.
        """
        self.validate(case_request)
        run = _CaseRun(case_request.case_id)
        logger.info(
            "case.process.start",
            case_id=run.case_id,
            api_status=case_request.api_status,
            log_entries=len(case_request.monitor_log),
        )

        try:
            engine, prompt = await self._prepare(run, case_request)
            run.advance(RequestState.STREAMING)
            reply = await engine.call(prompt)
        except Exception as exc:
            run.advance(RequestState.FAILED)
            logger.error(
                "case.process.failed",
                case_id=run.case_id,
                error=str(exc),
                exc_info=exc,
            )
            return CaseResult(
                case_id=run.case_id,
                reply=PROCESSING_ERROR_REPLY.format(message=exc),
                action_result=run.action_result,
            )

        if not reply:
            logger.warning("case.process.empty_reply", case_id=run.case_id)
            reply = NO_ANSWER_REPLY
        run.advance(RequestState.COMPLETE)
        logger.info(
            "case.process.complete",
            case_id=run.case_id,
            alert_triggered=run.action_result is not None,
        )
        return CaseResult(
            case_id=run.case_id, reply=reply, action_result=run.action_result
        )

    def stream(self, case_request: CaseRequest) -> AsyncIterator[Frame]:
        """Validate the case and return its frame stream.

        Validation happens here, before the first frame is requested, so a
        malformed case is rejected instead of opening a stream.
        """
        self.validate(case_request)
        return self._stream(case_request)

    async def _stream(self, case_request: CaseRequest) -> AsyncIterator[Frame]:
        run = _CaseRun(case_request.case_id)
        outcome = "cancelled"
        logger.info(
            "case.stream.start",
            case_id=run.case_id,
            api_status=case_request.api_status,
        )
        try:
            engine, prompt = await self._prepare(run, case_request)
            run.advance(RequestState.STREAMING)
            events = engine.stream(prompt, self._stream_options)
            frames = self._stream_multiplexer.translate(events)
            async with aclosing(events), aclosing(frames):
                async for frame in frames:
                    yield frame
            run.advance(RequestState.COMPLETE)
            outcome = "completed"
        except Exception as exc:
            run.advance(RequestState.FAILED)
            outcome = "failed"
            logger.error(
                "case.stream.failed",
                case_id=run.case_id,
                error=str(exc),
                exc_info=exc,
            )
            yield Frame(
                FrameKind.CONTENT,
                to_json_payload(PROCESSING_ERROR_REPLY.format(message=exc)),
            )
        finally:
            self._session_registry.touch(run.case_id)
            logger.info(
                "case.stream.finalized",
                case_id=run.case_id,
                state=run.state.value,
                outcome=outcome,
                alert_triggered=run.action_result is not None,
            )

    async def _prepare(
        self, run: _CaseRun, case_request: CaseRequest
    ) -> Tuple[IConversationalEngine, str]:
        self._monitor_state.update(
            case_request.api_status,
            case_request.api_response_time,
            case_request.monitor_log,
        )
        run.advance(RequestState.STATUS_UPDATED)

        if self._alert_gate.should_fire(case_request.api_status):
            run.action_result = await self._alert_dispatcher.fire(case_request)
        run.advance(RequestState.ALERT_EVALUATED)

        engine = self._session_registry.resolve(run.case_id)
        run.advance(RequestState.SESSION_RESOLVED)

        prompt = build_contextual_prompt(case_request)
        run.advance(RequestState.PROMPT_BUILT)
        return engine, prompt

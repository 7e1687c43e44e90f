"""
Case DTOs - Application Layer

Wire representations of case requests and results, plus the payloads of
the chat, session and batch endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.case import (
    ActionResult,
    BatchSummary,
    CaseRequest,
    CaseResult,
)
from src.domain.entities.monitor import LogEntry


class LogEntryDTO(BaseModel):
    """A monitor log line as reported by the caller."""

    timestamp: Optional[str] = Field(default=None, description="When it was logged")
    status: Optional[str] = Field(default=None, description="Status, e.g. 'Error'")
    msg: Optional[str] = Field(default=None, description="Error or status message")

    def to_domain(self) -> LogEntry:
        return LogEntry(timestamp=self.timestamp, status=self.status, message=self.msg)

    @classmethod
    def from_domain(cls, entry: LogEntry) -> "LogEntryDTO":
        return cls(timestamp=entry.timestamp, status=entry.status, msg=entry.message)


class CaseRequestDTO(BaseModel):
    """DTO for an inbound case."""

    case_id: str = Field(..., description="Case identifier, also the session key")
    user_query: str = Field(..., min_length=1, description="The user's question")
    api_status: Optional[str] = Field(
        default=None, description="Status of the monitored API, e.g. '200 OK'"
    )
    api_response_time: Optional[str] = Field(
        default=None, description="Response time of the monitored API"
    )
    monitor_log: List[LogEntryDTO] = Field(
        default_factory=list, description="Recent monitor log, newest first"
    )

    def to_domain(self) -> CaseRequest:
        return CaseRequest(
            case_id=self.case_id,
            user_query=self.user_query,
            api_status=self.api_status,
            api_response_time=self.api_response_time,
            monitor_log=[entry.to_domain() for entry in self.monitor_log],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "case_id": "case-001",
                "user_query": "Is the service stable today?",
                "api_status": "500 Internal Server Error",
                "api_response_time": "Timeout",
                "monitor_log": [
                    {"timestamp": "11:20", "status": "Error", "msg": "svc down"}
                ],
            }
        }
    }


class ActionResultDTO(BaseModel):
    """Alert side-effects triggered while processing a case."""

    chat_notify_status: Optional[str] = Field(
        default=None, description="Outcome of the chat alert"
    )
    fault_doc_id: Optional[str] = Field(
        default=None, description="Identifier of the fault document"
    )

    @classmethod
    def from_domain(cls, action: ActionResult) -> "ActionResultDTO":
        return cls(
            chat_notify_status=action.chat_notify_status,
            fault_doc_id=action.fault_doc_id,
        )


class CaseResultDTO(BaseModel):
    """DTO for the result of one case."""

    case_id: str
    reply: str
    action_triggered: Optional[ActionResultDTO] = None

    @classmethod
    def from_domain(cls, result: CaseResult) -> "CaseResultDTO":
        return cls(
            case_id=result.case_id,
            reply=result.reply,
            action_triggered=(
                ActionResultDTO.from_domain(result.action_result)
                if result.action_result is not None
                else None
            ),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "case_id": "case-001",
                "reply": "The API reported an outage at 11:20 ...",
                "action_triggered": {
                    "chat_notify_status": "Sent success",
                    "fault_doc_id": "DOC_20250101_112000_500_Internal_Server_Error",
                },
            }
        }
    }


class ChatRequestDTO(BaseModel):
    """Context-free chat request."""

    query: Optional[str] = Field(default=None, description="The user's question")


class ChatResponseDTO(BaseModel):
    reply: str


class SessionResetDTO(BaseModel):
    status: str = "success"
    message: str


class BatchResultDTO(BaseModel):
    """Summary returned after a batch run."""

    model_config = ConfigDict(frozen=True)

    status: str = "success"
    input_file: str
    output_file: str
    total_cases: int
    successful_replies: int
    alerts_triggered: int

    @classmethod
    def from_domain(
        cls, summary: BatchSummary, input_file: str, output_file: str
    ) -> "BatchResultDTO":
        return cls(
            input_file=input_file,
            output_file=output_file,
            total_cases=summary.total_cases,
            successful_replies=summary.successful_replies,
            alerts_triggered=summary.alerts_triggered,
        )

"""DTOs for the monitor status and log endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.application.dtos.case_dto import LogEntryDTO
from src.domain.entities.monitor import LogEntry, MonitorSnapshot


class MonitorStatusDTO(BaseModel):
    """Latest health snapshot of the monitored API."""

    status: Optional[str] = Field(description="Last reported API status")
    response_time: Optional[str] = Field(description="Last reported response time")
    healthy: bool = Field(description="True when the status is '200 OK'")
    error_count: int = Field(description="Log entries reported with the last update")
    last_check_time: datetime = Field(description="When the snapshot was published")

    @classmethod
    def from_domain(cls, snapshot: MonitorSnapshot) -> "MonitorStatusDTO":
        return cls(
            status=snapshot.status,
            response_time=snapshot.response_time,
            healthy=snapshot.healthy,
            error_count=snapshot.error_count,
            last_check_time=snapshot.last_check_time,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "500 Internal Server Error",
                "response_time": "Timeout",
                "healthy": False,
                "error_count": 1,
                "last_check_time": "2025-01-01T11:20:00Z",
            }
        }
    }


class MonitorLogsDTO(BaseModel):
    """Buffered monitor log entries, oldest first."""

    count: int
    logs: List[LogEntryDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, entries: List[LogEntry]) -> "MonitorLogsDTO":
        return cls(
            count=len(entries),
            logs=[LogEntryDTO.from_domain(entry) for entry in entries],
        )

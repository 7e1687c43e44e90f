"""Builds the contextual prompt handed to the conversational engine."""

from typing import List

from src.domain.entities.case import CaseRequest
from src.domain.entities.monitor import LogEntry, is_success_status


def _render_log_entry(entry: LogEntry) -> str:
    return f"  - {entry.timestamp}: {entry.status} ({entry.message})"


def build_status_banner(case_request: CaseRequest) -> str:
    return (
        f"[System status alert: API status abnormal - {case_request.api_status}, "
        f"response time: {case_request.api_response_time}]"
    )


def build_log_digest(entries: List[LogEntry]) -> str:
    lines = ["[Recent monitor logs:"]
    lines.extend(_render_log_entry(entry) for entry in entries)
    lines.append("]")
    return "\n".join(lines)


def build_contextual_prompt(case_request: CaseRequest) -> str:
    """Prefix the user query with the monitoring context of the case.

    Order is fixed: status banner (only for a non-success status), log
    digest (only when logs were reported), then the user query, separated
    by blank lines.
    """

    parts: List[str] = []
    if not is_success_status(case_request.api_status):
        parts.append(build_status_banner(case_request))
    if case_request.monitor_log:
        parts.append(build_log_digest(case_request.monitor_log))
    parts.append(case_request.user_query or "")
    return "\n\n".join(parts)

"""
Alert Dispatcher - Application Layer

Drives the two notification side-effects fired for an abnormal case:
a chat alert and a fault document. Both notifiers are always attempted
and every failure degrades to a locally synthesized value, so ``fire``
never raises.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional, Tuple

from src.domain.entities.case import ActionResult, CaseRequest
from src.domain.entities.notification import (
    NotificationFailure,
    NotificationResult,
    NotificationStatus,
)
from src.domain.gateways.notification_gateways import (
    IChatNotifierGateway,
    IFaultDocumentGateway,
)
from src.shared import COMPACT_TIME_FORMAT, get_logger

logger = get_logger(__name__)

NOT_AVAILABLE = "N/A"


def fallback_doc_id(error_code: Optional[str], now: Optional[datetime] = None) -> str:
    """Deterministic document id derived from the error code and time."""
    clean_code = re.sub(r"[^A-Za-z0-9]", "_", error_code or "UNKNOWN")
    stamp = (now or datetime.now()).strftime(COMPACT_TIME_FORMAT)
    return f"DOC_{stamp}_{clean_code}"


def fallback_chat_status(result: NotificationResult) -> str:
    if result.failure is NotificationFailure.TRANSPORT_ERROR:
        return f"Error: {result.detail}"
    return f"Failed: {result.detail}"


class AlertDispatcher:
    """Fires the chat alert and the fault document for one case."""

    def __init__(
        self,
        chat_notifier: IChatNotifierGateway,
        fault_document_gateway: IFaultDocumentGateway,
    ) -> None:
        self._chat_notifier = chat_notifier
        self._fault_document_gateway = fault_document_gateway

    @staticmethod
    def error_context(case_request: CaseRequest) -> Tuple[str, str]:
        """Return ``(message, timestamp)`` of the latest reported error.

        Falls back to the case's response time and "N/A" when the case
        carries no monitor log.
        """
        latest = case_request.latest_log
        if latest is None:
            return case_request.api_response_time or NOT_AVAILABLE, NOT_AVAILABLE
        return latest.message or NOT_AVAILABLE, latest.timestamp or NOT_AVAILABLE

    async def fire(self, case_request: CaseRequest) -> ActionResult:
        error_message, error_time = self.error_context(case_request)
        logger.warning(
            "alert.dispatch.start",
            case_id=case_request.case_id,
            status=case_request.api_status,
            response_time=case_request.api_response_time,
            error_time=error_time,
        )

        chat_status = await self._notify_chat(case_request, error_time)
        doc_id = await self._create_document(case_request, error_time, error_message)

        logger.info(
            "alert.dispatch.complete",
            case_id=case_request.case_id,
            chat_notify_status=chat_status,
            fault_doc_id=doc_id,
        )
        return ActionResult(chat_notify_status=chat_status, fault_doc_id=doc_id)

    async def _notify_chat(self, case_request: CaseRequest, error_time: str) -> str:
        try:
            result = await self._chat_notifier.send_alert(
                timestamp=error_time,
                error_code=case_request.api_status,
                latency=case_request.api_response_time,
            )
        except Exception as exc:
            logger.error(
                "alert.dispatch.chat_crashed",
                case_id=case_request.case_id,
                error=str(exc),
                exc_info=exc,
            )
            return f"Error: {exc}"

        if result.status is NotificationStatus.FAILED:
            logger.error(
                "alert.dispatch.chat_failed",
                case_id=case_request.case_id,
                failure=result.failure.value if result.failure else None,
                detail=result.detail,
            )
            return fallback_chat_status(result)
        if result.status is NotificationStatus.SIMULATED:
            logger.warning("alert.dispatch.chat_simulated", case_id=case_request.case_id)
        return result.value or ""

    async def _create_document(
        self, case_request: CaseRequest, error_time: str, error_message: str
    ) -> str:
        try:
            result = await self._fault_document_gateway.create_document(
                timestamp=error_time,
                error_code=case_request.api_status,
                error_message=error_message,
                latency=case_request.api_response_time,
            )
        except Exception as exc:
            logger.error(
                "alert.dispatch.document_crashed",
                case_id=case_request.case_id,
                error=str(exc),
                exc_info=exc,
            )
            return fallback_doc_id(case_request.api_status)

        if result.status is NotificationStatus.FAILED or not result.value:
            logger.error(
                "alert.dispatch.document_failed",
                case_id=case_request.case_id,
                failure=result.failure.value if result.failure else None,
                detail=result.detail,
            )
            return fallback_doc_id(case_request.api_status)
        if result.status is NotificationStatus.SIMULATED:
            logger.warning(
                "alert.dispatch.document_simulated",
                case_id=case_request.case_id,
                fault_doc_id=result.value,
            )
        return result.value

"""Apifox fault-document gateway implementation - Infrastructure layer."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Dict, Optional

import httpx

from src.domain.entities.notification import NotificationFailure, NotificationResult
from src.domain.gateways.notification_gateways import IFaultDocumentGateway
from src.shared import DISPLAY_TIME_FORMAT, get_logger

logger = get_logger(__name__)

PLACEHOLDER_TOKEN = "your-apifox-token-here"
PLACEHOLDER_PROJECT_ID = "your-project-id-here"

_DOC_TEMPLATE = """# Fault Record

## Basic information
- **Time**: {timestamp}
- **Error code**: {error_code}
- **Current latency**: {latency}

## Error details
{error_message}

## Handling status
- [ ] Acknowledged
- [ ] In progress
- [ ] Resolved

## Notes
This document was generated automatically by the monitor agent.
"""


class ApifoxGateway(IFaultDocumentGateway):
    """Creates fault-record documents through the Apifox open API."""

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str],
        project_id: Optional[str],
        folder_id: Optional[str] = None,
        module_id: Optional[str] = None,
        locale: str = "zh-CN",
        timeout: float = 10.0,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_token = api_token
        self.project_id = project_id
        self.folder_id = folder_id
        self.module_id = module_id
        self.locale = locale
        self.timeout = timeout

    def is_configured(self) -> bool:
        if not self.api_token or PLACEHOLDER_TOKEN in self.api_token:
            return False
        if not self.project_id or PLACEHOLDER_PROJECT_ID in self.project_id:
            return False
        return True

    async def create_document(
        self,
        timestamp: Optional[str],
        error_code: Optional[str],
        error_message: Optional[str],
        latency: Optional[str],
    ) -> NotificationResult:
        logger.info(
            "apifox.document.request",
            timestamp=timestamp,
            error_code=error_code,
            latency=latency,
        )

        if not self.is_configured():
            doc_id = f"DOC_{uuid.uuid4().hex[:8]}"
            logger.warning(
                "apifox.document.simulated",
                fault_doc_id=doc_id,
                timestamp=timestamp,
                error_code=error_code,
            )
            return NotificationResult.simulated(
                doc_id, detail="Apifox API not fully configured"
            )

        url = f"{self.api_url}/api/v1/doc"
        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Accept": "application/json",
            "x-project-id": self.project_id,
        }
        form = self._build_form(timestamp, error_code, error_message, latency)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url, params={"locale": self.locale}, data=form, headers=headers
                )
        except httpx.RequestError as exc:
            logger.error("apifox.document.transport_error", error=str(exc), exc_info=exc)
            return NotificationResult.failed(
                NotificationFailure.TRANSPORT_ERROR, str(exc)
            )

        if not response.is_success:
            logger.error(
                "apifox.document.http_error",
                status_code=response.status_code,
                response_text=response.text,
            )
            return NotificationResult.failed(
                NotificationFailure.HTTP_ERROR, str(response.status_code)
            )

        try:
            body = response.json()
        except ValueError:
            body = None

        doc_id = self._extract_doc_id(body)
        if doc_id is None:
            logger.error("apifox.document.invalid_response", response_text=response.text)
            return NotificationResult.failed(
                NotificationFailure.INVALID_RESPONSE,
                "Apifox response did not contain a document id",
            )

        logger.info("apifox.document.created", fault_doc_id=doc_id)
        return NotificationResult.delivered(doc_id)

    def _build_form(
        self,
        timestamp: Optional[str],
        error_code: Optional[str],
        error_message: Optional[str],
        latency: Optional[str],
    ) -> Dict[str, str]:
        form = {"name": f"[Fault Record] {datetime.now().strftime(DISPLAY_TIME_FORMAT)}"}
        if self.module_id and self.module_id.strip():
            form["moduleId"] = self.module_id
        form["content"] = _DOC_TEMPLATE.format(
            timestamp=timestamp,
            error_code=error_code,
            latency=latency,
            error_message=error_message or "N/A",
        )
        if self.folder_id and self.folder_id.strip():
            form["folderId"] = self.folder_id
        return form

    @staticmethod
    def _extract_doc_id(body: object) -> Optional[str]:
        if not isinstance(body, dict) or body.get("success") is not True:
            return None
        data = body.get("data")
        if not isinstance(data, dict) or data.get("id") is None:
            return None
        return str(data["id"])

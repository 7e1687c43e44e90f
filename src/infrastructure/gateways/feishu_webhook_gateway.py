"""Feishu webhook gateway implementation - Infrastructure layer."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from src.domain.entities.notification import NotificationFailure, NotificationResult
from src.domain.gateways.notification_gateways import IChatNotifierGateway
from src.shared import get_logger

logger = get_logger(__name__)

PLACEHOLDER_MARKER = "placeholder"
SENT_SUCCESS = "Sent success"


class FeishuWebhookGateway(IChatNotifierGateway):
    """Posts incident cards to a Feishu group-bot webhook."""

    def __init__(self, webhook_url: Optional[str], timeout: float = 10.0):
        """
        Initialize Feishu Webhook Gateway.

        Args:
            webhook_url: Incoming webhook URL of the group bot
            timeout: HTTP timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.webhook_url) and PLACEHOLDER_MARKER not in self.webhook_url

    async def send_alert(
        self,
        timestamp: Optional[str],
        error_code: Optional[str],
        latency: Optional[str],
    ) -> NotificationResult:
        logger.info(
            "feishu.alert.request",
            timestamp=timestamp,
            error_code=error_code,
            latency=latency,
        )

        if not self.is_configured():
            message = (
                "Feishu webhook URL not configured. Alert details: "
                f"time={timestamp}, code={error_code}, latency={latency}"
            )
            logger.warning("feishu.alert.simulated", detail=message)
            return NotificationResult.simulated(f"Simulation: {message}")

        payload = self._build_card(timestamp, error_code, latency)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
        except httpx.RequestError as exc:
            logger.error("feishu.alert.transport_error", error=str(exc), exc_info=exc)
            return NotificationResult.failed(
                NotificationFailure.TRANSPORT_ERROR, str(exc)
            )

        if not response.is_success:
            logger.error(
                "feishu.alert.http_error",
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

        rejection = self._rejection(body)
        if rejection is not None:
            logger.error("feishu.alert.rejected", detail=rejection)
            return NotificationResult.failed(
                NotificationFailure.INVALID_RESPONSE, rejection
            )

        logger.info("feishu.alert.sent", status_code=response.status_code)
        return NotificationResult.delivered(SENT_SUCCESS)

    @staticmethod
    def _rejection(body: Any) -> Optional[str]:
        """Error detail when the bot answered with a non-zero code."""
        if not isinstance(body, dict):
            return None
        code = body.get("code", body.get("StatusCode", 0))
        if code in (0, None):
            return None
        message = body.get("msg") or body.get("StatusMessage") or ""
        return f"{code}: {message}" if message else str(code)

    @staticmethod
    def _build_card(
        timestamp: Optional[str], error_code: Optional[str], latency: Optional[str]
    ) -> Dict[str, Any]:
        return {
            "msg_type": "interactive",
            "card": {
                "header": {
                    "title": {"tag": "plain_text", "content": "API anomaly alert"},
                    "template": "red",
                },
                "elements": [
                    {
                        "tag": "div",
                        "text": {
                            "tag": "lark_md",
                            "content": (
                                f"**Time**: {timestamp}\n"
                                f"**Error code**: {error_code}\n"
                                f"**Current latency**: {latency}"
                            ),
                        },
                    }
                ],
            },
        }

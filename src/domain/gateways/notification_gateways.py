"""
Notification Gateway Interfaces - Domain Layer

Contracts for the two outbound alert integrations: a chat webhook that
announces the incident and a documentation service that records it.
Implementations report failures through ``NotificationResult`` and
never raise.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.notification import NotificationResult


class IChatNotifierGateway(ABC):
    """Interface for the chat alert webhook."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Return False when credentials are absent or placeholders."""
        pass

    @abstractmethod
    async def send_alert(
        self,
        timestamp: Optional[str],
        error_code: Optional[str],
        latency: Optional[str],
    ) -> NotificationResult:
        """
        Announce an API incident in the team chat.

        Args:
            timestamp: When the incident was observed
            error_code: Status reported by the monitored API
            latency: Response time reported by the monitored API

        Returns:
            NotificationResult: Delivery status string on success
        """
        pass


class IFaultDocumentGateway(ABC):
    """Interface for the fault-record documentation service."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Return False when credentials are absent or placeholders."""
        pass

    @abstractmethod
    async def create_document(
        self,
        timestamp: Optional[str],
        error_code: Optional[str],
        error_message: Optional[str],
        latency: Optional[str],
    ) -> NotificationResult:
        """
        Record an API incident as a fault document.

        Args:
            timestamp: When the incident was observed
            error_code: Status reported by the monitored API
            error_message: Message of the latest monitor log entry
            latency: Response time reported by the monitored API

        Returns:
            NotificationResult: Identifier of the created document on success
        """
        pass

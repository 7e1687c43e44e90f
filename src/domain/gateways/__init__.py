"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .notification_gateways import IChatNotifierGateway, IFaultDocumentGateway

__all__ = ["IChatNotifierGateway", "IFaultDocumentGateway"]

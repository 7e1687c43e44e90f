"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of external service communications.
"""

from .apifox_gateway import ApifoxGateway
from .feishu_webhook_gateway import FeishuWebhookGateway

__all__ = ["ApifoxGateway", "FeishuWebhookGateway"]

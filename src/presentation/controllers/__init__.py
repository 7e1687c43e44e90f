"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error handling, and mapping between API DTOs
and application layer use cases.
"""

from .case_controller import router as case_router
from .chat_controller import router as chat_router
from .monitor_controller import router as monitor_router
from .system_controller import router as system_router

__all__ = ["case_router", "chat_router", "monitor_router", "system_router"]

"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidCaseRequestError(DomainError):
    """Raised when a case request misses a required field."""

    def __init__(self, field_name: str, details: Optional[Dict[str, Any]] = None):
        self.field_name = field_name
        super().__init__(f"Field '{field_name}' is required", details)


class ConversationEngineError(DomainError):
    """Raised when the conversational engine cannot produce a reply."""


class BatchProcessingError(DomainError):
    """Raised when a batch of cases cannot be read or written."""

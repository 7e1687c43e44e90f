"""
Application Layer Package

This package contains the application-specific business rules
and use cases. It orchestrates the flow of data to and from
the domain entities: case processing, alert dispatch, conversation
sessions and stream translation.
"""

# Re-export submodules
from src.application import dtos, models, services, use_cases

__all__ = ["dtos", "use_cases", "models", "services"]

"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides utilities, constants and enums used across
multiple layers of the monitor agent.

Its primary responsibilities include:
- Defining cross-layer constants (environments, log levels, time formats)
- Configuring structured logging
- Resolving file-based secrets into the environment

It must not depend on Infrastructure or Frameworks.
"""

from .consts import (
    API_ENDPOINTS,
    COMPACT_TIME_FORMAT,
    DISPLAY_TIME_FORMAT,
    SSE_MEDIA_TYPE,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "API_ENDPOINTS",
    "COMPACT_TIME_FORMAT",
    "DISPLAY_TIME_FORMAT",
    "SSE_MEDIA_TYPE",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]

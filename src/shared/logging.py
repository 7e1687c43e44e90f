"""
Logging Configuration - Shared Layer

Structured logging for the monitor agent. Standard library handlers are
formatted by structlog so that records emitted through ``logging`` and
through ``structlog`` share one output format.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from src.shared.consts import EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    return handlers


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure standard logging and structlog.

    Called once at import time with environment-only values so that
    settings loading is already logged, and again by
    ``update_logging_from_settings`` once settings are available.

    Args:
        level: Log level name; falls back to ``LOG_LEVEL`` then INFO.
        format_string: Accepted for settings compatibility; rendering is
            delegated to structlog.
        file_path: Optional log file; falls back to ``LOG_FILE_PATH``.
        environment: Application environment, selects the renderer.
    """
    log_level = level or os.environ.get("LOG_LEVEL") or "INFO"
    log_file = file_path or os.environ.get("LOG_FILE_PATH")
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=_shared_processors(),
    )

    handlers = _build_handlers(log_file)
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.info("Logging configured with level: %s", log_level)
    if log_file:
        logging.info("Logging to file: %s", log_file)


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the loaded application settings.

    Args:
        settings: ``AppSettings`` instance (or any object exposing
            ``logging.level``, ``logging.format``, ``logging.file_path``
            and ``environment``).
    """
    try:
        level = getattr(settings.logging.level, "value", settings.logging.level)
        environment = getattr(settings.environment, "value", settings.environment)
        configure_logging(
            level=level,
            format_string=settings.logging.format,
            file_path=settings.logging.file_path,
            environment=environment,
        )
        logging.info("Logging configuration updated from application settings")
    except Exception as e:
        logging.error("Failed to update logging from settings: %s", e)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)

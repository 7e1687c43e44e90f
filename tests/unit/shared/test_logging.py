from __future__ import annotations

import logging
from dataclasses import dataclass

from src.shared.logging import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "agent.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)

    logger = get_logger(__name__)
    logger.info("structured log test")


@dataclass
class _LoggingSettings:
    level: str = "WARNING"
    format: str = "%(message)s"
    file_path: str | None = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: str = "production"


def test_update_logging_from_settings_applies_configuration() -> None:
    settings = _Settings(logging=_LoggingSettings(level="ERROR"))

    update_logging_from_settings(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR


def test_production_environment_uses_json_renderer(capsys) -> None:
    configure_logging(level="INFO", environment="production")

    get_logger("agent").info("case.process.start", case_id="case-001")

    out = capsys.readouterr().out
    assert '"event": "case.process.start"' in out
    assert '"case_id": "case-001"' in out


def test_standard_library_records_are_rendered(capsys) -> None:
    configure_logging(level="INFO", environment="production")

    logging.getLogger("httpx").info("HTTP Request: POST http://llm.local/v1 200")

    captured = capsys.readouterr()
    assert '"event": "HTTP Request: POST http://llm.local/v1 200"' in captured.out
    assert '"logger": "httpx"' in captured.out
    assert "Logging error" not in captured.err

"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.services.alerting import AlertPolicy
from src.shared import EnumEnvironment, EnumLogLevel
from src.shared.env import load_secret_file_variables  # noqa: F401


class GESettings(BaseSettings):
    """Service identity and HTTP server settings."""

    title: str = Field(default="Monitor Agent", description="Service title")
    description: str = Field(
        default="Customer-support agent that watches the health of the platform "
        "API, raises alerts and answers questions with live monitoring context",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("GE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("GE_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8080, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="GE_", case_sensitive=False, extra="ignore"
    )


class LLMSettings(BaseSettings):
    """OpenAI-compatible chat completion endpoint."""

    api_key: Optional[str] = Field(default=None, description="Bearer token")
    base_url: str = Field(
        default="http://localhost:11434/v1", description="Endpoint root URL"
    )
    model_name: str = Field(default="gpt-3.5-turbo", description="Model identifier")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, gt=0)
    stream: bool = Field(default=True, description="Request token streaming")
    max_iters: int = Field(
        default=10, gt=0, description="Maximum model calls per conversation turn"
    )
    timeout: float = Field(default=60.0, gt=0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="LLM_", case_sensitive=False, extra="ignore"
    )


class FeishuSettings(BaseSettings):
    """Feishu group-bot webhook used for chat alerts."""

    webhook_url: Optional[str] = Field(default=None, description="Webhook URL")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="FEISHU_", case_sensitive=False, extra="ignore"
    )


class ApifoxSettings(BaseSettings):
    """Apifox open API used to record fault documents."""

    api_url: str = Field(default="https://api.apifox.com", description="API root")
    api_token: Optional[str] = Field(default=None, description="Access token")
    project_id: Optional[str] = Field(default=None, description="Project id")
    folder_id: Optional[str] = Field(default=None, description="Target folder id")
    module_id: Optional[str] = Field(default=None, description="Target module id")
    locale: str = Field(default="zh-CN", description="Locale query parameter")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="APIFOX_", case_sensitive=False, extra="ignore"
    )


class KnowledgeSettings(BaseSettings):
    """Business knowledge documents."""

    path: str = Field(default="knowledge", description="Directory of .md/.txt files")
    search_limit: int = Field(
        default=3, gt=0, description="Maximum documents returned by a search"
    )

    model_config = SettingsConfigDict(
        env_prefix="KNOWLEDGE_", case_sensitive=False, extra="ignore"
    )


class MonitorSettings(BaseSettings):
    """Monitor state retention."""

    log_buffer_limit: Optional[int] = Field(
        default=None, gt=0, description="Maximum buffered log entries (None = all)"
    )

    model_config = SettingsConfigDict(
        env_prefix="MONITOR_", case_sensitive=False, extra="ignore"
    )


class AlertSettings(BaseSettings):
    """Alert de-duplication."""

    policy: AlertPolicy = Field(
        default=AlertPolicy.EVERY_REQUEST,
        description="every_request re-fires on each abnormal request; "
        "per_incident fires once per run of identical abnormal statuses",
    )

    model_config = SettingsConfigDict(
        env_prefix="ALERT_", case_sensitive=False, extra="ignore"
    )


class SessionSettings(BaseSettings):
    """Conversation session retention."""

    max_sessions: Optional[int] = Field(
        default=None,
        gt=0,
        description="Evict least recently used sessions above this count",
    )

    model_config = SettingsConfigDict(
        env_prefix="SESSION_", case_sensitive=False, extra="ignore"
    )


class BatchSettings(BaseSettings):
    """Default files of the batch endpoint."""

    input_path: str = Field(default="inputs/inputs.json")
    output_path: str = Field(default="outputs/results.json")

    model_config = SettingsConfigDict(
        env_prefix="BATCH_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    ge: GESettings = Field(default_factory=GESettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    feishu: FeishuSettings = Field(default_factory=FeishuSettings)
    apifox: ApifoxSettings = Field(default_factory=ApifoxSettings)
    knowledge: KnowledgeSettings = Field(default_factory=KnowledgeSettings)
    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    alerts: AlertSettings = Field(default_factory=AlertSettings)
    sessions: SessionSettings = Field(default_factory=SessionSettings)
    batch: BatchSettings = Field(default_factory=BatchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()


settings = get_settings()

"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

import asyncio
from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.models import SystemInfo
from src.application.services.alert_dispatcher import AlertDispatcher
from src.application.services.session_registry import SessionRegistry
from src.application.services.stream_multiplexer import StreamMultiplexer
from src.application.use_cases.batch_use_case import ProcessBatchUseCase
from src.application.use_cases.chat_use_cases import SimpleChatUseCase
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.application.use_cases.monitor_use_cases import (
    GetMonitorLogsUseCase,
    GetMonitorStatusUseCase,
)
from src.application.use_cases.process_case_use_case import ProcessCaseUseCase
from src.application.use_cases.session_use_cases import ResetSessionUseCase
from src.domain.services.alerting import AlertGate
from src.domain.services.monitor_state import MonitorState
from src.infrastructure.gateways.apifox_gateway import ApifoxGateway
from src.infrastructure.gateways.feishu_webhook_gateway import FeishuWebhookGateway
from src.infrastructure.knowledge.file_knowledge_base import FileKnowledgeBase
from src.infrastructure.llm.openai_chat_engine import OpenAIChatEngine
from src.infrastructure.llm.toolkit import build_monitor_toolkit
from src.infrastructure.services.health_check_service import HealthCheckService
from src.shared import API_ENDPOINTS, get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _enum_value(value):
    return value.value if hasattr(value, "value") else str(value)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Domain state shared by every request
    monitor_state = providers.Singleton(
        MonitorState,
        log_buffer_limit=config.monitor.log_buffer_limit,
    )

    alert_gate = providers.Singleton(
        AlertGate,
        policy=config.alerts.policy,
    )

    # Infrastructure
    knowledge_base = providers.Singleton(
        FileKnowledgeBase,
        path=config.knowledge.path,
        search_limit=config.knowledge.search_limit,
    )

    toolkit = providers.Singleton(
        build_monitor_toolkit,
        monitor_state=monitor_state,
        knowledge_base=knowledge_base,
    )

    # One engine per case session
    conversational_engine = providers.Factory(
        OpenAIChatEngine,
        base_url=config.llm.base_url,
        model_name=config.llm.model_name,
        api_key=config.llm.api_key,
        toolkit=toolkit,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
        stream=config.llm.stream,
        max_iters=config.llm.max_iters,
        timeout=config.llm.timeout,
    )

    # Process-wide engine for context-free chat
    chat_engine = providers.Singleton(
        OpenAIChatEngine,
        base_url=config.llm.base_url,
        model_name=config.llm.model_name,
        api_key=config.llm.api_key,
        toolkit=toolkit,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
        stream=config.llm.stream,
        max_iters=config.llm.max_iters,
        timeout=config.llm.timeout,
    )

    # Gateways
    chat_notifier = providers.Singleton(
        FeishuWebhookGateway,
        webhook_url=config.feishu.webhook_url,
        timeout=config.feishu.timeout,
    )

    fault_document_gateway = providers.Singleton(
        ApifoxGateway,
        api_url=config.apifox.api_url,
        api_token=config.apifox.api_token,
        project_id=config.apifox.project_id,
        folder_id=config.apifox.folder_id,
        module_id=config.apifox.module_id,
        locale=config.apifox.locale,
        timeout=config.apifox.timeout,
    )

    # Application services
    session_registry = providers.Singleton(
        SessionRegistry,
        engine_factory=conversational_engine.provider,
        max_sessions=config.sessions.max_sessions,
    )

    alert_dispatcher = providers.Singleton(
        AlertDispatcher,
        chat_notifier=chat_notifier,
        fault_document_gateway=fault_document_gateway,
    )

    stream_multiplexer = providers.Singleton(StreamMultiplexer)

    # Application (use cases)
    process_case_use_case = providers.Factory(
        ProcessCaseUseCase,
        monitor_state=monitor_state,
        alert_gate=alert_gate,
        alert_dispatcher=alert_dispatcher,
        session_registry=session_registry,
        stream_multiplexer=stream_multiplexer,
    )

    process_batch_use_case = providers.Factory(
        ProcessBatchUseCase,
        process_case_use_case=process_case_use_case,
        default_input_path=config.batch.input_path,
        default_output_path=config.batch.output_path,
    )

    simple_chat_use_case = providers.Factory(
        SimpleChatUseCase,
        conversational_engine=chat_engine,
    )

    reset_session_use_case = providers.Factory(
        ResetSessionUseCase,
        session_registry=session_registry,
    )

    get_monitor_status_use_case = providers.Factory(
        GetMonitorStatusUseCase,
        monitor_state=monitor_state,
    )

    get_monitor_logs_use_case = providers.Factory(
        GetMonitorLogsUseCase,
        monitor_state=monitor_state,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        llm_base_url=config.llm.base_url,
        llm_api_key=config.llm.api_key,
        chat_notifier=chat_notifier,
        fault_document_gateway=fault_document_gateway,
        knowledge_base=knowledge_base,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.ge.title,
        version=config.ge.version,
        environment=providers.Callable(_enum_value, config.environment),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
        llm_base_url=config.llm.base_url,
        llm_model_name=config.llm.model_name,
        alert_policy=providers.Callable(_enum_value, config.alerts.policy),
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
        session_registry=session_registry,
        endpoints=providers.Object(API_ENDPOINTS),
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for process-wide resources.

    Loads the knowledge base before the first request and drops every
    conversation session on shutdown.
    """
    container = get_container()

    knowledge_base = container.knowledge_base()
    session_registry = container.session_registry()

    try:
        documents = await asyncio.to_thread(knowledge_base.load)
        logger.info("container.knowledge.loaded", documents=documents)
        logger.info("container.resources.initialized")
        yield container

    finally:
        session_registry.clear()
        logger.info("container.resources.shutdown")

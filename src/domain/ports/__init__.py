"""Domain ports package."""

from .conversational_engine import EngineFactory, IConversationalEngine
from .health_check import IHealthCheckService
from .knowledge_base import IKnowledgeBase

__all__ = [
    "EngineFactory",
    "IConversationalEngine",
    "IHealthCheckService",
    "IKnowledgeBase",
]

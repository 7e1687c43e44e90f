"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the LLM endpoint,
notification webhooks and the knowledge base files.
"""

from src.infrastructure import gateways, knowledge, llm, services

__all__ = ["gateways", "knowledge", "llm", "services"]

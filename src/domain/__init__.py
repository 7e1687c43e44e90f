"""
Domain Layer Package

This package contains the core rules of the monitor agent: entities,
ports towards external collaborators, gateway interfaces and pure
domain services. It has no dependencies on frameworks or infrastructure.
"""

# Re-export submodules
from src.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "ports", "services"]

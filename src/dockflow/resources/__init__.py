# src/dockflow/resources/__init__.py
"""
Recursos embutidos do Dockflow.
"""

from .logger import Logger, LoggerResource
from .static import StaticValueResource, ValueSource

BUILTIN_RESOURCES = [LoggerResource, StaticValueResource]

__all__ = ["BUILTIN_RESOURCES", "Logger", "LoggerResource", "StaticValueResource", "ValueSource"]

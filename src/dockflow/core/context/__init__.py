# src/dockflow/core/context/__init__.py
"""
Contexto de execução e memória.
"""

from .context import ExecutionContext, SubFlowContext
from .memory import InMemorySessionStore, Memory, NoMemory, SessionMemory, SessionStore, VolatileMemory

__all__ = [
    "ExecutionContext",
    "InMemorySessionStore",
    "Memory",
    "NoMemory",
    "SessionMemory",
    "SessionStore",
    "SubFlowContext",
    "VolatileMemory",
]

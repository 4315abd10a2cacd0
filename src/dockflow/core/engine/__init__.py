# src/dockflow/core/engine/__init__.py
"""
Engine de execução: router de conexões, docking, flow e builder.
"""

from .builder import FlowBuilder, load_description
from .docking import DockResolver
from .flow import Flow, FlowRunResult, NodeRecord, NodeStatus, RunStatus
from .router import GRAPH_INPUT, Connection, ConnectionRouter

__all__ = [
    "Connection",
    "ConnectionRouter",
    "DockResolver",
    "Flow",
    "FlowBuilder",
    "FlowRunResult",
    "GRAPH_INPUT",
    "NodeRecord",
    "NodeStatus",
    "RunStatus",
    "load_description",
]

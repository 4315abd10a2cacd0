# src/dockflow/core/graph/__init__.py
"""
Contratos estruturais do grafo: portas, docks, nós, recursos e registry.

Este pacote não executa flows; define apenas o que o engine consome.
"""

from .node import BaseNode, Executable, Node, invoke_executable
from .ports import Dock, Port, apply_input_defaults, apply_output_defaults, normalize_ports
from .registry import ComponentRegistry
from .resource import BaseResource, Resource

__all__ = [
    "BaseNode",
    "BaseResource",
    "ComponentRegistry",
    "Dock",
    "Executable",
    "Node",
    "Port",
    "Resource",
    "apply_input_defaults",
    "apply_output_defaults",
    "invoke_executable",
    "normalize_ports",
]

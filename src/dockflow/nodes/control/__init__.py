# src/dockflow/nodes/control/__init__.py
"""
Nós de controle e de ordem superior.
"""

from .branching import ConditionalPassNode, IfNode, NoActionNode, SwitchNode
from .loop import ForEachNode, LoopNode
from .subflow import SubFlowNode

CONTROL_NODES = [
    LoopNode,
    ForEachNode,
    SubFlowNode,
    NoActionNode,
    IfNode,
    SwitchNode,
    ConditionalPassNode,
]

__all__ = [
    "CONTROL_NODES",
    "ConditionalPassNode",
    "ForEachNode",
    "IfNode",
    "LoopNode",
    "NoActionNode",
    "SubFlowNode",
    "SwitchNode",
]

# src/dockflow/nodes/core.py
"""
Nós utilitários de contexto, configuração e teste.
"""

from __future__ import annotations

from typing import Any, Dict, List

from dockflow.core.graph.node import BaseNode
from dockflow.core.graph.ports import Dock, Port
from dockflow.resources.static import ValueSource


class GetContextVarNode(BaseNode):
    type_name = "get_context_var"
    summary = "Reads a variable from the execution context."

    def input_ports(self) -> List[Port]:
        return [Port("key", "Name of the context variable.")]

    def output_ports(self) -> List[Port]:
        return [
            Port("value", type="mixed", required=False),
            Port("error", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        key = inputs.get("key")
        if not isinstance(key, str):
            return self.error('"key" must be a string')

        value = context.get_var(key)
        if value is None:
            return self.error(f"context variable not found: {key}")
        return {"value": value}


class SetContextVarNode(BaseNode):
    type_name = "set_context_var"
    summary = "Stores a value in the execution context."

    def input_ports(self) -> List[Port]:
        return [
            Port("key", "Name under which the value is stored."),
            Port("value", "Value to store.", type="mixed"),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("success", type="bool", required=False),
            Port("error", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        key = inputs.get("key")
        if not isinstance(key, str):
            return self.error('"key" must be a string')

        context.set_var(key, inputs.get("value"))
        return {"success": True}


class GetConfigurationNode(BaseNode):
    type_name = "get_configuration"
    summary = "Reads `section`/`key` from the host configuration."

    def input_ports(self) -> List[Port]:
        return [
            Port("section", "Configuration section."),
            Port("key", "Key within the section."),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("value", type="mixed", required=False),
            Port("error", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        section = inputs.get("section")
        key = inputs.get("key")
        if not section or not key:
            return self.error("missing section or key input")

        data = context.configuration.get(section)
        if not isinstance(data, dict):
            return self.error(f"config section '{section}' not found or invalid")
        if key not in data:
            return self.error(f"config key '{key}' not found in section '{section}'")
        return {"value": data[key]}


class TestInputNode(BaseNode):
    __test__ = False  # não é uma classe de teste do pytest

    type_name = "test_input"
    summary = "Passes `value` through unchanged."

    def input_ports(self) -> List[Port]:
        return [Port("value", "Value to pass through.", type="mixed")]

    def output_ports(self) -> List[Port]:
        return [Port("value", type="mixed", required=False)]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        return {"value": inputs.get("value")}


class StaticMessageNode(BaseNode):
    """
    Emite um texto fixo.

    O texto vem da porta `text`, da config `text` (contrato `{mode, value}`)
    ou, quando há um recurso no dock `source`, do valor desse recurso.
    """

    type_name = "static_message"
    summary = "Outputs a static text message."

    def input_ports(self) -> List[Port]:
        return [Port("text", "Static text to output.", default="")]

    def output_ports(self) -> List[Port]:
        return [Port("message", required=False)]

    def dock_ports(self) -> List[Dock]:
        return [Dock("source", "Optional value source for the text.", capability=ValueSource, max_connections=1)]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        sources = resources.get("source") or []
        if sources:
            text = sources[0].value()
        else:
            text = self.setting("text", inputs.get("text") or None, default="")
        return {"message": "" if text is None else str(text)}


class EchoNode(BaseNode):
    type_name = "echo"
    summary = "Returns a copy of all its inputs."

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        return dict(inputs)


CORE_NODES = [
    GetContextVarNode,
    SetContextVarNode,
    GetConfigurationNode,
    TestInputNode,
    StaticMessageNode,
    EchoNode,
]

# src/dockflow/nodes/control/branching.py
"""
Nós de ramificação.

Ramos funcionam porque, por padrão, o engine só propaga chaves de saída
efetivamente presentes: um `if` que devolve apenas `true` não acende o
caminho ligado a `false`.
"""

from __future__ import annotations

from typing import Any, Dict, List

from dockflow.core.graph.node import BaseNode
from dockflow.core.graph.ports import Port


class NoActionNode(BaseNode):
    type_name = "noaction"
    summary = "Terminates a path without producing outputs."

    def input_ports(self) -> List[Port]:
        return [Port("text", "Any input.", type="mixed", default="")]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        return {}


class IfNode(BaseNode):
    type_name = "if"
    summary = 'Routes to the "true" or "false" output according to a boolean condition.'

    def input_ports(self) -> List[Port]:
        return [Port("condition", "Boolean condition.", type="bool")]

    def output_ports(self) -> List[Port]:
        return [
            Port("true", type="bool", required=False),
            Port("false", type="bool", required=False),
            Port("error", type="string", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        condition = inputs.get("condition")
        if not isinstance(condition, bool):
            return self.error('"condition" must be boolean')
        return {"true": True} if condition else {"false": True}


class SwitchNode(BaseNode):
    type_name = "switch"
    summary = 'Activates the output named after `value` when it is one of `cases`, else "default".'

    def input_ports(self) -> List[Port]:
        return [
            Port("value", "String value to evaluate."),
            Port("cases", "Allowed case values.", type="list"),
        ]

    def output_ports(self) -> List[Port]:
        return [Port("default", type="bool", required=False)]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        value = inputs.get("value")
        cases = inputs.get("cases")

        if not isinstance(value, str):
            return self.error('"value" must be a string')
        if not isinstance(cases, (list, tuple)):
            return self.error('"cases" must be a list')

        if value in cases:
            return {value: True}
        return {"default": True}


class ConditionalPassNode(BaseNode):
    """Bloqueia o payload quando a variável de contexto `varname` vale `expected`."""

    type_name = "conditional_pass"
    summary = 'Routes `input` to "blocked" when a context var equals `expected`, else to "passed".'

    def input_ports(self) -> List[Port]:
        return [
            Port("input", "Payload to route.", type="mixed", required=False),
            Port("varname", "Context variable to check."),
            Port("expected", "Value that blocks the payload.", type="mixed"),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("passed", type="mixed", required=False),
            Port("blocked", type="mixed", required=False),
            Port("error", type="string", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        payload = inputs.get("input")
        varname = inputs.get("varname")
        if not varname:
            return self.error("no varname provided")

        if context.get_var(varname) == inputs.get("expected"):
            return {"blocked": payload}
        return {"passed": payload}

# src/dockflow/nodes/data.py
"""
Nós de dados: decodificação JSON, acesso por caminho pontuado e strings.

Caminhos pontuados (`user.profile.name`) atravessam dicionários; em listas,
segmentos numéricos são índices.
"""

from __future__ import annotations

import json
from copy import deepcopy
from typing import Any, Dict, List

from dockflow.core.graph.node import BaseNode
from dockflow.core.graph.ports import Port

_MISSING = object()


def get_path(data: Any, path: str) -> Any:
    current = data
    for segment in path.split("."):
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            return _MISSING
    return current


def set_path(data: Dict[str, Any], path: str, value: Any) -> Dict[str, Any]:
    result = deepcopy(data)
    keys = path.split(".")
    current = result
    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value
    return result


class ToArrayNode(BaseNode):
    type_name = "to_array"
    summary = "Parses a JSON string into a structure."

    def input_ports(self) -> List[Port]:
        return [Port("json", "A JSON document.")]

    def output_ports(self) -> List[Port]:
        return [
            Port("array", type="mixed", required=False),
            Port("error", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        raw = inputs.get("json")
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        if not isinstance(raw, str):
            return self.error('"json" must be a string')

        try:
            return {"array": json.loads(raw)}
        except json.JSONDecodeError as exc:
            return self.error(f"invalid JSON: {exc.msg}")


class ArrayGetNode(BaseNode):
    type_name = "array_get"
    summary = "Reads a value from a nested structure using a dotted path."

    def input_ports(self) -> List[Port]:
        return [
            Port("array", "Structure to search.", type="mixed"),
            Port("path", "Dotted path, e.g. user.profile.name."),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("value", type="mixed", required=False),
            Port("error", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        data = inputs.get("array")
        path = inputs.get("path")
        if not isinstance(data, (dict, list)):
            return self.error("input is not a structure")
        if not isinstance(path, str) or not path:
            return self.error("invalid or missing path")

        value = get_path(data, path)
        if value is _MISSING:
            return self.error(f"path not found: {path}")
        return {"value": value}


class ArraySetNode(BaseNode):
    type_name = "array_set"
    summary = "Inserts or updates a value in a nested mapping using a dotted path."

    def input_ports(self) -> List[Port]:
        return [
            Port("array", "Base mapping.", type="dict"),
            Port("path", "Dotted path of the key to set."),
            Port("value", "Value to set.", type="mixed", required=False),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("array", type="dict", required=False),
            Port("error", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        data = inputs.get("array")
        path = inputs.get("path")
        if not isinstance(data, dict):
            return self.error('"array" must be a mapping')
        if not isinstance(path, str) or not path:
            return self.error('"path" must be a non-empty string')
        return {"array": set_path(data, path, inputs.get("value"))}


class StringReverseNode(BaseNode):
    type_name = "string_reverse"
    summary = "Reverses the input string."

    def input_ports(self) -> List[Port]:
        return [Port("text", default="")]

    def output_ports(self) -> List[Port]:
        return [Port("reversed", required=False)]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        return {"reversed": str(inputs.get("text") or "")[::-1]}


DATA_NODES = [ToArrayNode, ArrayGetNode, ArraySetNode, StringReverseNode]

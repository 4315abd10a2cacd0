# src/dockflow/nodes/control/loop.py
"""
Nós de iteração: `loop` (contagem fixa) e `foreach` (itens de lista/dict).

Ambos recebem um Executable vivo na porta `node` e o invocam uma vez por
iteração, montando as entradas a partir de `inputMap`
(`{porta_destino: expressão}`). Expressões:

    $index          → índice da iteração
    $item / $key    → item e chave correntes (apenas foreach)
    $context_<nome> → variável de contexto `context_<nome>`
    outro valor     → repassado literalmente

A falha de uma iteração vira uma entrada `{"error": ...}` em `results`;
as demais iterações continuam.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

from dockflow.core.graph.node import BaseNode, Executable, invoke_executable
from dockflow.core.graph.ports import Port

MAX_LOOP_COUNT = 1000
CONTEXT_PREFIX = "$context_"


def map_iteration_inputs(
    input_map: Dict[str, Any],
    context: Any,
    placeholders: Dict[str, Any],
) -> Dict[str, Any]:
    mapped: Dict[str, Any] = {}
    for target, expr in (input_map or {}).items():
        if isinstance(expr, str) and expr in placeholders:
            mapped[target] = placeholders[expr]
        elif isinstance(expr, str) and expr.startswith(CONTEXT_PREFIX):
            mapped[target] = context.get_var(expr[1:])
        else:
            mapped[target] = expr
    return mapped


def _run_iterations(
    node: Executable,
    iterations: Iterable[Tuple[Dict[str, Any], Dict[str, Any]]],
    input_map: Dict[str, Any],
    context: Any,
    flow: Any,
) -> List[Dict[str, Any]]:
    results: List[Dict[str, Any]] = []
    for placeholders, implicit in iterations:
        try:
            mapped = map_iteration_inputs(input_map, context, placeholders)
            for key, value in implicit.items():
                if mapped.get(key) is None:
                    mapped[key] = value
            results.append(invoke_executable(node, mapped, context, flow=flow))
        except Exception as exc:
            results.append({"error": str(exc) or exc.__class__.__name__})
    return results


class LoopNode(BaseNode):
    type_name = "loop"
    summary = "Invokes the held node `count` times, building inputs from `inputMap`."
    requires_flow = True

    def input_ports(self) -> List[Port]:
        return [
            Port("count", "Number of iterations (0..1000).", type="int"),
            Port("node", "Executable invoked on each iteration.", type="node"),
            Port("inputMap", "Target input → expression.", type="dict", default={}, required=False),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("results", "One output per iteration.", type="list", required=False),
            Port("error", type="string", required=False),
        ]

    def execute(self, inputs, resources, context, flow: Optional[Any] = None) -> Dict[str, Any]:
        count = inputs.get("count")
        node = inputs.get("node")
        input_map = inputs.get("inputMap") or {}

        if isinstance(count, bool) or not isinstance(count, int) or not 0 <= count <= MAX_LOOP_COUNT:
            return self.error(f'"count" must be an integer between 0 and {MAX_LOOP_COUNT}')
        if not isinstance(node, Executable):
            return self.error('"node" must be an executable node')
        if not isinstance(input_map, dict):
            return self.error('"inputMap" must be a mapping')

        iterations = (({"$index": i}, {"index": i}) for i in range(count))
        return {"results": _run_iterations(node, iterations, input_map, context, flow)}


class ForEachNode(BaseNode):
    type_name = "foreach"
    summary = "Invokes the held node once per element of `items`."
    requires_flow = True

    def input_ports(self) -> List[Port]:
        return [
            Port("items", "List or mapping to iterate.", type="list"),
            Port("node", "Executable invoked per item.", type="node"),
            Port("inputMap", "Target input → expression.", type="dict", default={}, required=False),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("results", "One output per item.", type="list", required=False),
            Port("error", type="string", required=False),
        ]

    def execute(self, inputs, resources, context, flow: Optional[Any] = None) -> Dict[str, Any]:
        items = inputs.get("items")
        node = inputs.get("node")
        input_map = inputs.get("inputMap") or {}

        if isinstance(items, dict):
            pairs = list(items.items())
        elif isinstance(items, (list, tuple)):
            pairs = list(enumerate(items))
        else:
            return self.error('"items" must be a list or a mapping')
        if not isinstance(node, Executable):
            return self.error('"node" must be an executable node')
        if not isinstance(input_map, dict):
            return self.error('"inputMap" must be a mapping')

        def iterations():
            for index, (key, item) in enumerate(pairs):
                placeholders = {"$item": item, "$key": key, "$index": index}
                # um item com chave `flow` não pode reinjetar um flow no nó mantido
                safe_item = {k: v for k, v in item.items() if k != "flow"} if isinstance(item, dict) else item
                yield placeholders, {"item": safe_item, "key": key, "index": index}

        return {"results": _run_iterations(node, iterations(), input_map, context, flow)}

# src/dockflow/nodes/control/subflow.py
"""
Nó `subflow`: executa um Flow recebido na porta `flow`.

O flow é clonado a cada execução e vinculado a um `SubFlowContext` cujas
vars extras são as entradas repassadas. Todas as entradas, exceto `flow`,
são repassadas como entradas externas da run interna.

Limitação documentada: apenas o primeiro resultado terminal não vazio
(ordem de declaração) é devolvido.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from dockflow.core.context.context import SubFlowContext
from dockflow.core.engine.flow import Flow
from dockflow.core.graph.node import BaseNode
from dockflow.core.graph.ports import Port


class SubFlowNode(BaseNode):
    type_name = "subflow"
    summary = "Runs a nested flow with the current inputs and returns its first terminal output."
    requires_flow = True

    def input_ports(self) -> List[Port]:
        return [Port("flow", "The flow to run.", type="flow")]

    def execute(self, inputs, resources, context, flow: Optional[Any] = None) -> Dict[str, Any]:
        inner = inputs.get("flow")
        if not isinstance(inner, Flow):
            return self.error("missing or invalid flow input")

        forwarded = {key: value for key, value in inputs.items() if key != "flow"}
        item = forwarded.get("item")
        if isinstance(item, dict) and "flow" in item:
            forwarded["item"] = {k: v for k, v in item.items() if k != "flow"}

        clone = inner.clone()
        clone.set_context(SubFlowContext(context, forwarded))
        context.log(node_id=self.id, level="debug", message="subflow started", inner_nodes=len(clone.nodes))

        for partial in clone.run(forwarded):
            if partial:
                return dict(partial)
        return {}

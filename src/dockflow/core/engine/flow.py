# src/dockflow/core/engine/flow.py
"""
Engine de execução de flows do Dockflow.

Um `Flow` agrega nós (ordem de declaração preservada), o router de
conexões, a tabela de recursos/docks e o contexto vinculado. `run`
executa o grafo em passes iterativos:

    1. buffer vazio por nó
    2. entradas iniciais do router
    3. entradas externas, via conexões que partem de `GRAPH_INPUT`
    4. passes limitados por `max_iterations`; em cada passe, todo nó ainda
       não executado (ou, em modo reentrante, com entrega nova) cujo
       `is_ready` é verdadeiro:
         a. completa entradas com defaults, ou gera erro sintético para
            porta obrigatória ausente (o corpo não é invocado)
         b. resolve recursos dos docks
         c. invoca `execute`; qualquer exceção vira `{"error": mensagem}`
         d. injeta defaults de saída não nulos para chaves ausentes
         e. registra a saída
         f. propaga a saída pelas conexões, em ordem de declaração
       Um passe sem progresso encerra a run como conclusão parcial.
    5. resultado = saídas dos nós terminais (sem conexões de saída),
       em ordem de declaração

Decisões arquiteturais:
    - Prontidão é avaliada a partir dos dados bufferizados, não de uma
      ordem topológica pré-calculada
    - Saídas ficam visíveis para nós posteriores do mesmo passe
    - Erros nunca atravessam a fronteira de um nó; apenas o estouro do
      limite de iterações substitui o resultado inteiro
    - Buffers e registros pertencem à run; o flow pode ser reutilizado

Limites explícitos:
    - Sem concorrência intra-passe
    - Sem cancelamento ou timeout de nós
    - Não chama `finish()` do emissor (responsabilidade do chamador)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from dockflow.core.context.context import ExecutionContext
from dockflow.core.errors import (
    DockflowErrorPayload,
    fatal_result,
    node_execution_fault,
    node_reported_error,
    run_iteration_exceeded,
    run_stalled,
)
from dockflow.core.exceptions import FlowContextError, LoadError
from dockflow.core.graph.ports import Dock, Port, apply_input_defaults, apply_output_defaults, normalize_ports

from .docking import DockResolver
from .router import GRAPH_INPUT, ConnectionRouter


class NodeStatus(str, Enum):
    """Estado final de um nó em uma run."""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class RunStatus(str, Enum):
    COMPLETED = "completed"
    PARTIAL = "partial"
    ITERATION_EXCEEDED = "iteration_exceeded"


@dataclass
class NodeRecord:
    node_id: str
    status: Optional[NodeStatus] = None
    executions: int = 0
    error: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class FlowRunResult:
    """Resultado detalhado de uma run."""

    status: RunStatus
    outputs: List[Dict[str, Any]] = field(default_factory=list)
    node_outputs: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    records: Dict[str, NodeRecord] = field(default_factory=dict)
    passes: int = 0
    error: Optional[Dict[str, Any]] = None


class Flow:
    """Grafo executável de nós, conexões, recursos e docks."""

    def __init__(
        self,
        *,
        router: Optional[ConnectionRouter] = None,
        docking: Optional[DockResolver] = None,
        context: Optional[ExecutionContext] = None,
        max_iterations: Optional[int] = None,
        propagate_missing_outputs: Optional[bool] = None,
        allow_reentrant: bool = False,
    ):
        self.router: ConnectionRouter = router or ConnectionRouter()
        self.docking: DockResolver = docking or DockResolver()
        self.context: Optional[ExecutionContext] = context
        self.max_iterations = max_iterations
        self.propagate_missing_outputs = propagate_missing_outputs
        self.allow_reentrant = allow_reentrant
        self.nodes: Dict[str, Any] = {}
        self.load_errors: List[Dict[str, Any]] = []

    # -----------------------------
    # Montagem
    # -----------------------------
    def add_node(self, node: Any) -> None:
        node_id = getattr(node, "id", None)
        if not isinstance(node_id, str) or not node_id.strip():
            raise LoadError(message="node id must be a non-empty string")
        if node_id == GRAPH_INPUT:
            raise LoadError(message=f"node id '{GRAPH_INPUT}' is reserved", details={"node_id": node_id})
        if node_id in self.nodes:
            raise LoadError(message=f"duplicate node id: '{node_id}'", details={"node_id": node_id})
        self.nodes[node_id] = node

    def get_node(self, node_id: str) -> Any:
        return self.nodes[node_id]

    @property
    def resources(self) -> Dict[str, Any]:
        return self.docking.resources

    def set_context(self, context: ExecutionContext) -> None:
        self.context = context

    def clone(self) -> "Flow":
        """Cópia sem contexto, compartilhando nós, router e recursos."""
        copy = Flow(
            router=self.router,
            docking=self.docking,
            max_iterations=self.max_iterations,
            propagate_missing_outputs=self.propagate_missing_outputs,
            allow_reentrant=self.allow_reentrant,
        )
        copy.nodes = dict(self.nodes)
        copy.load_errors = list(self.load_errors)
        return copy

    def terminal_nodes(self) -> List[str]:
        return [nid for nid in self.nodes if not self.router.has_outgoing(nid)]

    # -----------------------------
    # Execução
    # -----------------------------
    def run(self, inputs: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return self.run_detailed(inputs).outputs

    def run_detailed(self, inputs: Optional[Dict[str, Any]] = None) -> FlowRunResult:
        ctx = self.context
        if ctx is None:
            raise FlowContextError(
                message="flow has no execution context",
                hint="Use flow.set_context(ExecutionContext(...)) antes de run().",
            )
        ctx.router = self.router

        max_iterations = self._max_iterations(ctx)
        propagate_missing = self._propagate_missing(ctx)

        buffers: Dict[str, Dict[str, Any]] = {nid: {} for nid in self.nodes}
        for nid, values in self.router.initial_inputs().items():
            if nid in buffers:
                buffers[nid].update(values)

        for name, value in (inputs or {}).items():
            for conn in self.router.outgoing(GRAPH_INPUT):
                if conn.from_output == name and conn.to_node in buffers:
                    buffers[conn.to_node][conn.to_input] = value

        node_outputs: Dict[str, Dict[str, Any]] = {}
        records: Dict[str, NodeRecord] = {nid: NodeRecord(node_id=nid) for nid in self.nodes}
        executed: Set[str] = set()
        fresh: Set[str] = set()
        passes = 0

        ctx.log(node_id=None, level="info", message="flow started", nodes=len(self.nodes))
        ctx.emit_event({"type": "flow.started", "run_id": ctx.run_id, "nodes": list(self.nodes)})

        status = RunStatus.COMPLETED
        run_error: Optional[DockflowErrorPayload] = None

        while self._pending(executed, fresh):
            passes += 1
            if passes > max_iterations:
                run_error = run_iteration_exceeded(
                    max_iterations=max_iterations,
                    executed=sum(r.executions for r in records.values()),
                )
                ctx.log(node_id=None, level="error", message=run_error.message, max_iterations=max_iterations)
                ctx.emit_event({"type": "flow.iteration_exceeded", "run_id": ctx.run_id, "max_iterations": max_iterations})
                status = RunStatus.ITERATION_EXCEEDED
                break

            progress = False
            for nid, node in self.nodes.items():
                if nid in executed and not (self.allow_reentrant and nid in fresh):
                    continue
                if not self.router.is_ready(nid, buffers[nid]):
                    continue

                output = self._execute_node(nid, node, buffers, records[nid], ctx)
                node_outputs[nid] = output
                executed.add(nid)
                fresh.discard(nid)
                progress = True

                # nó sem corpo executado não entrega nada
                if records[nid].status != NodeStatus.SKIPPED:
                    self._propagate(nid, output, buffers, fresh, propagate_missing)

            if not progress:
                if len(executed) < len(self.nodes):
                    status = RunStatus.PARTIAL
                    run_error = self._stall(buffers, executed, records, ctx)
                break

        if status == RunStatus.ITERATION_EXCEEDED:
            outputs = [fatal_result(run_error)]
        else:
            outputs = [node_outputs[nid] for nid in self.terminal_nodes() if nid in node_outputs]

        ctx.log(node_id=None, level="info", message="flow finished", status=status.value, passes=passes)
        ctx.emit_event({"type": "flow.finished", "run_id": ctx.run_id, "status": status.value, "passes": passes})

        return FlowRunResult(
            status=status,
            outputs=outputs,
            node_outputs=node_outputs,
            records=records,
            passes=passes,
            error=run_error.to_dict() if run_error is not None else None,
        )

    # -----------------------------
    # Internos
    # -----------------------------
    def _pending(self, executed: Set[str], fresh: Set[str]) -> bool:
        if len(executed) < len(self.nodes):
            return True
        return self.allow_reentrant and bool(fresh)

    def _execute_node(
        self,
        nid: str,
        node: Any,
        buffers: Dict[str, Dict[str, Any]],
        record: NodeRecord,
        ctx: ExecutionContext,
    ) -> Dict[str, Any]:
        """
        Executa um nó pronto e devolve sua saída.

        Nenhuma exceção atravessa esta fronteira: declarações de porta
        inválidas, falhas do corpo e resultados não-dict viram
        `{"error": ...}` com registro FAILED. Entrada obrigatória ausente
        vira registro SKIPPED sem invocar o corpo.
        """
        type_name = getattr(node, "type_name", node.__class__.__name__)
        record.executions += 1

        try:
            input_ports = _ports(node, "input_ports")
            output_ports = _ports(node, "output_ports")
            docks = _docks(node)
        except Exception as exc:
            return self._fail(nid, node_execution_fault(node_id=nid, exc=exc), record, ctx)

        merged, missing = apply_input_defaults(input_ports, buffers[nid], node_id=nid)
        buffers[nid] = merged

        if missing is not None:
            record.status = NodeStatus.SKIPPED
            record.error = missing.to_dict()
            ctx.log(node_id=nid, level="warning", message=missing.message, error_type=missing.type)
            ctx.add_warning(node_id=nid, message=missing.message)
            ctx.emit_event({"type": "node.skipped", "run_id": ctx.run_id, "node_id": nid, "reason": missing.message})
            return {"error": missing.message}

        ctx.log(node_id=nid, level="info", message="node started", node_type=type_name)
        ctx.emit_event({"type": "node.started", "run_id": ctx.run_id, "node_id": nid, "node_type": type_name})

        try:
            resources = self.docking.resolve(nid, docks)
            if getattr(node, "requires_flow", False):
                output = node.execute(dict(merged), resources, ctx, flow=self)
            else:
                output = node.execute(dict(merged), resources, ctx)
            if not isinstance(output, dict):
                raise TypeError(f"execute() must return dict, got {type(output).__name__}")
        except Exception as exc:
            output = self._fail(nid, node_execution_fault(node_id=nid, exc=exc), record, ctx)
        else:
            if "error" in output:
                self._fail(nid, node_reported_error(node_id=nid, message=output["error"]), record, ctx)
            else:
                record.status = NodeStatus.SUCCESS
                record.error = None

        output = apply_output_defaults(output_ports, output)

        if record.status == NodeStatus.SUCCESS:
            ctx.log(node_id=nid, level="info", message="node finished", outputs=list(output.keys()))
            ctx.emit_event({"type": "node.finished", "run_id": ctx.run_id, "node_id": nid, "outputs": list(output.keys())})

        return output

    def _fail(
        self,
        nid: str,
        payload: DockflowErrorPayload,
        record: NodeRecord,
        ctx: ExecutionContext,
    ) -> Dict[str, Any]:
        record.status = NodeStatus.FAILED
        record.error = payload.to_dict()
        ctx.log(node_id=nid, level="error", message=payload.message, error_type=payload.type)
        ctx.emit_event({"type": "node.failed", "run_id": ctx.run_id, "node_id": nid, "error": payload.message})
        return {"error": payload.message}

    def _propagate(
        self,
        nid: str,
        output: Dict[str, Any],
        buffers: Dict[str, Dict[str, Any]],
        fresh: Set[str],
        propagate_missing: bool,
    ) -> None:
        if propagate_missing:
            targets: List[str] = []
            for conn in self.router.outgoing(nid):
                if conn.to_node in self.nodes and conn.to_node not in targets:
                    targets.append(conn.to_node)
            for target in targets:
                buffers[target].update(self.router.map_inputs(nid, target, output))
                fresh.add(target)
            return

        for conn in self.router.outgoing(nid):
            if conn.to_node not in self.nodes or conn.from_output not in output:
                continue
            buffers[conn.to_node][conn.to_input] = output[conn.from_output]
            fresh.add(conn.to_node)

    def _stall(
        self,
        buffers: Dict[str, Dict[str, Any]],
        executed: Set[str],
        records: Dict[str, NodeRecord],
        ctx: ExecutionContext,
    ) -> DockflowErrorPayload:
        remaining: Dict[str, List[str]] = {}
        for nid in self.nodes:
            if nid in executed:
                continue
            waiting = self.router.missing_inputs(nid, buffers[nid])
            remaining[nid] = waiting
            ctx.add_warning(node_id=nid, message=f"not executed: waiting for inputs {waiting}")

        unmet_mandatory = [
            c.to_dict()
            for c in self.router.mandatory_connections()
            if c.to_node in remaining and c.to_input in remaining[c.to_node]
        ]

        payload = run_stalled(remaining=remaining)
        ctx.log(
            node_id=None,
            level="warning",
            message=payload.message,
            remaining=remaining,
            unmet_mandatory=unmet_mandatory,
        )
        ctx.emit_event(
            {
                "type": "flow.stalled",
                "run_id": ctx.run_id,
                "remaining": remaining,
                "unmet_mandatory": unmet_mandatory,
            }
        )
        return payload

    def _max_iterations(self, ctx: ExecutionContext) -> int:
        if self.max_iterations is not None:
            return int(self.max_iterations)
        return int(ctx.configuration.engine_option("max_iterations"))

    def _propagate_missing(self, ctx: ExecutionContext) -> bool:
        if self.propagate_missing_outputs is not None:
            return bool(self.propagate_missing_outputs)
        return bool(ctx.configuration.engine_option("propagate_missing_outputs"))


def _ports(node: Any, method: str) -> List[Port]:
    getter = getattr(node, method, None)
    if getter is None:
        return []
    return normalize_ports(getter())


def _docks(node: Any) -> List[Dock]:
    getter = getattr(node, "dock_ports", None)
    if getter is None:
        return []
    return list(getter())

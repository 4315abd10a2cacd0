# src/dockflow/core/engine/builder.py
"""
Construção de flows a partir de descrições declarativas.

Formato da descrição (dict, YAML ou JSON):

    {
      "nodes":       [{"id", "type", "inputs": {...}, "config": {...}}],
      "connections": [{"from", "output", "to", "input", "mandatory"}],
      "resources":   [{"id", "type", "config": {...}}],
      "docks":       {owner_id: {dock_name: [resource_id]}},
      "reentrant":   bool,
      "memory":      nome registrado (kind `memory`, ex.: "volatile"),
      "emitter":     nome registrado (kind `emitter`, ex.: "callback")
    }

Política de load:
    - Tipo desconhecido, entrada malformada, conexão para nó inexistente,
      dock/recurso inválido → LoadError
    - strict=False (padrão, `engine.strict_load`): a entrada é ignorada e o
      erro estruturado é registrado em `flow.load_errors`
    - strict=True: o primeiro LoadError é levantado

`memory` e `emitter` são instanciados pelo registry e instalados no
contexto vinculado; sem contexto (flows aninhados), são ignorados.

Entradas iniciais marcadas são materializadas no build:
    - {"$node": {"type": ..., "config": {...}}} → instância viva de nó
    - {"$flow": <descrição>}                    → Flow construído (sem contexto)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Union

from dockflow.core.config.host import HostConfiguration
from dockflow.core.config.loader import PathLike, read_mapping
from dockflow.core.config.values import ConfigValueResolver
from dockflow.core.context.context import ExecutionContext
from dockflow.core.exceptions import ConfigResolutionError, LoadError, NodeIdentityError
from dockflow.core.graph.registry import ComponentRegistry

from .docking import DockResolver
from .flow import Flow
from .router import GRAPH_INPUT, ConnectionRouter

NODE_TAG = "$node"
FLOW_TAG = "$flow"


def load_description(path: PathLike) -> Dict[str, Any]:
    """Lê uma descrição de flow de um arquivo YAML ou JSON."""
    return read_mapping(path)


class FlowBuilder:
    """Constrói `Flow`s resolvendo tipos pelo `ComponentRegistry`."""

    def __init__(
        self,
        registry: ComponentRegistry,
        *,
        configuration: Optional[Union[HostConfiguration, Dict[str, Any]]] = None,
        strict: Optional[bool] = None,
    ):
        if isinstance(configuration, dict):
            configuration = HostConfiguration(data=configuration)
        self.registry = registry
        self.configuration: HostConfiguration = configuration or HostConfiguration()
        self.resolver = ConfigValueResolver(self.configuration)
        if strict is None:
            strict = bool(self.configuration.engine_option("strict_load"))
        self.strict = strict

    # -----------------------------
    # API pública
    # -----------------------------
    def build(
        self,
        description: Union[Dict[str, Any], PathLike],
        *,
        context: Optional[ExecutionContext] = None,
        bind_context: bool = True,
    ) -> Flow:
        if not isinstance(description, dict):
            description = load_description(description)

        flow = self._create("flow", description.get("flow", "default"), Flow)
        flow.router = self._create("router", description.get("router", "default"), ConnectionRouter)
        flow.docking = DockResolver()
        flow.allow_reentrant = bool(description.get("reentrant", False))

        if context is None and bind_context:
            context = ExecutionContext(configuration=self.configuration)

        self._build_nodes(flow, description.get("nodes") or [], context)
        self._build_connections(flow, description.get("connections") or [], context)
        self._build_resources(flow, description.get("resources") or [], context)
        self._bind_docks(flow, description.get("docks") or {}, context)
        self._init_resources(flow, context)

        if context is not None:
            self._install_services(flow, description, context)
            flow.set_context(context)

        return flow

    # -----------------------------
    # Etapas
    # -----------------------------
    def _build_nodes(self, flow: Flow, entries: List[Any], context: Optional[ExecutionContext]) -> None:
        for index, entry in enumerate(entries):
            try:
                node_id, type_name = self._identity(entry, "node", index)
                node = self.registry.create("node", type_name)
                node.id = node_id
                if hasattr(node, "set_config"):
                    node.set_config(dict(entry.get("config") or {}), self.resolver)
                initial = {key: self._materialize(value, flow) for key, value in (entry.get("inputs") or {}).items()}
                flow.add_node(node)
                for key, value in initial.items():
                    flow.router.add_initial_input(node_id, key, value)
            except (LoadError, NodeIdentityError) as exc:
                self._fail(flow, exc, context)

    def _build_connections(self, flow: Flow, entries: List[Any], context: Optional[ExecutionContext]) -> None:
        for index, entry in enumerate(entries):
            try:
                if not isinstance(entry, dict):
                    raise LoadError(message=f"connection #{index} must be a mapping", details={"index": index})

                fields = {}
                for key in ("from", "output", "to", "input"):
                    value = entry.get(key)
                    if not isinstance(value, str) or not value:
                        raise LoadError(
                            message=f"connection #{index} is missing '{key}'",
                            details={"index": index, "entry": entry},
                        )
                    fields[key] = value

                if fields["from"] != GRAPH_INPUT and fields["from"] not in flow.nodes:
                    raise LoadError(
                        message=f"connection #{index} references unknown node '{fields['from']}'",
                        details={"index": index, "node_id": fields["from"]},
                    )
                if fields["to"] not in flow.nodes:
                    raise LoadError(
                        message=f"connection #{index} references unknown node '{fields['to']}'",
                        details={"index": index, "node_id": fields["to"]},
                    )

                flow.router.add_connection(
                    fields["from"],
                    fields["output"],
                    fields["to"],
                    fields["input"],
                    mandatory=bool(entry.get("mandatory", False)),
                )
            except LoadError as exc:
                self._fail(flow, exc, context)

    def _build_resources(self, flow: Flow, entries: List[Any], context: Optional[ExecutionContext]) -> None:
        for index, entry in enumerate(entries):
            try:
                resource_id, type_name = self._identity(entry, "resource", index)
                resource = self.registry.create("resource", type_name)
                resource.id = resource_id
                if hasattr(resource, "set_config"):
                    resource.set_config(dict(entry.get("config") or {}), self.resolver)
                flow.docking.add_resource(resource_id, resource)
            except ConfigResolutionError as exc:
                self._fail(
                    flow,
                    LoadError(message=exc.message, details=dict(exc.details), hint=exc.hint),
                    context,
                )
            except (LoadError, NodeIdentityError) as exc:
                self._fail(flow, exc, context)

    def _bind_docks(self, flow: Flow, docks: Any, context: Optional[ExecutionContext]) -> None:
        if not isinstance(docks, dict):
            self._fail(flow, LoadError(message="'docks' must be a mapping"), context)
            return

        for owner_id, slots in docks.items():
            owner = flow.nodes.get(owner_id) or flow.resources.get(owner_id)
            if owner is None:
                self._fail(
                    flow,
                    LoadError(message=f"docks reference unknown owner '{owner_id}'", details={"owner_id": owner_id}),
                    context,
                )
                continue

            declared = {d.name: d for d in (owner.dock_ports() if hasattr(owner, "dock_ports") else [])}
            for dock_name, resource_ids in (slots or {}).items():
                dock = declared.get(dock_name)
                if dock is None:
                    self._fail(
                        flow,
                        LoadError(
                            message=f"'{owner_id}' declares no dock '{dock_name}'",
                            details={"owner_id": owner_id, "dock": dock_name},
                        ),
                        context,
                    )
                    continue

                if isinstance(resource_ids, str):
                    resource_ids = [resource_ids]
                for resource_id in resource_ids or []:
                    try:
                        flow.docking.bind(owner_id, dock, resource_id)
                    except LoadError as exc:
                        self._fail(flow, exc, context)

    def _init_resources(self, flow: Flow, context: Optional[ExecutionContext]) -> None:
        for resource_id, resource in flow.resources.items():
            if not hasattr(resource, "init"):
                continue
            docks = resource.dock_ports() if hasattr(resource, "dock_ports") else []
            resource.init(flow.docking.resolve(resource_id, docks), context)

    # -----------------------------
    # Auxiliares
    # -----------------------------
    def _identity(self, entry: Any, kind: str, index: int):
        if not isinstance(entry, dict):
            raise LoadError(message=f"{kind} #{index} must be a mapping", details={"index": index})
        entry_id = entry.get("id")
        type_name = entry.get("type")
        if not isinstance(entry_id, str) or not entry_id.strip():
            raise LoadError(message=f"{kind} #{index} has no 'id'", details={"index": index})
        if not isinstance(type_name, str) or not type_name.strip():
            raise LoadError(message=f"{kind} '{entry_id}' has no 'type'", details={"index": index, "id": entry_id})
        return entry_id, type_name

    def _materialize(self, value: Any, flow: Flow) -> Any:
        if not isinstance(value, dict) or len(value) != 1:
            return value

        if NODE_TAG in value:
            spec = value[NODE_TAG]
            if not isinstance(spec, dict) or not isinstance(spec.get("type"), str):
                raise LoadError(message=f"'{NODE_TAG}' reference requires a 'type'", details={"value": spec})
            node = self.registry.create("node", spec["type"])
            if spec.get("id"):
                node.id = spec["id"]
            if hasattr(node, "set_config"):
                node.set_config(dict(spec.get("config") or {}), self.resolver)
            return node

        if FLOW_TAG in value:
            spec = value[FLOW_TAG]
            if not isinstance(spec, dict):
                raise LoadError(message=f"'{FLOW_TAG}' reference must be a flow description")
            inner = self.build(spec, bind_context=False)
            for error in inner.load_errors:
                flow.load_errors.append(dict(error, nested=True))
            return inner

        return value

    def _install_services(self, flow: Flow, description: Dict[str, Any], context: ExecutionContext) -> None:
        memory_name = description.get("memory")
        if memory_name is not None:
            try:
                context.set_memory(self.registry.create("memory", str(memory_name)))
            except LoadError as exc:
                self._fail(flow, exc, context)

        emitter_name = description.get("emitter")
        if emitter_name is not None:
            try:
                context.emitter = self.registry.create("emitter", str(emitter_name))
            except LoadError as exc:
                self._fail(flow, exc, context)

    def _create(self, kind: str, type_name: str, fallback: Callable[[], Any]) -> Any:
        if self.registry.has(kind, type_name):
            return self.registry.create(kind, type_name)
        return fallback()

    def _fail(self, flow: Flow, exc: Exception, context: Optional[ExecutionContext]) -> None:
        if isinstance(exc, NodeIdentityError):
            exc = LoadError(message=exc.message, details=dict(exc.details))
        if self.strict:
            raise exc
        payload = exc.to_payload()
        flow.load_errors.append(payload.to_dict())
        if context is not None:
            context.log(node_id=None, level="warning", message=payload.message, error_type=payload.type)

# src/dockflow/bootstrap.py
"""
Bootstrap do Dockflow: população do registry e construção de flows.

`register_builtins` registra todos os componentes embutidos em um
`ComponentRegistry`; `default_registry` devolve um registry novo já
populado; `build_flow` é a fronteira pública de build.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from dockflow.core.config.host import HostConfiguration
from dockflow.core.config.loader import PathLike
from dockflow.core.context.context import ExecutionContext
from dockflow.core.context.memory import InMemorySessionStore, NoMemory, SessionMemory, VolatileMemory
from dockflow.core.engine.builder import FlowBuilder
from dockflow.core.engine.flow import Flow
from dockflow.core.engine.router import ConnectionRouter
from dockflow.core.events.emitter import CallbackEventEmitter, PollingEventEmitter
from dockflow.core.graph.registry import ComponentRegistry
from dockflow.nodes import BUILTIN_NODES
from dockflow.resources import BUILTIN_RESOURCES


def register_builtins(registry: ComponentRegistry) -> ComponentRegistry:
    for node_cls in BUILTIN_NODES:
        registry.register_node(node_cls)
    for resource_cls in BUILTIN_RESOURCES:
        registry.register_resource(resource_cls)

    registry.register("flow", "default", Flow)
    registry.register("router", "default", ConnectionRouter)

    registry.register("memory", "nomemory", NoMemory)
    registry.register("memory", "volatile", VolatileMemory)
    registry.register("memory", "session", lambda: SessionMemory(InMemorySessionStore()))

    registry.register("emitter", "callback", CallbackEventEmitter)
    registry.register("emitter", "polling", PollingEventEmitter)
    return registry


def default_registry() -> ComponentRegistry:
    return register_builtins(ComponentRegistry())


def build_flow(
    description: Union[Dict[str, Any], PathLike],
    *,
    registry: Optional[ComponentRegistry] = None,
    context: Optional[ExecutionContext] = None,
    configuration: Optional[Union[HostConfiguration, Dict[str, Any]]] = None,
    strict: Optional[bool] = None,
) -> Flow:
    """
    Constrói um Flow a partir de uma descrição (dict ou arquivo YAML/JSON).

    Sem `configuration`, usa a configuração do contexto informado (se houver).
    Sem `context`, um ExecutionContext novo é criado com a configuração.
    """
    if configuration is None and context is not None:
        configuration = context.configuration

    builder = FlowBuilder(
        registry or default_registry(),
        configuration=configuration,
        strict=strict,
    )
    return builder.build(description, context=context)

# src/dockflow/core/graph/resource.py
"""
Contrato de Recurso do Dockflow.

Recursos são serviços compartilhados (logger, valores estáticos, clientes)
construídos uma vez por build e vinculados a docks de nós ou de outros
recursos. São efetivamente somente leitura após o build.

Ciclo de vida:
    1. instanciação via registry (kind `resource`)
    2. atribuição de id e `set_config`
    3. `init(resources, context)` com os recursos dos seus próprios docks
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, runtime_checkable

from dockflow.core.config.values import ConfigValueResolver
from dockflow.core.exceptions import NodeIdentityError

from .ports import Dock

if TYPE_CHECKING:  # pragma: no cover
    from dockflow.core.context.context import ExecutionContext


@runtime_checkable
class Resource(Protocol):
    id: Optional[str]
    type_name: str

    def dock_ports(self) -> List[Dock]:
        ...

    def set_config(
        self,
        config: Dict[str, Any],
        resolver: Optional[ConfigValueResolver] = None,
    ) -> None:
        ...

    def init(self, resources: Dict[str, List[Any]], context: Optional["ExecutionContext"]) -> None:
        ...

    def emit(self, context: "ExecutionContext", event: Dict[str, Any]) -> None:
        ...


class BaseResource:
    """Base opcional para recursos: identidade única, config e hooks vazios."""

    type_name: str = ""
    summary: str = ""

    def __init__(self, resource_id: Optional[str] = None):
        self._id: Optional[str] = None
        self.config: Dict[str, Any] = {}
        self.resolved: Dict[str, Any] = {}
        self.docked: Dict[str, List[Any]] = {}
        self._resolver: Optional[ConfigValueResolver] = None
        if resource_id is not None:
            self.id = resource_id

    @property
    def id(self) -> Optional[str]:
        return self._id

    @id.setter
    def id(self, value: str) -> None:
        if self._id is not None:
            raise NodeIdentityError(
                message=f"resource id already assigned: '{self._id}'",
                details={"current": self._id, "requested": value},
            )
        self._id = value

    def dock_ports(self) -> List[Dock]:
        return []

    def set_config(
        self,
        config: Dict[str, Any],
        resolver: Optional[ConfigValueResolver] = None,
    ) -> None:
        self.config = dict(config or {})
        self._resolver = resolver or ConfigValueResolver()
        self.resolved = self._resolver.resolve_mapping(self.config)

    def init(self, resources: Dict[str, List[Any]], context: Optional["ExecutionContext"]) -> None:
        self.docked = {name: list(items) for name, items in (resources or {}).items()}

    def emit(self, context: "ExecutionContext", event: Dict[str, Any]) -> None:
        context.emit_event(event)

    def description(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "description": self.summary,
            "docks": [d.to_dict() for d in self.dock_ports()],
        }

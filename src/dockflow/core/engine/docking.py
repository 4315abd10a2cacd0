# src/dockflow/core/engine/docking.py
"""
Resolução de docks de recursos.

O `DockResolver` guarda a tabela de recursos construídos de um flow
(id → instância) e os vínculos declarados (dono → dock → [resource_id]).
Antes de executar um nó, o engine pede a ele o mapa
`{dock_name: [recursos]}` com todos os docks declarados pelo nó presentes,
possivelmente vazios.

Regras de vínculo (violação → LoadError):
    - o recurso referenciado precisa existir
    - o recurso precisa satisfazer a `capability` do dock
    - o número de vínculos não pode exceder `max_connections`

Invariantes:
    - Recursos são compartilhados entre todos os donos que os vinculam
    - A ordem dos recursos em um dock é a ordem de declaração
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from dockflow.core.exceptions import LoadError
from dockflow.core.graph.ports import Dock


@dataclass
class DockResolver:
    resources: Dict[str, Any] = field(default_factory=dict)
    bindings: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)

    def add_resource(self, resource_id: str, instance: Any) -> None:
        if resource_id in self.resources:
            raise LoadError(
                message=f"duplicate resource id: '{resource_id}'",
                details={"resource_id": resource_id},
            )
        self.resources[resource_id] = instance

    def bind(self, owner_id: str, dock: Dock, resource_id: str) -> None:
        """Vincula um recurso a um dock do dono, validando existência, capacidade e limite."""
        if resource_id not in self.resources:
            raise LoadError(
                message=f"dock '{dock.name}' of '{owner_id}' references unknown resource '{resource_id}'",
                details={"owner_id": owner_id, "dock": dock.name, "resource_id": resource_id},
            )

        resource = self.resources[resource_id]
        if not dock.accepts(resource):
            raise LoadError(
                message=(
                    f"resource '{resource_id}' does not satisfy dock '{dock.name}' "
                    f"of '{owner_id}' ({getattr(dock.capability, '__name__', dock.capability)})"
                ),
                details={
                    "owner_id": owner_id,
                    "dock": dock.name,
                    "resource_id": resource_id,
                    "resource_class": resource.__class__.__name__,
                },
            )

        bound = self.bindings.setdefault(owner_id, {}).setdefault(dock.name, [])
        if dock.max_connections is not None and len(bound) >= dock.max_connections:
            raise LoadError(
                message=f"dock '{dock.name}' of '{owner_id}' accepts at most {dock.max_connections} resource(s)",
                details={
                    "owner_id": owner_id,
                    "dock": dock.name,
                    "resource_id": resource_id,
                    "max_connections": dock.max_connections,
                },
            )

        bound.append(resource_id)

    def resolve(self, owner_id: str, docks: Iterable[Dock]) -> Dict[str, List[Any]]:
        owned = self.bindings.get(owner_id, {})
        resolved: Dict[str, List[Any]] = {}
        for dock in docks:
            resolved[dock.name] = [self.resources[rid] for rid in owned.get(dock.name, [])]
        return resolved

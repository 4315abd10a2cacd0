# src/dockflow/core/graph/registry.py
"""
Registro de componentes por nome.

O `ComponentRegistry` mapeia pares `(kind, type_name)` para fábricas sem
argumentos (classes ou callables). É o único mecanismo de resolução
dinâmica de tipos do Dockflow: explícito, local ao processo e populado no
startup (`dockflow.bootstrap.register_builtins`).

Kinds suportados:
    - node, resource, flow, memory, router, emitter

Decisões arquiteturais:
    - Nome desconhecido gera `ComponentNotFoundError`, nunca `None`
    - Registro duplicado gera `DuplicateComponentError`
    - A ordem de registro é preservada por kind

Limites explícitos:
    - Não injeta dependências nas fábricas
    - Não atribui ids nem aplica configuração (responsabilidade do builder)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from dockflow.core.exceptions import ComponentNotFoundError, DuplicateComponentError

KINDS = ("node", "resource", "flow", "memory", "router", "emitter")

Factory = Callable[[], Any]


@dataclass
class ComponentRegistry:
    """Registro canônico de fábricas de componentes, indexado por kind."""

    _factories: Dict[str, Dict[str, Factory]] = field(
        default_factory=lambda: {kind: {} for kind in KINDS},
        init=False,
        repr=False,
    )

    def register(self, kind: str, type_name: str, factory: Factory) -> None:
        self._check_kind(kind)
        if not isinstance(type_name, str) or not type_name.strip():
            raise ValueError("type_name must be a non-empty string")
        if not callable(factory):
            raise ValueError(f"factory for '{kind}:{type_name}' must be callable")

        if type_name in self._factories[kind]:
            raise DuplicateComponentError(
                message=f"duplicate {kind} type: {type_name}",
                details={"kind": kind, "type_name": type_name},
            )
        self._factories[kind][type_name] = factory

    def register_node(self, factory: Any) -> None:
        """Atalho para classes de nó que declaram `type_name`."""
        self.register("node", factory.type_name, factory)

    def register_resource(self, factory: Any) -> None:
        self.register("resource", factory.type_name, factory)

    def has(self, kind: str, type_name: str) -> bool:
        self._check_kind(kind)
        return type_name in self._factories[kind]

    def create(self, kind: str, type_name: str) -> Any:
        self._check_kind(kind)
        factory = self._factories[kind].get(type_name)
        if factory is None:
            raise ComponentNotFoundError(
                message=f"unknown {kind} type: '{type_name}'",
                details={"kind": kind, "type_name": type_name},
                hint=f"Registre a fábrica com registry.register('{kind}', '{type_name}', ...)",
            )
        return factory()

    def names(self, kind: str) -> List[str]:
        self._check_kind(kind)
        return list(self._factories[kind].keys())

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in KINDS:
            raise ValueError(f"unsupported component kind: {kind!r} (expected one of {KINDS})")

# src/dockflow/core/graph/node.py
"""
Contrato canônico de Nó do Dockflow.

Um nó é a menor unidade executável de um flow: recebe um mapa plano de
entradas já mescladas, os recursos resolvidos de seus docks e o contexto
compartilhado da run, e devolve um mapa plano de saídas.

Protocolos:
    - Executable → qualquer objeto com `execute(inputs, resources, context)`;
      é o contrato usado quando um nó circula como valor por uma porta
    - Node       → Executable com identidade, tipo, portas, docks e config

Decisões arquiteturais:
    - Conformidade por duck typing (`@runtime_checkable`), sem herança obrigatória
    - `BaseNode` oferece identidade imutável, config resolvida sob demanda
      e formatação de erros, mas não é exigido pelo engine
    - Nós de ordem superior declaram `requires_flow = True` e recebem o flow
      em execução como argumento nomeado `flow`

Invariantes:
    - A identidade de um nó é atribuída uma única vez
    - `execute` sempre retorna um dicionário
    - Nós não guardam estado entre runs, exceto via contexto

Limites explícitos:
    - Não decide prontidão nem propagação (responsabilidade do engine)
    - Não captura exceções do próprio corpo
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, runtime_checkable

from dockflow.core.config.values import ConfigValueResolver
from dockflow.core.exceptions import NodeIdentityError

from .ports import Dock, Port, apply_input_defaults, apply_output_defaults

if TYPE_CHECKING:  # pragma: no cover
    from dockflow.core.context.context import ExecutionContext

Resources = Dict[str, List[Any]]


@runtime_checkable
class Executable(Protocol):
    """Unidade invocável: o contrato mínimo de um nó usado como valor."""

    def execute(
        self,
        inputs: Dict[str, Any],
        resources: Resources,
        context: "ExecutionContext",
    ) -> Dict[str, Any]:
        ...


@runtime_checkable
class Node(Executable, Protocol):
    """
    Contrato completo de um nó declarável em uma descrição de flow.

    Atributos obrigatórios:
        - id: identificador único no flow (atribuído no load)
        - type_name: chave estável de instanciação declarativa

    Invariantes:
        - `input_ports()` e `output_ports()` preservam ordem de declaração
        - `set_config` é chamado antes da primeira execução
    """

    id: Optional[str]
    type_name: str

    def input_ports(self) -> List[Port]:
        ...

    def output_ports(self) -> List[Port]:
        ...

    def dock_ports(self) -> List[Dock]:
        ...

    def set_config(
        self,
        config: Dict[str, Any],
        resolver: Optional[ConfigValueResolver] = None,
    ) -> None:
        ...

    def description(self) -> Dict[str, Any]:
        ...


class BaseNode:
    """
    Implementação base opcional para nós.

    Subclasses definem `type_name`, `summary`, as portas e `execute`.
    """

    type_name: str = ""
    summary: str = ""
    requires_flow: bool = False

    def __init__(self, node_id: Optional[str] = None):
        self._id: Optional[str] = None
        self.config: Dict[str, Any] = {}
        self._resolver: Optional[ConfigValueResolver] = None
        if node_id is not None:
            self.id = node_id

    # -----------------------------
    # Identidade
    # -----------------------------
    @property
    def id(self) -> Optional[str]:
        return self._id

    @id.setter
    def id(self, value: str) -> None:
        if self._id is not None:
            raise NodeIdentityError(
                message=f"node id already assigned: '{self._id}'",
                details={"current": self._id, "requested": value},
            )
        if not isinstance(value, str) or not value.strip():
            raise NodeIdentityError(message="node id must be a non-empty string")
        self._id = value

    # -----------------------------
    # Portas
    # -----------------------------
    def input_ports(self) -> List[Port]:
        return []

    def output_ports(self) -> List[Port]:
        return []

    def dock_ports(self) -> List[Dock]:
        return []

    # -----------------------------
    # Configuração
    # -----------------------------
    def set_config(
        self,
        config: Dict[str, Any],
        resolver: Optional[ConfigValueResolver] = None,
    ) -> None:
        self.config = dict(config or {})
        self._resolver = resolver

    def setting(self, name: str, supplied: Any = None, default: Any = None) -> Any:
        """
        Resolve uma entrada de configuração no momento da chamada.

        Fragmentos `{mode, value}` recebem `supplied` como valor do chamador
        (modos `default` e `inherit`). Sem entrada configurada, vale
        `supplied` e, na falta dele, `default`.
        """
        if name not in self.config:
            return supplied if supplied is not None else default
        resolver = self._resolver or ConfigValueResolver()
        value = resolver.resolve(self.config[name], supplied)
        return value if value is not None else default

    # -----------------------------
    # Execução
    # -----------------------------
    def execute(
        self,
        inputs: Dict[str, Any],
        resources: Resources,
        context: "ExecutionContext",
    ) -> Dict[str, Any]:
        raise NotImplementedError(f"{self.__class__.__name__}.execute")

    def error(self, message: str) -> Dict[str, Any]:
        label = self.type_name or self.__class__.__name__
        if self._id:
            label = f"{label} '{self._id}'"
        return {"error": f"{label}: {message}"}

    def description(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "description": self.summary,
            "inputs": [p.to_dict() for p in self.input_ports()],
            "outputs": [p.to_dict() for p in self.output_ports()],
            "docks": [d.to_dict() for d in self.dock_ports()],
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id!r}, type={self.type_name!r})"


def invoke_executable(
    executable: Executable,
    inputs: Dict[str, Any],
    context: "ExecutionContext",
    *,
    resources: Optional[Resources] = None,
    flow: Any = None,
) -> Dict[str, Any]:
    """
    Invoca um Executable mantido como valor (ex.: corpo de um Loop).

    Aplica as mesmas regras de portas do engine: defaults e checagem de
    entradas obrigatórias antes do corpo, defaults de saída depois.
    Exceções do corpo propagam para o chamador.
    """
    node_id = getattr(executable, "id", None) or getattr(executable, "type_name", None) or "executable"

    if hasattr(executable, "input_ports"):
        inputs, missing = apply_input_defaults(executable.input_ports(), inputs, node_id=node_id)
        if missing is not None:
            return {"error": missing.message}

    if resources is None:
        docks = executable.dock_ports() if hasattr(executable, "dock_ports") else []
        resources = {dock.name: [] for dock in docks}

    if getattr(executable, "requires_flow", False):
        result = executable.execute(inputs, resources, context, flow=flow)
    else:
        result = executable.execute(inputs, resources, context)

    if not isinstance(result, dict):
        raise TypeError(f"execute() must return dict, got {type(result).__name__}")

    if hasattr(executable, "output_ports"):
        result = apply_output_defaults(executable.output_ports(), result)

    return result

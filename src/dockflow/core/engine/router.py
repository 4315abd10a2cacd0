# src/dockflow/core/engine/router.py
"""
Router de conexões do Dockflow.

O `ConnectionRouter` é dono do grafo de ligações de um flow e responde a
três perguntas do engine:

    - o nó N está pronto, dado o seu buffer atual de entradas?
    - quais entradas uma conexão entrega a partir de uma saída?
    - quais entradas iniciais foram pré-semeadas?

Ordem de composição do buffer de um nó (contrato):
    1. entradas iniciais
    2. entradas externas da run (via `GRAPH_INPUT`)
    3. entregas de conexões (ordem de declaração; a última vence)
    4. defaults de porta

Decisões arquiteturais:
    - Conexões são append-only; ciclos são tolerados e limitados pelo engine
    - Prontidão considera apenas conexões de entrada; portas sem conexão são
      validadas depois, via defaults
    - Chave de origem ausente produz `None` explícito em `map_inputs`

Limites explícitos:
    - Não executa nós
    - Não valida se os ids referenciados existem (responsabilidade do builder)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

GRAPH_INPUT = "__input__"


@dataclass(frozen=True)
class Connection:
    from_node: str
    from_output: str
    to_node: str
    to_input: str
    mandatory: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_node,
            "output": self.from_output,
            "to": self.to_node,
            "input": self.to_input,
            "mandatory": self.mandatory,
        }


@dataclass
class ConnectionRouter:
    """Grafo de conexões e entradas iniciais de um flow."""

    _connections: List[Connection] = field(default_factory=list, init=False, repr=False)
    _initial: Dict[str, Dict[str, Any]] = field(default_factory=dict, init=False, repr=False)

    # -----------------------------
    # Registro
    # -----------------------------
    def add_connection(
        self,
        from_node: str,
        from_output: str,
        to_node: str,
        to_input: str,
        mandatory: bool = False,
    ) -> Connection:
        connection = Connection(
            from_node=from_node,
            from_output=from_output,
            to_node=to_node,
            to_input=to_input,
            mandatory=bool(mandatory),
        )
        self._connections.append(connection)
        return connection

    def add_initial_input(self, node_id: str, key: str, value: Any) -> None:
        self._initial.setdefault(node_id, {})[key] = value

    # -----------------------------
    # Consultas
    # -----------------------------
    def connections(self) -> List[Connection]:
        return list(self._connections)

    def initial_inputs(self) -> Dict[str, Dict[str, Any]]:
        """Cópia nova a cada chamada; runs nunca compartilham buffers."""
        return {node_id: dict(values) for node_id, values in self._initial.items()}

    def incoming(self, node_id: str) -> List[Connection]:
        return [c for c in self._connections if c.to_node == node_id]

    def outgoing(self, node_id: str) -> List[Connection]:
        return [c for c in self._connections if c.from_node == node_id]

    def has_outgoing(self, node_id: str) -> bool:
        return any(c.from_node == node_id for c in self._connections)

    def mandatory_connections(self) -> List[Connection]:
        return [c for c in self._connections if c.mandatory]

    def is_ready(self, node_id: str, current_inputs: Dict[str, Any]) -> bool:
        for connection in self._connections:
            if connection.to_node == node_id and connection.to_input not in current_inputs:
                return False
        return True

    def missing_inputs(self, node_id: str, current_inputs: Dict[str, Any]) -> List[str]:
        missing: List[str] = []
        for connection in self.incoming(node_id):
            if connection.to_input not in current_inputs and connection.to_input not in missing:
                missing.append(connection.to_input)
        return missing

    def map_inputs(self, from_node: str, to_node: str, output: Dict[str, Any]) -> Dict[str, Any]:
        mapped: Dict[str, Any] = {}
        for connection in self._connections:
            if connection.from_node == from_node and connection.to_node == to_node:
                mapped[connection.to_input] = output.get(connection.from_output)
        return mapped

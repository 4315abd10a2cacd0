# src/dockflow/core/graph/ports.py
"""
Descritores de porta e de dock.

Uma porta (`Port`) é um slot de dado nomeado de um nó. Um dock (`Dock`) é
um slot nomeado ao qual zero ou mais recursos compartilhados são vinculados.

Este módulo concentra também as duas regras de injeção de defaults
aplicadas pelo engine e pelos nós de ordem superior:

    - entradas: porta ausente com `required=True` e `default=None` gera
      erro sintético; caso contrário o default é injetado
    - saídas: defaults não nulos são injetados apenas para chaves ausentes,
      nunca sobrescrevendo valores retornados (mesmo falsy)

Invariantes:
    - Nomes de porta são únicos dentro de sua lista
    - O tag de tipo é apenas informativo
    - Definições legadas em string equivalem a `Port(name)`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from dockflow.core.errors import DockflowErrorPayload, missing_required_input


@dataclass(frozen=True)
class Port:
    name: str
    description: str = ""
    type: str = "string"
    default: Any = None
    required: bool = True

    def must_be_supplied(self) -> bool:
        return self.required and self.default is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "default": self.default,
            "required": self.required,
        }


@dataclass(frozen=True)
class Dock:
    """
    Slot de recursos de um nó (ou de outro recurso).

    `capability` é um tipo (classe ou Protocol `runtime_checkable`) que os
    recursos vinculados devem satisfazer; `None` aceita qualquer recurso.
    `max_connections=None` significa sem limite.
    """

    name: str
    description: str = ""
    capability: Optional[type] = None
    max_connections: Optional[int] = None

    def accepts(self, resource: Any) -> bool:
        if self.capability is None:
            return True
        return isinstance(resource, self.capability)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "capability": getattr(self.capability, "__name__", None),
            "max_connections": self.max_connections,
        }


PortDefinition = Union[Port, str, Dict[str, Any]]


def normalize_ports(definitions: Optional[Iterable[PortDefinition]]) -> List[Port]:
    """
    Normaliza definições de porta para instâncias de `Port`.

    Aceita `Port`, string (nome) ou dicionário com os campos de `Port`.

    Raises:
        ValueError: Nome de porta vazio, duplicado ou definição de tipo inválido.
    """
    ports: List[Port] = []
    seen = set()

    for item in definitions or []:
        if isinstance(item, Port):
            port = item
        elif isinstance(item, str):
            port = Port(name=item)
        elif isinstance(item, dict):
            port = Port(**item)
        else:
            raise ValueError(f"invalid port definition: {item!r}")

        if not isinstance(port.name, str) or not port.name.strip():
            raise ValueError("port name must be a non-empty string")
        if port.name in seen:
            raise ValueError(f"duplicate port name: {port.name}")

        seen.add(port.name)
        ports.append(port)

    return ports


def apply_input_defaults(
    ports: Iterable[Port],
    inputs: Dict[str, Any],
    *,
    node_id: str,
) -> Tuple[Dict[str, Any], Optional[DockflowErrorPayload]]:
    """
    Completa o buffer de entradas de um nó com os defaults das portas.

    Returns:
        Tuple: (entradas completadas, payload de erro). O payload é não nulo
        quando uma porta obrigatória sem default está ausente; nesse caso o
        corpo do nó não deve ser invocado.
    """
    merged = dict(inputs)
    for port in ports:
        if port.name in merged:
            continue
        if port.must_be_supplied():
            return merged, missing_required_input(node_id=node_id, port=port.name)
        merged[port.name] = port.default
    return merged, None


def apply_output_defaults(ports: Iterable[Port], output: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(output)
    for port in ports:
        if port.name not in result and port.default is not None:
            result[port.name] = port.default
    return result

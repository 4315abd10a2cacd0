# src/dockflow/core/context/memory.py
"""
Backends de memória do contexto de execução.

A memória guarda duas coisas, compartilhadas por toda a run (ou por várias
runs, quando o chamador reutiliza a instância):

    - histórico por nó (lista limitada de entradas dict, mais antigas descartadas)
    - um armazenamento genérico chave/valor

Implementações:
    - NoMemory       → não guarda nada (memória sem estado)
    - VolatileMemory → em processo, histórico limitado (padrão 5)
    - SessionMemory  → sobre um `SessionStore` injetado, histórico limitado
                       (padrão 20); sessão não iniciada → leituras vazias,
                       escritas ignoradas

Decisões arquiteturais:
    - Nenhum estado global: a sessão é sempre injetada
    - Entradas de histórico com chave `id` podem receber feedback
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Memory(Protocol):
    def load_node_history(self, node_id: str) -> List[Dict[str, Any]]:
        ...

    def append_node_history(self, node_id: str, entry: Dict[str, Any]) -> None:
        ...

    def set_feedback(self, node_id: str, message_id: str, feedback: Optional[str]) -> bool:
        ...

    def reset_node_history(self, node_id: str) -> None:
        ...

    def put(self, key: str, value: Any) -> None:
        ...

    def get(self, key: str) -> Any:
        ...

    def forget(self, key: str) -> None:
        ...

    def keys(self) -> List[str]:
        ...


def _set_feedback(entries: List[Dict[str, Any]], message_id: str, feedback: Optional[str]) -> bool:
    for entry in entries:
        if entry.get("id") == message_id:
            entry["feedback"] = feedback
            return True
    return False


class NoMemory:
    """Memória nula: leituras vazias, escritas descartadas."""

    def load_node_history(self, node_id: str) -> List[Dict[str, Any]]:
        return []

    def append_node_history(self, node_id: str, entry: Dict[str, Any]) -> None:
        return None

    def set_feedback(self, node_id: str, message_id: str, feedback: Optional[str]) -> bool:
        return False

    def reset_node_history(self, node_id: str) -> None:
        return None

    def put(self, key: str, value: Any) -> None:
        return None

    def get(self, key: str) -> Any:
        return None

    def forget(self, key: str) -> None:
        return None

    def keys(self) -> List[str]:
        return []


class VolatileMemory:
    """Memória em processo; o histórico de cada nó guarda as `max_history` entradas mais recentes."""

    def __init__(self, max_history: int = 5):
        if max_history < 1:
            raise ValueError("max_history must be >= 1")
        self.max_history = max_history
        self._nodes: Dict[str, List[Dict[str, Any]]] = {}
        self._data: Dict[str, Any] = {}

    def load_node_history(self, node_id: str) -> List[Dict[str, Any]]:
        return list(self._nodes.get(node_id, []))

    def append_node_history(self, node_id: str, entry: Dict[str, Any]) -> None:
        history = self._nodes.setdefault(node_id, [])
        history.append(dict(entry))
        if len(history) > self.max_history:
            del history[: len(history) - self.max_history]

    def set_feedback(self, node_id: str, message_id: str, feedback: Optional[str]) -> bool:
        return _set_feedback(self._nodes.get(node_id, []), message_id, feedback)

    def reset_node_history(self, node_id: str) -> None:
        self._nodes.pop(node_id, None)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def forget(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())


# ---------------------------------------------------------------------------
# Sessão
# ---------------------------------------------------------------------------

@runtime_checkable
class SessionStore(Protocol):
    """Armazenamento de sessão injetado em `SessionMemory`."""

    def started(self) -> bool:
        ...

    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


@dataclass
class InMemorySessionStore:
    """SessionStore em dicionário, útil para testes e hosts de processo único."""

    is_started: bool = True
    _values: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def start(self) -> None:
        self.is_started = True

    def close(self) -> None:
        self.is_started = False

    def started(self) -> bool:
        return self.is_started

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class SessionMemory:
    """Memória persistida no namespace `dockflow_memory` de um SessionStore."""

    NAMESPACE = "dockflow_memory"

    def __init__(self, session: SessionStore, max_history: int = 20):
        if max_history < 1:
            raise ValueError("max_history must be >= 1")
        self.session = session
        self.max_history = max_history

    def _state(self) -> Optional[Dict[str, Any]]:
        if not self.session.started():
            return None
        state = self.session.get(self.NAMESPACE)
        if not isinstance(state, dict):
            state = {}
        state.setdefault("nodes", {})
        state.setdefault("data", {})
        return state

    def _save(self, state: Dict[str, Any]) -> None:
        self.session.set(self.NAMESPACE, state)

    def load_node_history(self, node_id: str) -> List[Dict[str, Any]]:
        state = self._state()
        if state is None:
            return []
        return deepcopy(state["nodes"].get(node_id, []))

    def append_node_history(self, node_id: str, entry: Dict[str, Any]) -> None:
        state = self._state()
        if state is None:
            return
        history = state["nodes"].setdefault(node_id, [])
        history.append(dict(entry))
        state["nodes"][node_id] = history[-self.max_history:]
        self._save(state)

    def set_feedback(self, node_id: str, message_id: str, feedback: Optional[str]) -> bool:
        state = self._state()
        if state is None:
            return False
        updated = _set_feedback(state["nodes"].get(node_id, []), message_id, feedback)
        if updated:
            self._save(state)
        return updated

    def reset_node_history(self, node_id: str) -> None:
        state = self._state()
        if state is None:
            return
        state["nodes"].pop(node_id, None)
        self._save(state)

    def put(self, key: str, value: Any) -> None:
        state = self._state()
        if state is None:
            return
        state["data"][key] = value
        self._save(state)

    def get(self, key: str) -> Any:
        state = self._state()
        if state is None:
            return None
        return state["data"].get(key)

    def forget(self, key: str) -> None:
        state = self._state()
        if state is None:
            return
        state["data"].pop(key, None)
        self._save(state)

    def keys(self) -> List[str]:
        state = self._state()
        if state is None:
            return []
        return list(state["data"].keys())

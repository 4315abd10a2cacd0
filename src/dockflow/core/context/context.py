# src/dockflow/core/context/context.py
"""
Contexto de execução compartilhado de um flow.

Este módulo define o `ExecutionContext`, o estado de run passado a todos
os nós durante a execução, e o `SubFlowContext`, o contexto de overlay
usado por sub-flows.

O ExecutionContext reúne:
    - referência ao router do flow em execução
    - backend de memória (histórico por nó + chave/valor)
    - mapa de variáveis (vars)
    - configuração do host
    - emissor de eventos opcional
    - log estruturado de eventos e warnings por nó

Princípios fundamentais:
    - Nós interagem entre si apenas por conexões e pelo contexto
    - O tempo de vida do contexto é controlado pelo chamador
    - Logs sempre incluem `run_id` e `node_id`

Invariantes:
    - Warnings são agrupados por `node_id`
    - Um SubFlowContext nunca muta as vars do pai
    - Emitir eventos sem emissor é no-op

Limites explícitos:
    - Não executa nós
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set

from dockflow.core.config.host import HostConfiguration
from dockflow.core.config.values import ConfigValueResolver

from .memory import Memory, NoMemory

if TYPE_CHECKING:  # pragma: no cover
    from dockflow.core.engine.router import ConnectionRouter
    from dockflow.core.events.emitter import EventEmitter


@dataclass
class ExecutionContext:
    """
    Contexto canônico de uma run de flow.

    Decisões arquiteturais:
        - `router` é vinculado pelo flow no início de cada run
        - `configuration` alimenta o modo `config` da resolução de valores
        - `events` e `warnings` são estruturas simples e serializáveis
    """

    memory: Memory = field(default_factory=NoMemory)
    vars: Dict[str, Any] = field(default_factory=dict)
    configuration: HostConfiguration = field(default_factory=HostConfiguration)
    emitter: Optional["EventEmitter"] = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    router: Optional["ConnectionRouter"] = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Vars
    # -----------------------------
    def get_var(self, key: str) -> Any:
        return self.vars.get(key)

    def set_var(self, key: str, value: Any) -> None:
        self.vars[key] = value

    def forget_var(self, key: str) -> None:
        self.vars.pop(key, None)

    def list_vars(self) -> List[str]:
        return list(self.vars.keys())

    # -----------------------------
    # Memory / configuração
    # -----------------------------
    def set_memory(self, memory: Memory) -> None:
        self.memory = memory

    def resolver(self) -> ConfigValueResolver:
        return ConfigValueResolver(self.configuration)

    # -----------------------------
    # Logging, warnings & eventos
    # -----------------------------
    def log(self, *, node_id: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "node_id": node_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, node_id: str, message: str) -> None:
        if node_id not in self.warnings:
            self.warnings[node_id] = []
        self.warnings[node_id].append(message)

    def emit_event(self, event: Dict[str, Any]) -> None:
        if self.emitter is not None:
            self.emitter.emit_event(event)


class SubFlowContext(ExecutionContext):
    """
    Contexto de overlay para sub-flows.

    Leitura de vars: `extra_vars` primeiro, depois escritas locais, depois
    o pai. Escritas e remoções ficam locais; `forget_var` também oculta
    vars extras e do pai. Memória, configuração, emissor, log e warnings
    são compartilhados com o pai.
    """

    def __init__(self, parent: ExecutionContext, extra_vars: Optional[Dict[str, Any]] = None):
        super().__init__(
            memory=parent.memory,
            vars={},
            configuration=parent.configuration,
            emitter=parent.emitter,
            run_id=parent.run_id,
        )
        self.parent = parent
        self.extra_vars: Dict[str, Any] = dict(extra_vars or {})
        self._forgotten: Set[str] = set()
        self.events = parent.events
        self.warnings = parent.warnings

    def get_var(self, key: str) -> Any:
        if key in self.extra_vars:
            return self.extra_vars[key]
        if key in self.vars:
            return self.vars[key]
        if key in self._forgotten:
            return None
        return self.parent.get_var(key)

    def set_var(self, key: str, value: Any) -> None:
        self._forgotten.discard(key)
        self.vars[key] = value

    def forget_var(self, key: str) -> None:
        self.vars.pop(key, None)
        self.extra_vars.pop(key, None)
        self._forgotten.add(key)

    def list_vars(self) -> List[str]:
        names: List[str] = []
        for key in list(self.extra_vars) + list(self.vars) + self.parent.list_vars():
            if key in self._forgotten and key not in self.vars and key not in self.extra_vars:
                continue
            if key not in names:
                names.append(key)
        return names

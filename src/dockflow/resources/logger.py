# src/dockflow/resources/logger.py
"""
Recurso `logger`: registro de mensagens com escopo.

O escopo efetivo segue a configuração `scope` no contrato `{mode, value}`:

    {"mode": "fixed",   "value": "audit"} → sempre "audit"
    {"mode": "default", "value": "flow"}  → escopo do chamador, ou "flow"
    {"mode": "inherit"} / ausente         → escopo do chamador

Cada entrada é guardada em `entries` e espelhada no log estruturado do
contexto recebido (ou do contexto vinculado em `init`).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from dockflow.core.config.values import ConfigValueResolver
from dockflow.core.graph.resource import BaseResource

DEFAULT_SCOPE = "default"


@runtime_checkable
class Logger(Protocol):
    def log(self, scope: Optional[str], message: str, context: Any = None) -> bool:
        ...


class LoggerResource(BaseResource):
    type_name = "logger"
    summary = "Provides scoped structured logging to nodes and other resources."

    def __init__(self, resource_id: Optional[str] = None):
        super().__init__(resource_id)
        self.entries: List[Dict[str, Any]] = []
        self._context: Any = None

    def init(self, resources, context) -> None:
        super().init(resources, context)
        self._context = context

    def effective_scope(self, scope: Optional[str]) -> str:
        fragment = self.config.get("scope")
        if fragment is None:
            return scope or DEFAULT_SCOPE
        resolver = self._resolver or ConfigValueResolver()
        return resolver.resolve(fragment, scope or None) or DEFAULT_SCOPE

    def log(self, scope: Optional[str], message: str, context: Any = None) -> bool:
        effective = self.effective_scope(scope)
        entry = {
            "scope": effective,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self.entries.append(entry)

        target = context if context is not None else self._context
        if target is not None:
            target.log(node_id=self.id, level="info", message=message, scope=effective)
        return True

    def scopes(self) -> List[str]:
        seen: List[str] = []
        for entry in self.entries:
            if entry["scope"] not in seen:
                seen.append(entry["scope"])
        return seen

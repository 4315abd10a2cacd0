"""
Dockflow — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Dockflow.

Objetivo:
- Permitir que builder, registry e resolvers levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para DockflowErrorPayload
- Evitar ValueError/RuntimeError genéricos em fronteiras críticas

Regras:
- Exceções devem carregar apenas dados estruturados (serializáveis) em `details`.
- Falhas dentro do corpo de um nó nunca são propagadas pelo engine;
  estas exceções pertencem ao build, à configuração e ao uso da API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import COMPONENT_NOT_FOUND, LOAD_ERROR, DockflowErrorPayload


@dataclass(frozen=True)
class DockflowException(Exception):
    """Base class para exceções internas do Dockflow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Load / Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadError(DockflowException):
    """Descrição de flow malformada ou inconsistente."""

    code = LOAD_ERROR

    def to_payload(self) -> DockflowErrorPayload:
        return DockflowErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


@dataclass(frozen=True)
class ComponentNotFoundError(LoadError):
    """Nenhuma fábrica registrada para o par (kind, type_name)."""

    code = COMPONENT_NOT_FOUND


@dataclass(frozen=True)
class DuplicateComponentError(DockflowException):
    """Tentativa de registrar duas fábricas com o mesmo (kind, type_name)."""


# ---------------------------------------------------------------------------
# Configuração / Contexto / Identidade
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigResolutionError(DockflowException):
    """Fragmento `{mode, value}` não pôde ser resolvido."""


@dataclass(frozen=True)
class FlowContextError(DockflowException):
    """Operação de flow exige um ExecutionContext vinculado."""


@dataclass(frozen=True)
class NodeIdentityError(DockflowException):
    """Identidade de nó ou recurso atribuída mais de uma vez."""

"""
Dockflow — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Dockflow.
Erros de execução de flows fazem parte do contrato operacional do engine
e devem ser:

- explícitos
- serializáveis
- rastreáveis por nó

A saída pública de um nó com falha continua sendo o mapa plano
`{"error": <mensagem>}`; o payload estruturado acompanha o registro do nó
(`NodeRecord`) e os erros de load do flow.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DockflowErrorPayload:
    """
    Payload canônico de erro do Dockflow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Load / Build
LOAD_ERROR = "LOAD_ERROR"
COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"

# Execução de nó
MISSING_REQUIRED_INPUT = "MISSING_REQUIRED_INPUT"
NODE_EXECUTION_FAULT = "NODE_EXECUTION_FAULT"

# Run
RUN_ITERATION_EXCEEDED = "RUN_ITERATION_EXCEEDED"
RUN_STALLED = "RUN_STALLED"

ITERATION_LIMIT_MESSAGE = "Flow execution exceeded safe iteration limit"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def missing_required_input(*, node_id: str, port: str) -> DockflowErrorPayload:
    return DockflowErrorPayload(
        type=MISSING_REQUIRED_INPUT,
        message=f"missing required input '{port}' for node '{node_id}'",
        details={"node_id": node_id, "port": port},
        hint="Conecte a porta, declare um input inicial ou defina um default na porta.",
    )


def node_execution_fault(*, node_id: str, exc: BaseException) -> DockflowErrorPayload:
    return DockflowErrorPayload(
        type=NODE_EXECUTION_FAULT,
        message=str(exc) or exc.__class__.__name__,
        details={"node_id": node_id, "exception_class": exc.__class__.__name__},
        hint="Verifique o log estruturado da run e os inputs entregues ao nó.",
    )


def node_reported_error(*, node_id: str, message: Any) -> DockflowErrorPayload:
    return DockflowErrorPayload(
        type=NODE_EXECUTION_FAULT,
        message=str(message),
        details={"node_id": node_id, "reported_by_node": True},
    )


def run_iteration_exceeded(*, max_iterations: int, executed: int) -> DockflowErrorPayload:
    return DockflowErrorPayload(
        type=RUN_ITERATION_EXCEEDED,
        message=ITERATION_LIMIT_MESSAGE,
        details={"max_iterations": max_iterations, "executions": executed},
        hint="Verifique ciclos no grafo ou aumente `engine.max_iterations`.",
    )


def run_stalled(*, remaining: Dict[str, Any]) -> DockflowErrorPayload:
    return DockflowErrorPayload(
        type=RUN_STALLED,
        message="Flow stalled with unexecuted nodes",
        details={"remaining": remaining},
        hint="Ramos não alcançados são esperados em grafos dependentes de dados.",
    )


def load_error(
    *,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    code: str = LOAD_ERROR,
    hint: Optional[str] = None,
) -> DockflowErrorPayload:
    return DockflowErrorPayload(
        type=code,
        message=message,
        details=dict(details or {}),
        hint=hint or "Revise a descrição do flow e os componentes registrados.",
    )


def fatal_result(payload: DockflowErrorPayload) -> Dict[str, Any]:
    """Resultado sintético fatal, distinguível de saídas normais por `error_type`."""
    return {"error": payload.message, "error_type": payload.type}

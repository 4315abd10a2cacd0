# tests/nodes/test_log_node.py
"""
Testes do nó `log_message` e do recurso `logger`.

Os testes asseguram que:
- mensagens chegam a todos os loggers vinculados ao dock `logger`
- o escopo efetivo segue a config `scope` no contrato `{mode, value}`
- cada entrada é espelhada no log estruturado do contexto
- sem logger vinculado, o nó degrada para `logged: False`
"""

import pytest

try:
    from dockflow.resources.logger import Logger, LoggerResource
except Exception as e:  # noqa: BLE001
    LoggerResource = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing logger. Implement:\n"
            "- src/dockflow/resources/logger.py (LoggerResource)\n"
            "- src/dockflow/nodes/log.py (LogMessageNode)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _flow(make_flow, *, scope_config=None, node_inputs=None):
    resource = {"id": "audit_log", "type": "logger"}
    if scope_config is not None:
        resource["config"] = {"scope": scope_config}
    return make_flow(
        {
            "nodes": [{"id": "say", "type": "log_message", "inputs": node_inputs or {}}],
            "resources": [resource],
            "docks": {"say": {"logger": ["audit_log"]}},
        }
    )


def test_log_message_reaches_docked_logger(make_flow, ctx):
    """
    Verifica a entrega de uma mensagem ao logger vinculado.

    Invariantes:
        - A entrada é guardada em `entries` com o escopo do chamador
        - O log do contexto recebe a mensagem com `node_id` do recurso
    """
    _require_imports()
    flow = _flow(make_flow, node_inputs={"scope": "billing", "message": "charged"})

    assert flow.run() == [{"logged": True}]

    logger = flow.resources["audit_log"]
    assert isinstance(logger, Logger)
    assert [(e["scope"], e["message"]) for e in logger.entries] == [("billing", "charged")]

    mirrored = [e for e in ctx.events if e["node_id"] == "audit_log"]
    assert mirrored[0]["message"] == "charged"
    assert mirrored[0]["scope"] == "billing"


@pytest.mark.parametrize(
    "scope_config, caller_scope, expected",
    [
        ({"mode": "fixed", "value": "audit"}, "billing", "audit"),
        ({"mode": "default", "value": "flow"}, "billing", "billing"),
        ({"mode": "default", "value": "flow"}, None, "flow"),
        ({"mode": "inherit"}, "billing", "billing"),
        (None, None, "default"),
    ],
)
def test_effective_scope(scope_config, caller_scope, expected):
    _require_imports()
    logger = LoggerResource("log")
    logger.set_config({} if scope_config is None else {"scope": scope_config})
    assert logger.effective_scope(caller_scope) == expected


def test_default_scope_port_is_used_when_not_connected(make_flow):
    _require_imports()
    flow = _flow(make_flow, node_inputs={"message": "hi"})
    flow.run()
    assert flow.resources["audit_log"].scopes() == ["default"]


def test_log_message_without_logger_is_noop(make_flow):
    _require_imports()
    flow = make_flow({"nodes": [{"id": "say", "type": "log_message", "inputs": {"message": "lost"}}]})
    assert flow.run() == [{"logged": False}]

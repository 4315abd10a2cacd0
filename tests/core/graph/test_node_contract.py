# tests/core/graph/test_node_contract.py
"""
Testes do contrato de Nó (Executable / Node / BaseNode).

Este módulo valida o contrato estrutural de nós: conformidade por duck
typing, identidade atribuída uma única vez, resolução de configuração sob
demanda e a invocação de um Executable mantido como valor.

Decisões arquiteturais:
    - Nós não precisam herdar de BaseNode
    - A verificação em runtime (`@runtime_checkable`) é suportada

Limites explícitos:
    - Não valida agendamento nem propagação (ver testes do engine)
"""

import pytest

try:
    from dockflow.core.config.values import ConfigValueResolver
    from dockflow.core.exceptions import NodeIdentityError
    from dockflow.core.graph.node import BaseNode, Executable, Node, invoke_executable
    from dockflow.core.graph.ports import Port
except Exception as e:  # noqa: BLE001
    BaseNode = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing node contract. Implement:\n"
            "- src/dockflow/core/graph/node.py (Executable, Node, BaseNode, invoke_executable)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _adder_cls():
    class _Adder(BaseNode):
        type_name = "adder"
        summary = "Soma a e b."

        def input_ports(self):
            return [Port(name="a"), Port(name="b", default=1)]

        def output_ports(self):
            return [Port(name="sum"), Port(name="note", default="ok")]

        def execute(self, inputs, resources, context):
            return {"sum": inputs["a"] + inputs["b"]}

    return _Adder


def test_duck_typed_node_conforms(DummyNode):
    """Um objeto sem herança satisfaz os protocolos Node e Executable."""
    _require_imports()
    node = DummyNode("n1", inputs=["x"])
    assert isinstance(node, Node)
    assert isinstance(node, Executable)
    assert not isinstance(object(), Executable)


def test_identity_assigned_once():
    """
    Verifica a imutabilidade da identidade de um nó.

    Invariantes:
        - A primeira atribuição é aceita
        - Uma segunda atribuição levanta NodeIdentityError
        - Ids vazios são rejeitados
    """
    _require_imports()
    node = _adder_cls()()
    assert node.id is None

    node.id = "sum-1"
    with pytest.raises(NodeIdentityError):
        node.id = "sum-2"
    assert node.id == "sum-1"

    with pytest.raises(NodeIdentityError):
        _adder_cls()("  ")


def test_setting_resolves_mode_fragments_lazily():
    """`setting` resolve fragmentos no momento da chamada, com valor do chamador."""
    _require_imports()
    node = _adder_cls()("n")
    resolver = ConfigValueResolver({"http": {"timeout": 3}}, environ={"LANG_CODE": "pt"})
    node.set_config(
        {
            "lang": {"mode": "env", "value": "LANG_CODE"},
            "timeout": {"mode": "config", "section": "http", "key": "timeout"},
            "greeting": {"mode": "default", "value": "oi"},
            "plain": 7,
        },
        resolver,
    )

    assert node.setting("lang") == "pt"
    assert node.setting("timeout") == 3
    assert node.setting("greeting") == "oi"
    assert node.setting("greeting", supplied="olá") == "olá"
    assert node.setting("plain") == 7
    assert node.setting("absent", supplied="s") == "s"
    assert node.setting("absent", default="d") == "d"


def test_error_and_description():
    _require_imports()
    node = _adder_cls()("sum-1")

    assert node.error("boom") == {"error": "adder 'sum-1': boom"}
    desc = node.description()
    assert desc["type"] == "adder"
    assert desc["description"] == "Soma a e b."
    assert [p["name"] for p in desc["inputs"]] == ["a", "b"]
    assert desc["docks"] == []


def test_invoke_executable_applies_port_rules(ctx):
    """
    Verifica a invocação de um nó mantido como valor.

    Invariantes:
        - Defaults de entrada são injetados antes do corpo
        - Entrada obrigatória ausente devolve `{"error"}` sem chamar o corpo
        - Defaults de saída completam chaves ausentes
    """
    _require_imports()
    node = _adder_cls()("sum-1")

    assert invoke_executable(node, {"a": 2}, ctx) == {"sum": 3, "note": "ok"}
    assert invoke_executable(node, {"b": 2}, ctx) == {
        "error": "missing required input 'a' for node 'sum-1'"
    }


def test_invoke_executable_rejects_non_dict_result(ctx):
    _require_imports()

    class _Bad:
        def execute(self, inputs, resources, context):
            return ["not", "a", "dict"]

    with pytest.raises(TypeError):
        invoke_executable(_Bad(), {}, ctx)


def test_invoke_executable_propagates_exceptions(ctx, DummyNode):
    """Exceções do corpo chegam ao chamador (o Loop as converte em erro)."""
    _require_imports()
    node = DummyNode("boom", raises=RuntimeError("kaput"))
    with pytest.raises(RuntimeError, match="kaput"):
        invoke_executable(node, {}, ctx)

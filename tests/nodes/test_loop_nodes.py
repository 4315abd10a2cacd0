# tests/nodes/test_loop_nodes.py
"""
Testes dos nós de iteração `loop` e `foreach`.

Os testes asseguram que:
- o nó mantido (`$node`) é invocado uma vez por iteração
- `inputMap` resolve `$index`, `$item`, `$key` e `$context_<nome>`
- chaves implícitas (`index`, `item`, `key`) completam entradas não mapeadas
- a falha de uma iteração não interrompe as demais
- entradas inválidas produzem `{"error": ...}` sem exceção

Limites explícitos:
    - Não valida o agendador do flow externo
"""

import pytest

try:
    from dockflow.nodes.control.loop import map_iteration_inputs
except Exception as e:  # noqa: BLE001
    map_iteration_inputs = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loop nodes. Implement:\n"
            "- src/dockflow/nodes/control/loop.py (LoopNode, ForEachNode)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _loop_flow(make_flow, **inputs):
    return make_flow({"nodes": [{"id": "loop", "type": "loop", "inputs": inputs}]})


class _Flaky:
    """Executable que falha na iteração de índice 1."""

    def execute(self, inputs, resources, context):
        if inputs.get("index") == 1:
            raise ValueError("iteration 1 failed")
        return {"ok": inputs.get("index")}


def test_loop_with_echo_returns_one_result_per_iteration(make_flow):
    """
    Verifica o cenário canônico: loop de 3 iterações sobre um `echo`.

    Invariantes:
        - `results` tem exatamente `count` itens, em ordem
        - `index` é injetado implicitamente
    """
    _require_imports()
    flow = _loop_flow(make_flow, count=3, node={"$node": {"type": "echo"}})

    assert flow.load_errors == []
    assert flow.run() == [{"results": [{"index": 0}, {"index": 1}, {"index": 2}]}]


def test_loop_input_map_placeholders_and_context_vars(make_flow, ctx):
    _require_imports()
    ctx.set_var("context_user", "ana")
    flow = _loop_flow(
        make_flow,
        count=2,
        node={"$node": {"type": "echo"}},
        inputMap={"position": "$index", "who": "$context_user", "tag": "literal"},
    )

    results = flow.run()[0]["results"]

    assert results == [
        {"position": 0, "who": "ana", "tag": "literal", "index": 0},
        {"position": 1, "who": "ana", "tag": "literal", "index": 1},
    ]


def test_loop_body_receives_port_rules(make_flow):
    """O corpo mantido segue as regras de portas: obrigatória ausente vira erro."""
    _require_imports()
    flow = _loop_flow(make_flow, count=1, node={"$node": {"type": "string_reverse"}})
    assert flow.run() == [{"results": [{"reversed": ""}]}]

    flow = _loop_flow(make_flow, count=1, node={"$node": {"type": "to_array"}})
    assert flow.run() == [{"results": [{"error": "missing required input 'json' for node 'to_array'"}]}]


def test_loop_iteration_failure_is_isolated(make_flow):
    _require_imports()
    flow = _loop_flow(make_flow, count=3, node=_Flaky())

    assert flow.run() == [
        {"results": [{"ok": 0}, {"error": "iteration 1 failed"}, {"ok": 2}]}
    ]


@pytest.mark.parametrize("count", [-1, 1001, "3", True, None])
def test_loop_rejects_invalid_count(make_flow, count):
    """`count` precisa ser inteiro (não bool) entre 0 e o limite."""
    _require_imports()
    result = _loop_flow(make_flow, count=count, node={"$node": {"type": "echo"}}).run()

    assert result == [{"error": "loop 'loop': \"count\" must be an integer between 0 and 1000"}]


def test_loop_rejects_non_executable_node(make_flow):
    _require_imports()
    result = _loop_flow(make_flow, count=1, node="not a node").run()
    assert result == [{"error": "loop 'loop': \"node\" must be an executable node"}]


def test_zero_iterations_yield_empty_results(make_flow):
    _require_imports()
    assert _loop_flow(make_flow, count=0, node={"$node": {"type": "echo"}}).run() == [{"results": []}]


def test_foreach_over_list_and_mapping(make_flow):
    """
    Verifica o `foreach` sobre listas e dicionários.

    Invariantes:
        - Em listas, `key` é a posição; em dicionários, a chave
        - `$item` e `$key` resolvem pelo `inputMap`
    """
    _require_imports()
    flow = make_flow(
        {
            "nodes": [
                {
                    "id": "each",
                    "type": "foreach",
                    "inputs": {
                        "items": ["ab", "cd"],
                        "node": {"$node": {"type": "string_reverse"}},
                        "inputMap": {"text": "$item"},
                    },
                },
                {
                    "id": "each_map",
                    "type": "foreach",
                    "inputs": {
                        "items": {"x": 1, "y": 2},
                        "node": {"$node": {"type": "echo"}},
                        "inputMap": {"name": "$key"},
                    },
                },
            ]
        }
    )

    out = flow.run()

    assert out[0] == {"results": [{"reversed": "ba"}, {"reversed": "dc"}]}
    assert out[1] == {
        "results": [
            {"name": "x", "item": 1, "key": "x", "index": 0},
            {"name": "y", "item": 2, "key": "y", "index": 1},
        ]
    }


def test_foreach_strips_flow_key_from_implicit_item(make_flow):
    _require_imports()
    flow = make_flow(
        {
            "nodes": [
                {
                    "id": "each",
                    "type": "foreach",
                    "inputs": {
                        "items": [{"flow": "sneaky", "v": 1}],
                        "node": {"$node": {"type": "echo"}},
                    },
                }
            ]
        }
    )

    assert flow.run() == [{"results": [{"item": {"v": 1}, "key": 0, "index": 0}]}]


def test_foreach_rejects_scalar_items(make_flow):
    _require_imports()
    flow = make_flow(
        {"nodes": [{"id": "each", "type": "foreach", "inputs": {"items": 5, "node": {"$node": {"type": "echo"}}}}]}
    )
    assert flow.run() == [{"error": "foreach 'each': \"items\" must be a list or a mapping"}]


def test_map_iteration_inputs_passes_unknown_values_literally(ctx):
    _require_imports()
    ctx.set_var("context_lang", "pt")
    mapped = map_iteration_inputs(
        {"a": "$item", "b": "$context_lang", "c": 42, "d": "$unknown"},
        ctx,
        {"$item": "x"},
    )
    assert mapped == {"a": "x", "b": "pt", "c": 42, "d": "$unknown"}

# tests/nodes/test_data_nodes.py
"""
Testes dos nós de dados (`to_array`, `array_get`, `array_set`, `string_reverse`)
e dos auxiliares de caminho pontuado.
"""

import pytest

try:
    from dockflow.nodes.data import (
        ArrayGetNode,
        ArraySetNode,
        StringReverseNode,
        ToArrayNode,
        get_path,
        set_path,
    )
except Exception as e:  # noqa: BLE001
    ToArrayNode = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing data nodes. Implement:\n"
            "- src/dockflow/nodes/data.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


DOC = {"user": {"profile": {"name": "ana"}, "tags": ["a", "b"]}}


def test_get_path_traverses_dicts_and_list_indexes():
    _require_imports()
    assert get_path(DOC, "user.profile.name") == "ana"
    assert get_path(DOC, "user.tags.1") == "b"
    assert get_path(DOC, "user.tags.9") is not None
    assert get_path(DOC, "user.tags.9") is get_path(DOC, "user.nope")


def test_set_path_does_not_mutate_input():
    """`set_path` devolve cópia e cria dicionários intermediários."""
    _require_imports()
    out = set_path(DOC, "user.profile.age", 30)
    created = set_path({}, "a.b.c", 1)

    assert out["user"]["profile"] == {"name": "ana", "age": 30}
    assert "age" not in DOC["user"]["profile"]
    assert created == {"a": {"b": {"c": 1}}}


def test_to_array_parses_str_and_bytes(ctx):
    _require_imports()
    node = ToArrayNode("parse")

    assert node.execute({"json": '{"a": [1, 2]}'}, {}, ctx) == {"array": {"a": [1, 2]}}
    assert node.execute({"json": b"[1, 2]"}, {}, ctx) == {"array": [1, 2]}
    assert node.execute({"json": "{not json"}, {}, ctx)["error"].startswith("to_array 'parse': invalid JSON")
    assert node.execute({"json": 5}, {}, ctx) == {"error": "to_array 'parse': \"json\" must be a string"}


def test_array_get_and_set(ctx):
    _require_imports()
    getter = ArrayGetNode("get")
    setter = ArraySetNode("set")

    assert getter.execute({"array": DOC, "path": "user.profile.name"}, {}, ctx) == {"value": "ana"}
    assert getter.execute({"array": DOC, "path": "user.x"}, {}, ctx) == {
        "error": "array_get 'get': path not found: user.x"
    }
    assert getter.execute({"array": "text", "path": "a"}, {}, ctx)["error"]
    assert setter.execute({"array": {"a": 1}, "path": "b", "value": 2}, {}, ctx) == {"array": {"a": 1, "b": 2}}
    assert setter.execute({"array": [1], "path": "b", "value": 2}, {}, ctx)["error"]


def test_json_pipeline_in_a_flow(make_flow):
    """`to_array` → `array_get` → `string_reverse`, com caminho fixo como entrada inicial."""
    _require_imports()
    flow = make_flow(
        {
            "nodes": [
                {"id": "parse", "type": "to_array"},
                {"id": "pick", "type": "array_get", "inputs": {"path": "user.profile.name"}},
                {"id": "rev", "type": "string_reverse"},
            ],
            "connections": [
                {"from": "__input__", "output": "json", "to": "parse", "input": "json"},
                {"from": "parse", "output": "array", "to": "pick", "input": "array"},
                {"from": "pick", "output": "value", "to": "rev", "input": "text"},
            ],
        }
    )

    assert flow.run({"json": '{"user": {"profile": {"name": "dockflow"}}}'}) == [{"reversed": "wolfkcod"}]


def test_string_reverse_defaults_to_empty(ctx):
    _require_imports()
    assert StringReverseNode("r").execute({"text": None}, {}, ctx) == {"reversed": ""}

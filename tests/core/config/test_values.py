# tests/core/config/test_values.py
"""
Testes da resolução de valores `{mode, value}` (ConfigValueResolver).

Os testes asseguram que cada modo suportado produz o valor esperado,
que escalares e dicionários comuns passam inalterados e que modos
desconhecidos e lookups `config` inválidos são erros explícitos.

Decisões arquiteturais:
    - Ambiente e gerador aleatório são injetados: testes determinísticos
"""

import random
import uuid

import pytest

try:
    from dockflow.core.config.host import HostConfiguration
    from dockflow.core.config.values import ConfigValueResolver
    from dockflow.core.exceptions import ConfigResolutionError
except Exception as e:  # noqa: BLE001
    ConfigValueResolver = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing ConfigValueResolver. Implement:\n"
            "- src/dockflow/core/config/values.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.fixture
def resolver(host_config):
    return ConfigValueResolver(
        host_config,
        environ={"API_TOKEN": "secret", "EMPTY": ""},
        rng=random.Random(7),
    )


def test_scalars_and_plain_dicts_pass_through(resolver):
    """Valores sem chave `mode` não são interpretados."""
    _require_imports()
    assert resolver.resolve(42) == 42
    assert resolver.resolve("text") == "text"
    assert resolver.resolve(None) is None
    assert resolver.resolve({"value": 1}) == {"value": 1}


def test_fixed_default_and_inherit(resolver):
    """
    Verifica os modos que dependem (ou não) do valor do chamador.

    Invariantes:
        - fixed ignora o valor do chamador
        - default usa o valor do chamador quando não nulo
        - inherit devolve exatamente o valor do chamador
    """
    _require_imports()
    assert resolver.resolve({"mode": "fixed", "value": "a"}, supplied="b") == "a"
    assert resolver.resolve({"mode": "default", "value": "a"}) == "a"
    assert resolver.resolve({"mode": "default", "value": "a"}, supplied="b") == "b"
    assert resolver.resolve({"mode": "inherit"}, supplied="b") == "b"
    assert resolver.resolve({"mode": "inherit"}) is None


def test_env_mode(resolver):
    """Variável ausente ou vazia resolve para None."""
    _require_imports()
    assert resolver.resolve({"mode": "env", "value": "API_TOKEN"}) == "secret"
    assert resolver.resolve({"mode": "env", "value": "EMPTY"}) is None
    assert resolver.resolve({"mode": "env", "value": "NOPE"}) is None


def test_config_mode_lookup_and_errors(resolver):
    """
    Verifica o lookup `section`/`key` na configuração do host.

    Invariantes:
        - seção e chave existentes devolvem o valor
        - seção, chave ou parâmetros ausentes levantam ConfigResolutionError
    """
    _require_imports()
    assert resolver.resolve({"mode": "config", "section": "openai", "key": "model"}) == "gpt-x"

    with pytest.raises(ConfigResolutionError):
        resolver.resolve({"mode": "config", "section": "openai"})
    with pytest.raises(ConfigResolutionError):
        resolver.resolve({"mode": "config", "section": "nope", "key": "model"})
    with pytest.raises(ConfigResolutionError):
        resolver.resolve({"mode": "config", "section": "openai", "key": "nope"})


def test_random_and_uuid(resolver):
    """random escolhe da lista (None para lista vazia); uuid gera UUID4 novo."""
    _require_imports()
    options = ["a", "b", "c"]
    picks = {resolver.resolve({"mode": "random", "value": options}) for _ in range(30)}
    assert picks <= set(options)
    assert resolver.resolve({"mode": "random", "value": []}) is None

    first = resolver.resolve({"mode": "uuid"})
    second = resolver.resolve({"mode": "uuid"})
    assert first != second
    assert uuid.UUID(first).version == 4


def test_unknown_mode_raises(resolver):
    """Modo desconhecido nunca cai em fallback silencioso."""
    _require_imports()
    with pytest.raises(ConfigResolutionError) as exc_info:
        resolver.resolve({"mode": "sometimes", "value": 1})
    assert exc_info.value.details["mode"] == "sometimes"


def test_resolve_mapping_and_dict_configuration():
    """`resolve_mapping` resolve cada valor; dict cru é aceito como configuração."""
    _require_imports()
    resolver = ConfigValueResolver({"db": {"host": "localhost"}}, environ={})
    out = resolver.resolve_mapping(
        {
            "host": {"mode": "config", "section": "db", "key": "host"},
            "port": 5432,
            "lang": {"mode": "default", "value": "pt"},
        }
    )
    assert out == {"host": "localhost", "port": 5432, "lang": "pt"}
    assert isinstance(resolver.configuration, HostConfiguration)

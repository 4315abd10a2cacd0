# tests/conftest.py
"""
Fixtures compartilhados para testes do Dockflow.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração de host mínima e determinística
- contexto de execução controlado (ExecutionContext)
- registry já populado com os componentes embutidos
- nós dummy para testes estruturais do engine

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - Nós dummy utilizam duck typing em vez de herança

Invariantes:
    - Nenhuma fixture realiza I/O de rede
    - Nenhuma fixture depende de variáveis de ambiente

Este módulo existe como infraestrutura de teste e não
como validação funcional do engine.
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def host_defaults_yaml() -> str:
    """YAML de defaults do host, no formato de `config.defaults.yaml`."""
    return """\
engine:
  max_iterations: 1000
  strict_load: false
  propagate_missing_outputs: false
http:
  timeout: 5
  retries: [1, 2, 4]
"""


@pytest.fixture
def host_local_yaml() -> str:
    """Overrides locais: só chaves alteradas."""
    return """\
engine:
  strict_load: true
http:
  retries: [10]
"""


@pytest.fixture
def host_config():
    from dockflow.core.config.host import HostConfiguration

    return HostConfiguration(
        data={
            "engine": {"max_iterations": 1000},
            "openai": {"model": "gpt-x", "temperature": 0.2},
        }
    )


# =====================================================
# Runtime fixtures
# =====================================================

@pytest.fixture
def ctx(host_config):
    """
    ExecutionContext determinístico para testes.

    Decisões arquiteturais:
        - `run_id` fixo para asserts sobre o log estruturado
        - Memória padrão (NoMemory): runs sem estado entre si
    """
    from dockflow.core.context.context import ExecutionContext

    return ExecutionContext(run_id="run-test-001", configuration=host_config)


@pytest.fixture
def registry():
    from dockflow.bootstrap import default_registry

    return default_registry()


@pytest.fixture
def make_flow(registry, ctx):
    """Factory: constrói um Flow a partir de uma descrição, vinculado a `ctx`."""
    from dockflow.bootstrap import build_flow

    def _make(description, **kwargs):
        kwargs.setdefault("registry", registry)
        kwargs.setdefault("context", ctx)
        return build_flow(description, **kwargs)

    return _make


@pytest.fixture
def DummyNode():
    """
    Fixture factory que fornece uma implementação mínima e duck-typed de nó.

    A classe retornada:
    - declara portas a partir de listas de nomes ou de `Port`s
    - conta invocações em `calls` e guarda as entradas recebidas
    - devolve `output` fixo (ou as próprias entradas) ou levanta `raises`

    Invariantes:
        - Não executa I/O
        - Não depende de config nem de contexto além do recebido

    Returns:
        type: Classe _DummyNode instanciável pelos testes.
    """
    from dockflow.core.graph.ports import normalize_ports

    class _DummyNode:
        type_name = "dummy"

        def __init__(self, node_id, *, inputs=(), outputs=(), output=None, raises=None):
            self.id = node_id
            self._inputs = normalize_ports(inputs)
            self._outputs = normalize_ports(outputs)
            self.output = output
            self.raises = raises
            self.calls = 0
            self.received = []

        def input_ports(self):
            return list(self._inputs)

        def output_ports(self):
            return list(self._outputs)

        def dock_ports(self):
            return []

        def set_config(self, config, resolver=None):
            self.config = config

        def description(self):
            return {"type": self.type_name}

        def execute(self, inputs, resources, context):
            self.calls += 1
            self.received.append(dict(inputs))
            if self.raises is not None:
                raise self.raises
            if self.output is None:
                return dict(inputs)
            return dict(self.output)

    return _DummyNode

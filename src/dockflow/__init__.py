# src/dockflow/__init__.py
"""
Dockflow — engine declarativo de dataflow com portas tipadas e docking de recursos.

Este pacote raiz define o namespace público do Dockflow, um engine de
execução de grafos de nós conectados por portas nomeadas, executados sobre
um contexto compartilhado de run.

Princípios centrais:
    - O flow é um grafo explícito de nós, conexões, recursos e docks
    - A prontidão de cada nó é avaliada a partir dos dados efetivamente bufferizados
    - Falhas de nó são convertidas em saídas `error`, nunca abortam a run
    - Resultados parciais são preferíveis a falhas totais

Arquitetura em alto nível:
    - core.config   → configuração do host e resolução de valores `{mode, value}`
    - core.graph    → portas, docks, contratos de nó/recurso e registry de componentes
    - core.engine   → router de conexões, docking, builder e engine de execução
    - core.context  → contexto de execução, overlay de sub-flow e memória
    - core.events   → emissão de eventos de progresso
    - nodes         → nós embutidos (controle, core, dados, http, log)
    - resources     → recursos embutidos (logger, valores estáticos)

Limites explícitos:
    - Não executa flows distribuídos ou multi-processo
    - Não persiste estado de runs em andamento
    - Não contém edição visual nem autorização
"""

from .bootstrap import build_flow, default_registry, register_builtins

__all__ = ["build_flow", "default_registry", "register_builtins"]

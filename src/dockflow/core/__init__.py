# src/dockflow/core/__init__.py
"""
Core do Dockflow.

Este pacote contém a implementação canônica do engine de dataflow,
reunindo as responsabilidades essenciais para construir, conectar e
executar flows de nós.

O core é projetado para ser:
    - determinístico (ordem de declaração, não ordem topológica)
    - tolerante a falhas parciais
    - testável de forma isolada
    - orientado a contratos explícitos (portas, docks, Executable)

Componentes principais:
    - config   → configuração do host, deep-merge e resolução `{mode, value}`
    - graph    → portas, docks, contratos de nó/recurso e registry
    - engine   → router, docking, builder e execução iterativa por passes
    - context  → contexto de execução, overlay de sub-flow e memória
    - events   → emissores de eventos de progresso

Princípios fundamentais:
    - Erros nunca atravessam a fronteira de um nó
    - Nenhuma decisão silenciosa: políticas de load e propagação são configuráveis
    - Estado de run (buffers, registros) pertence à run, não ao grafo

Limites explícitos:
    - Não define nós de domínio além dos utilitários embutidos
    - Não persiste estado de execução
    - Não executa de forma distribuída
"""

# src/dockflow/nodes/__init__.py
"""
Nós embutidos do Dockflow.

Grupos:
    - control → loop, foreach, subflow, noaction, if, switch, conditional_pass
    - core    → contexto, configuração, teste, mensagens
    - data    → JSON e caminhos pontuados
    - http    → GET via requests
    - log     → mensagens para recursos `logger`
"""

from .control import CONTROL_NODES
from .core import CORE_NODES
from .data import DATA_NODES
from .http import HttpGetNode
from .log import LogMessageNode

BUILTIN_NODES = CONTROL_NODES + CORE_NODES + DATA_NODES + [HttpGetNode, LogMessageNode]

__all__ = ["BUILTIN_NODES"]

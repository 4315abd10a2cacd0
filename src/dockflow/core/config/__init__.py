# src/dockflow/core/config/__init__.py

"""
Camada de configuração do Dockflow.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar e consultar a configuração do host, e por resolver os fragmentos
de configuração `{mode, value}` usados por nós e recursos.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Acesso por seção à configuração do host (`HostConfiguration`)
    - Resolução uniforme de valores de configuração (`ConfigValueResolver`)

Princípios fundamentais:
    - Configuração não contém lógica de execução
    - Overrides são sempre explícitos
    - Modos desconhecidos são erro, nunca fallback silencioso

Limites explícitos:
    - Não executa flows
    - Não interage com o engine diretamente
"""

from .host import HostConfiguration
from .loader import load_config
from .values import ConfigValueResolver

__all__ = ["HostConfiguration", "ConfigValueResolver", "load_config"]

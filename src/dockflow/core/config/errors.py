# src/dockflow/core/config/errors.py
"""
Exceções da camada de configuração do host.

As exceções aqui definidas representam falhas estruturais ao carregar ou
mesclar a configuração do host (arquivos YAML/JSON). Falhas na resolução
de fragmentos `{mode, value}` usam `ConfigResolutionError`, definida em
`dockflow.core.exceptions`, por pertencerem ao contrato de nós e recursos.

Invariantes:
    - Todas as exceções de carregamento herdam de `ConfigError`
    - Nenhuma exceção representa falha de execução de nó
"""


class ConfigError(Exception):
    """
    Exceção base para erros de carregamento da configuração do host.

    Permite captura genérica de falhas estruturais de configuração,
    distintas de falhas de build ou de execução de flows.
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) inexistente.

    O arquivo de defaults é obrigatório; o override local não é.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada pelo loader.

    Formatos aceitos: YAML (.yaml, .yml) e JSON (.json).
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos entre base e override durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"max_iterations": 1000}}
        - override: {"engine": "fast"}
    """

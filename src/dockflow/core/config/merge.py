# src/dockflow/core/config/merge.py
"""
Deep-merge de configuração do host.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → ConfigTypeConflictError

O merge é puramente funcional: nenhum input é mutado.
"""

from copy import deepcopy
from typing import Any, Dict, List

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `override` sobre `base`, produzindo um novo dicionário.

    Chaves ausentes no override são preservadas; `None` no override é
    tratado como sobrescrita explícita de qualquer tipo.

    Args:
        base (Dict[str, Any]): Configuração base (defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se uma chave mudar de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge(base, override, path=[])


def _merge(base: Dict[str, Any], override: Dict[str, Any], path: List[str]) -> Dict[str, Any]:
    result: Dict[str, Any] = deepcopy(base)

    for key, incoming in override.items():
        if key not in result or result[key] is None or incoming is None:
            result[key] = deepcopy(incoming)
            continue

        current = result[key]
        where = ".".join(path + [str(key)])

        if isinstance(current, dict) and isinstance(incoming, dict):
            result[key] = _merge(current, incoming, path + [str(key)])
        elif isinstance(incoming, list) and isinstance(current, list):
            result[key] = deepcopy(incoming)
        elif type(current) is not type(incoming):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{where}': "
                f"{type(current).__name__} vs {type(incoming).__name__}"
            )
        else:
            result[key] = deepcopy(incoming)

    return result

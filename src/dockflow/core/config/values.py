# src/dockflow/core/config/values.py
"""
Resolução de valores de configuração `{mode, value}`.

Nós e recursos podem declarar qualquer entrada de configuração como um
fragmento com modo explícito, resolvido em tempo de execução:

    {"mode": "fixed",   "value": 10}
    {"mode": "default", "value": "pt"}                  # usado só sem valor do chamador
    {"mode": "env",     "value": "API_TOKEN"}
    {"mode": "config",  "section": "http", "key": "timeout"}
    {"mode": "inherit"}                                 # valor do chamador
    {"mode": "random",  "value": ["a", "b", "c"]}
    {"mode": "uuid"}

Decisões arquiteturais:
    - Um único resolvedor atende nós e recursos
    - Escalares e dicionários sem chave `mode` passam inalterados
    - Modo desconhecido é erro explícito (ConfigResolutionError)
    - Ambiente e gerador aleatório são injetáveis para testes determinísticos

Limites explícitos:
    - Não carrega arquivos de configuração (ver `loader`)
    - Não valida tipos dos valores resolvidos
"""

from __future__ import annotations

import os
import random
import uuid
from typing import Any, Dict, Mapping, Optional, Union

from dockflow.core.exceptions import ConfigResolutionError

from .host import HostConfiguration

MODES = ("fixed", "default", "env", "config", "inherit", "random", "uuid")


def is_mode_fragment(value: Any) -> bool:
    return isinstance(value, dict) and "mode" in value


class ConfigValueResolver:
    """Resolve fragmentos `{mode, value}` contra ambiente e configuração do host."""

    def __init__(
        self,
        configuration: Optional[Union[HostConfiguration, Dict[str, Any]]] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        rng: Optional[random.Random] = None,
    ):
        if isinstance(configuration, dict):
            configuration = HostConfiguration(data=configuration)
        self.configuration: HostConfiguration = configuration or HostConfiguration()
        self._environ = environ
        self._rng = rng or random.Random()

    def resolve(self, fragment: Any, supplied: Any = None) -> Any:
        """
        Resolve um fragmento de configuração.

        Args:
            fragment (Any): Escalar, dicionário comum ou fragmento com `mode`.
            supplied (Any): Valor fornecido pelo chamador em tempo de execução,
                considerado pelos modos `default` e `inherit`.

        Returns:
            Any: Valor final.

        Raises:
            ConfigResolutionError: Modo desconhecido ou lookup `config` inválido.
        """
        if not is_mode_fragment(fragment):
            return fragment

        mode = fragment.get("mode")
        value = fragment.get("value")

        if mode == "fixed":
            return value

        if mode == "default":
            return supplied if supplied is not None else value

        if mode == "env":
            environ = self._environ if self._environ is not None else os.environ
            return environ.get(str(value or "")) or None

        if mode == "config":
            return self._lookup(fragment.get("section"), fragment.get("key"))

        if mode == "inherit":
            return supplied

        if mode == "random":
            if isinstance(value, (list, tuple)) and value:
                return self._rng.choice(list(value))
            return None

        if mode == "uuid":
            return str(uuid.uuid4())

        raise ConfigResolutionError(
            message=f"unknown config mode '{mode}'",
            details={"mode": mode, "supported": list(MODES)},
            hint="Use um dos modos suportados.",
        )

    def resolve_mapping(self, config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Resolve cada valor de um mapa de configuração (sem valor do chamador)."""
        return {key: self.resolve(value) for key, value in (config or {}).items()}

    def _lookup(self, section: Any, key: Any) -> Any:
        if not section or not key:
            raise ConfigResolutionError(
                message="'config' mode requires both 'section' and 'key'",
                details={"section": section, "key": key},
            )

        data = self.configuration.get(section)
        if not isinstance(data, dict):
            raise ConfigResolutionError(
                message=f"config section '{section}' not found",
                details={"section": section},
            )

        if key not in data:
            raise ConfigResolutionError(
                message=f"config key '{key}' not found in section '{section}'",
                details={"section": section, "key": key},
            )

        return data[key]

# src/dockflow/core/config/host.py
"""
Configuração do host consultável por seção.

`HostConfiguration` é a fronteira usada pelo modo `config` da resolução de
valores, pelo nó `get_configuration` e pelas políticas do engine
(`engine.max_iterations`, `engine.strict_load`,
`engine.propagate_missing_outputs`).
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .loader import PathLike, load_config

ENGINE_SECTION = "engine"

ENGINE_DEFAULTS: Dict[str, Any] = {
    "max_iterations": 1000,
    "strict_load": False,
    "propagate_missing_outputs": False,
}


@dataclass
class HostConfiguration:
    """Configuração resolvida do host, indexada por seção."""

    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_files(
        cls,
        *,
        defaults_path: PathLike,
        local_path: Optional[PathLike] = None,
    ) -> "HostConfiguration":
        return cls(data=load_config(defaults_path=defaults_path, local_path=local_path))

    def get(self, section: str) -> Any:
        """Retorna a seção (ou None). Cópia profunda: o chamador não muta o host."""
        if section not in self.data:
            return None
        return deepcopy(self.data[section])

    def sections(self) -> List[str]:
        return list(self.data.keys())

    def engine_option(self, name: str, default: Any = None) -> Any:
        engine_cfg = self.data.get(ENGINE_SECTION) or {}
        if name in engine_cfg:
            return engine_cfg[name]
        if default is not None:
            return default
        return ENGINE_DEFAULTS.get(name)

# src/dockflow/core/config/loader.py
"""
Loader de configuração do host.

A configuração efetiva é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional; ignorado se não existir)

O mesmo leitor de arquivos (`read_mapping`) é reutilizado para carregar
descrições de flow em YAML ou JSON.

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
    - Arquivos vazios equivalem a `{}`
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)

PathLike = Union[str, Path]


def read_mapping(path: PathLike) -> Dict[str, Any]:
    """
    Lê um arquivo YAML ou JSON cujo conteúdo raiz deve ser um mapa.

    Args:
        path (PathLike): Caminho do arquivo.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    file = Path(path)
    if not file.exists():
        raise ConfigFileNotFoundError(f"Arquivo não encontrado: {file}")

    suffix = file.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with file.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {file.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Raiz deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do host.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional; quando presente, tem prioridade
        - A resolução utiliza `deep_merge`

    Args:
        defaults_path (PathLike): Arquivo de configuração base.
        local_path (Optional[PathLike]): Overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.
    """
    effective = read_mapping(defaults_path)

    if local_path is not None and Path(local_path).exists():
        effective = deep_merge(effective, read_mapping(local_path))

    return effective

# src/toolkit_dev/core/config/settings.py
"""
Settings do alvo de pipeline (object store, ghost, buckets).

A configuração efetiva é resolvida a partir de:
    - defaults embutidos (obrigatórios, sempre presentes)
    - um arquivo local de settings em YAML/JSON (opcional)
    - variáveis de ambiente `TOOLKIT_*` (opcionais, maior precedência)

Política de resolução:
    - O arquivo local, quando existe, é aplicado via `deep_merge`
    - Arquivo local inexistente não é erro (defaults prevalecem)
    - Variáveis de ambiente sobrescrevem valores escalares pontuais

Invariantes:
    - O resultado é sempre um `PipelineTarget` completo
    - Os defaults nunca são mutados
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .loader import _load_file
from .merge import deep_merge
from .hashing import compute_config_hash

DEFAULT_SETTINGS: Dict[str, Any] = {
    "object_store": {
        "endpoint": "http://127.0.0.1:9000",
        "access_key": "minioadmin",
        "secret_key": "minioadmin",
        "input_bucket": "task-inputs",
        "output_bucket": "task-outputs",
    },
    "ghost": {
        "owner": "zinc-sig",
        "repository": "ghost",
    },
}

# variável de ambiente -> (seção, chave)
ENV_OVERRIDES = {
    "TOOLKIT_MINIO_ENDPOINT": ("object_store", "endpoint"),
    "TOOLKIT_MINIO_ACCESS_KEY": ("object_store", "access_key"),
    "TOOLKIT_MINIO_SECRET_KEY": ("object_store", "secret_key"),
    "TOOLKIT_INPUT_BUCKET": ("object_store", "input_bucket"),
    "TOOLKIT_OUTPUT_BUCKET": ("object_store", "output_bucket"),
}


@dataclass(frozen=True)
class PipelineTarget:
    """Destino de um pipeline gerado: object store e release do ghost."""

    endpoint: str
    access_key: str
    secret_key: str
    input_bucket: str
    output_bucket: str
    ghost_owner: str
    ghost_repository: str
    settings_hash: str = ""

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "PipelineTarget":
        store = data["object_store"]
        ghost = data["ghost"]
        return cls(
            endpoint=str(store["endpoint"]).rstrip("/"),
            access_key=str(store["access_key"]),
            secret_key=str(store["secret_key"]),
            input_bucket=str(store["input_bucket"]),
            output_bucket=str(store["output_bucket"]),
            ghost_owner=str(ghost["owner"]),
            ghost_repository=str(ghost["repository"]),
            settings_hash=compute_config_hash(data),
        )


def load_settings(
    path: Optional[Union[str, Path]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> PipelineTarget:
    """
    Resolve o `PipelineTarget` efetivo.

    Args:
        path: Arquivo local de settings (opcional; ignorado se não existir).
        environ: Ambiente a consultar (default: `os.environ`).

    Raises:
        ConfigSyntaxError: Se o arquivo local for inválido.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        ConfigTypeConflictError: Se houver conflito estrutural no merge.
    """
    effective = DEFAULT_SETTINGS

    if path is not None:
        local_file = Path(path)
        if local_file.exists():
            local = _load_file(local_file, kind="Settings")
            effective = deep_merge(DEFAULT_SETTINGS, local)

    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            overrides.setdefault(section, {})[key] = value
    if overrides:
        effective = deep_merge(effective, overrides)

    return PipelineTarget.from_mapping(effective)

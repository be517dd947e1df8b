# src/toolkit_dev/core/config/hashing.py
"""
Fingerprint canônico de configuração resolvida.

O hash representa a identidade estrutural de uma configuração de teste
após a aplicação de variante, e é registrado no resumo e no cabeçalho
do pipeline gerado para rastrear qual configuração produziu cada
artefato.

Política de hashing:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256, string hexadecimal de 64 caracteres

Limites explícitos:
    - Não carrega nem resolve configuração
    - Não persiste o hash
"""


import json
import hashlib
from typing import Dict, Any


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de um mapeamento de configuração.

    Invariantes:
        - Configurações estruturalmente equivalentes produzem o mesmo hash
        - O hash independe da ordem original das chaves
        - Nenhuma mutação ocorre sobre o input

    Args:
        config (Dict[str, Any]): Mapeamento a ser identificado.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config to hash must be a dict, got: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()

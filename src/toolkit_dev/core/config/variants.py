# src/toolkit_dev/core/config/variants.py
"""Busca de variantes declaradas em um documento de teste.

A busca é linear, exata e sensível a maiúsculas; a primeira entrada
com o nome solicitado vence.
"""

from __future__ import annotations

from typing import List

from .errors import VariantNotFoundError
from .schema import ConfigDocument, Variant


def find_variant(document: ConfigDocument, name: str) -> Variant:
    """Retorna a primeira variante chamada `name`.

    Raises:
        VariantNotFoundError: se nenhuma entrada corresponder, inclusive
            quando `variants` está ausente ou vazio.
    """
    for variant in document.variants:
        if variant.name == name:
            return variant
    raise VariantNotFoundError(name)


def list_variants(document: ConfigDocument) -> List[str]:
    return [v.name for v in document.variants]


def has_variants(document: ConfigDocument) -> bool:
    return len(document.variants) > 0

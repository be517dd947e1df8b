# src/toolkit_dev/core/config/merge.py
"""
Políticas de merge de configuração do Toolkit Dev.

Este módulo concentra as duas políticas de merge do projeto:

1. Overlay de variante (`merge`, `resolve`) sobre um documento de teste:
    - task_parameters → override raso chave a chave (união de chaves)
    - verification    → substituição integral do bloco quando a
                        variante o declara (sem herança de sub-campos)
    - mock_resources  → nunca alterado; sempre vem da base

2. Deep-merge de settings (`deep_merge`), usado para defaults + arquivo
   local de settings:
    - dict → merge recursivo por chave
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Princípios fundamentais:
    - Os merges são puramente funcionais (inputs não são mutados)
    - Nenhum resultado parcial é produzido em caso de erro

A assimetria entre task_parameters e verification é intencional e faz
parte do contrato de compatibilidade com os pipelines já existentes.
"""

from copy import deepcopy
from typing import Any, Dict, Optional

from ..context import ResolutionContext
from .errors import ConfigTypeConflictError
from .schema import ConfigDocument, ResolvedConfig, Variant, validate_test_config
from .variants import find_variant


def merge(
    base: ConfigDocument,
    variant: Variant,
    *,
    ctx: Optional[ResolutionContext] = None,
) -> ResolvedConfig:
    """
    Aplica o overlay de uma variante sobre o documento base.

    Algoritmo:
        1. Valida a base (erros do validador são propagados sem merge)
        2. Copia integralmente a base
        3. Se a variante declara `task_parameters`, sobrescreve chave a
           chave; chaves ausentes na variante são preservadas
        4. Se a variante declara `verification`, o bloco inteiro da
           variante substitui o da base, verbatim
        5. `mock_resources` permanece o da base

    Invariantes:
        - Para todo campo presente no overlay, o valor resolvido é o do overlay
        - Para todo campo ausente do overlay, o valor resolvido é o da base
        - Base e variante nunca são mutadas

    Args:
        base (ConfigDocument): Documento carregado.
        variant (Variant): Overlay a aplicar.
        ctx (Optional[ResolutionContext]): Contexto para eventos e warnings.

    Returns:
        ResolvedConfig: Configuração resolvida.

    Raises:
        MissingFieldError: Se a base não passar na validação.
    """
    validate_test_config(base)

    result: Dict[str, Any] = deepcopy(base.data)

    if variant.task_parameters is not None:
        params = dict(result.get("task_parameters") or {})
        for key, value in variant.task_parameters.items():
            params[key] = deepcopy(value)
        result["task_parameters"] = params

    if variant.verification is not None:
        result["verification"] = deepcopy(variant.verification)

    if ctx is not None:
        if "mock_resources" in variant.raw:
            ctx.add_warning(
                stage="merge",
                message=f"Variant '{variant.name}' declares mock_resources; "
                "variant overlays of mock_resources are not supported and were ignored",
            )
        ctx.log(
            stage="merge",
            level="INFO",
            message=f"Applied variant '{variant.name}'",
            overridden_parameters=sorted((variant.task_parameters or {}).keys()),
            replaced_verification=variant.verification is not None,
        )

    return ResolvedConfig(data=result, source=base.source, variant=variant.name)


def resolve(
    document: ConfigDocument,
    variant_name: Optional[str] = None,
    *,
    ctx: Optional[ResolutionContext] = None,
) -> ResolvedConfig:
    """
    Valida o documento e aplica a variante nomeada, se houver.

    Raises:
        MissingFieldError: Se o documento for inválido.
        VariantNotFoundError: Se `variant_name` não estiver declarada.
    """
    validate_test_config(document)

    if ctx is not None:
        verification = document.data.get("verification") or {}
        if verification.get("script") and verification.get("script_file"):
            ctx.add_warning(
                stage="validate",
                message="Both verification.script and verification.script_file "
                "are set; verification.script takes precedence",
            )

    if variant_name is None:
        resolved = ResolvedConfig(data=deepcopy(document.data), source=document.source)
    else:
        resolved = merge(document, find_variant(document, variant_name), ctx=ctx)

    if ctx is not None:
        _warn_non_string_tags(resolved, ctx)
    return resolved


def _warn_non_string_tags(resolved: ResolvedConfig, ctx: ResolutionContext) -> None:
    # `tag: 3.10` sem aspas chega como float 3.1
    for stage in ("verification", "preparation"):
        block = resolved.data.get(stage)
        image = block.get("image") if isinstance(block, dict) else None
        tag = image.get("tag") if isinstance(image, dict) else None
        if tag is not None and not isinstance(tag, str):
            ctx.add_warning(
                stage="validate",
                message=f"{stage}.image.tag is not a string ({tag!r}); "
                f"it will be used as '{tag}'. Quote the tag in YAML to keep it verbatim",
            )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários.

    Política:
        - dict + dict → merge recursivo por chave
        - list        → sobrescrita total
        - escalar     → sobrescrita direta pelo override
        - conflito de tipos → erro estrutural explícito

    Args:
        base (Dict[str, Any]): Mapeamento base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Novo dicionário resultante.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requires dicts at the root, got: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Type conflict at key '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result

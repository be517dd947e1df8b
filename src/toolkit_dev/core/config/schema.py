# src/toolkit_dev/core/config/schema.py
"""
Schema canônico - documento de configuração de teste (`*.test.yaml`).

O documento é mantido como mapeamento puro (`data`); os defaults de
campos escalares opcionais são aplicados apenas nas views de leitura,
nunca gravados no mapeamento. Isso permite que o validador inspecione
o conteúdo original e que o merge opere sobre a estrutura declarada.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import MissingFieldError
from .hashing import compute_config_hash

DEFAULT_IMAGE_REPOSITORY = "busybox"
DEFAULT_IMAGE_TAG = "latest"

_REQUIRED_TOP_LEVEL = ("name", "mock_resources", "task_parameters", "verification")


def _mapping(x: Any) -> Dict[str, Any]:
    return x if isinstance(x, dict) else {}


def _text(x: Any, default: str = "") -> str:
    # `null` explícito no YAML equivale a ausência. Escalares não-string
    # (ex.: `tag: 3.10` lido como float 3.1) são convertidos com str();
    # `resolve` avisa no contexto quando uma tag de imagem não é string.
    if x is None:
        return default
    return str(x)


@dataclass(frozen=True)
class ImageRef:
    repository: str = DEFAULT_IMAGE_REPOSITORY
    tag: str = DEFAULT_IMAGE_TAG

    @classmethod
    def from_mapping(cls, data: Any) -> "ImageRef":
        data = _mapping(data)
        return cls(
            repository=_text(data.get("repository"), DEFAULT_IMAGE_REPOSITORY),
            tag=_text(data.get("tag"), DEFAULT_IMAGE_TAG),
        )

    def __str__(self) -> str:
        return f"{self.repository}:{self.tag}"


@dataclass(frozen=True)
class VerificationStage:
    image: ImageRef
    script: str = ""
    script_file: str = ""

    @classmethod
    def from_mapping(cls, data: Any) -> "VerificationStage":
        data = _mapping(data)
        return cls(
            image=ImageRef.from_mapping(data.get("image")),
            script=_text(data.get("script")),
            script_file=_text(data.get("script_file")),
        )


@dataclass(frozen=True)
class PreparationStage:
    image: ImageRef
    script: str = ""
    outputs: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> "PreparationStage":
        data = _mapping(data)
        outputs = data.get("outputs") or []
        return cls(
            image=ImageRef.from_mapping(data.get("image")),
            script=_text(data.get("script")),
            outputs=[str(o) for o in outputs],
        )


@dataclass(frozen=True)
class Variant:
    """Overlay parcial nomeado (task_parameters e/ou verification)."""

    name: str
    task_parameters: Optional[Dict[str, Any]] = None
    verification: Optional[Dict[str, Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Variant":
        params = data.get("task_parameters")
        verification = data.get("verification")
        return cls(
            name=_text(data.get("name")),
            task_parameters=dict(params) if isinstance(params, dict) else None,
            verification=dict(verification) if isinstance(verification, dict) else None,
            raw=dict(data),
        )


@dataclass(frozen=True)
class ConfigDocument:
    """
    Documento de configuração de teste carregado do disco.

    Campos:
    - data: mapeamento bruto, exatamente como declarado no arquivo
    - source: caminho de origem (usado para resolver `script_file` relativo)

    As propriedades expõem views tipadas com defaults aplicados.
    """

    data: Dict[str, Any]
    source: Optional[Path] = None

    @property
    def name(self) -> str:
        return _text(self.data.get("name"))

    @property
    def description(self) -> str:
        return _text(self.data.get("description"))

    @property
    def mock_resources(self) -> Dict[str, Any]:
        return _mapping(self.data.get("mock_resources"))

    @property
    def task_parameters(self) -> Dict[str, Any]:
        return _mapping(self.data.get("task_parameters"))

    @property
    def verification(self) -> VerificationStage:
        return VerificationStage.from_mapping(self.data.get("verification"))

    @property
    def has_preparation(self) -> bool:
        return self.data.get("preparation") is not None

    @property
    def preparation(self) -> Optional[PreparationStage]:
        if not self.has_preparation:
            return None
        return PreparationStage.from_mapping(self.data.get("preparation"))

    @property
    def variants(self) -> List[Variant]:
        entries = self.data.get("variants") or []
        return [Variant.from_mapping(v) for v in entries if isinstance(v, dict)]

    def mock_files(self, role: str) -> Dict[str, str]:
        """Arquivos virtuais declarados para um papel (`{}` quando ausente)."""
        resource = _mapping(self.mock_resources.get(role))
        files = _mapping(resource.get("files"))
        return {str(path): _text(content) for path, content in files.items()}


@dataclass(frozen=True)
class ResolvedConfig(ConfigDocument):
    """
    Documento após aplicação de no máximo uma variante.

    Valor transitório: consumido pelo emissor de pipeline e descartado.
    `variant` é `None` quando nenhuma variante foi aplicada.
    """

    variant: Optional[str] = None

    @property
    def fingerprint(self) -> str:
        return compute_config_hash(self.data)


def validate_test_config(document: ConfigDocument) -> None:
    """
    Valida o schema mínimo de um documento de teste.

    A verificação é pura e interrompe na primeira violação, na ordem:
    campos de topo (`name`, `mock_resources`, `task_parameters`,
    `verification`), `verification.image.repository` e, por fim,
    presença de `script` ou `script_file`.

    Raises:
        MissingFieldError: nomeando o primeiro campo ausente.
    """
    data = document.data
    where = f" in {document.source}" if document.source is not None else ""

    for key in _REQUIRED_TOP_LEVEL:
        if key not in data:
            raise MissingFieldError(key, f"Missing required field: {key}{where}")

    verification = _mapping(data.get("verification"))
    image = _mapping(verification.get("image"))
    if image.get("repository") is None:
        raise MissingFieldError(
            "verification.image.repository",
            f"Missing required field: verification.image.repository{where}",
        )

    if verification.get("script") is None and verification.get("script_file") is None:
        raise MissingFieldError(
            "verification.script",
            "Missing verification script: need either verification.script "
            f"or verification.script_file{where}",
        )

# src/toolkit_dev/core/config/loader.py
"""
Loader canônico de configurações de teste do Toolkit Dev.

Este módulo é responsável por localizar e carregar documentos de
configuração de teste (`*.test.yaml`) a partir do disco.

Responsabilidades do módulo:
    - Carregar arquivos de configuração em YAML ou JSON
    - Validar requisitos estruturais mínimos (parse + tipo raiz)
    - Descobrir o arquivo de teste de um template de task por convenção
    - Carregar e validar em uma única chamada (`validate_config_file`)

Princípios fundamentais:
    - Cada invocação carrega o documento do zero (sem cache)
    - Erros estruturais são tratados como falhas fatais
    - O documento retornado nunca é mutado após o load

Limites explícitos:
    - Não aplica variantes
    - Não emite pipeline
    - Não acessa rede, Docker ou object store
"""

from pathlib import Path
from typing import Any, Dict, Union
import json

import yaml  # PyYAML

from .errors import (
    ConfigSyntaxError,
    InvalidConfigRootTypeError,
    TestConfigNotFoundError,
    UnsupportedConfigFormatError,
)
from .schema import ConfigDocument, validate_test_config

PathLike = Union[str, Path]

DEFAULT_CONFIG_DIR = "test-configs"
TEST_CONFIG_SUFFIX = ".test.yaml"


def _load_file(path: Path, kind: str = "Test configuration") -> Dict[str, Any]:
    """
    Carrega um arquivo estruturado e valida sua forma básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O formato é determinado pela extensão, nunca pelo conteúdo
        - Arquivos vazios são interpretados como dicionários vazios
        - O conteúdo raiz deve ser um dicionário (`dict`)

    Args:
        path (Path): Caminho para o arquivo.
        kind (str): Rótulo do arquivo usado nas mensagens de erro.

    Returns:
        Dict[str, Any]: Conteúdo carregado como dicionário.

    Raises:
        TestConfigNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        ConfigSyntaxError: Se o conteúdo não puder ser interpretado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.is_file():
        raise TestConfigNotFoundError(f"{kind} file not found: {path}")

    suffix = path.suffix.lower()
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigSyntaxError(
            f"Invalid encoding in configuration file (expected UTF-8): {path}"
        ) from e

    if suffix in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigSyntaxError(
                f"Invalid YAML in configuration file: {path}"
            ) from e

    elif suffix == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigSyntaxError(
                f"Invalid JSON in configuration file: {path}"
            ) from e

    else:
        raise UnsupportedConfigFormatError(f"Unsupported configuration format: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Invalid configuration root in {path}: expected mapping, "
            f"got {type(data).__name__}"
        )

    return data


def load_test_config(path: PathLike) -> ConfigDocument:
    """
    Carrega um documento de configuração de teste.

    Os defaults de campos escalares opcionais (`description`, imagem de
    verificação, presença de `preparation`) são expostos pelas views do
    `ConfigDocument`; o mapeamento bruto permanece intacto para que o
    validador enxergue exatamente o que foi declarado.

    Args:
        path: Caminho do arquivo `*.test.yaml`.

    Returns:
        ConfigDocument: Documento carregado, ainda não validado.

    Raises:
        TestConfigNotFoundError: Se o arquivo não existir.
        ConfigSyntaxError: Se o conteúdo for inválido.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
    """
    config_file = Path(path)
    return ConfigDocument(data=_load_file(config_file), source=config_file)


def validate_config_file(path: PathLike) -> ConfigDocument:
    """Carrega e valida; erros do loader são propagados sem alteração."""
    document = load_test_config(path)
    validate_test_config(document)
    return document


def find_test_config(task_path: str, config_dir: PathLike = DEFAULT_CONFIG_DIR) -> Path:
    """
    Descobre o arquivo de teste de um template de task por convenção.

    Política de busca:
        1. `<config_dir>/<categoria>/<task>.test.yaml`
        2. `<config_dir>/<task>.test.yaml`

    Args:
        task_path: Caminho do template (ex.: `compilation/gcc.yaml`).
        config_dir: Diretório raiz das configurações de teste.

    Raises:
        TestConfigNotFoundError: Se nenhum candidato existir.
    """
    base_path = task_path[: -len(".yaml")] if task_path.endswith(".yaml") else task_path
    root = Path(config_dir)

    candidates = [
        root / f"{base_path}{TEST_CONFIG_SUFFIX}",
        root / f"{Path(base_path).name}{TEST_CONFIG_SUFFIX}",
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate

    raise TestConfigNotFoundError(
        f"Test configuration not found for task '{task_path}' in {root}"
    )

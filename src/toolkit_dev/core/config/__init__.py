# src/toolkit_dev/core/config/__init__.py

"""
Camada de configuração de testes do Toolkit Dev.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
validar, resolver variantes e identificar configurações de teste de
templates de task (`*.test.yaml`).

Responsabilidades do pacote:
    - Carregamento de documentos de teste (YAML/JSON)
    - Validação do schema mínimo (primeira violação)
    - Busca de variantes e overlay sobre o documento base
    - Resolução de settings do alvo (defaults + local + ambiente)
    - Fingerprint canônico da configuração resolvida

Invariantes:
    - Documentos carregados nunca são mutados
    - A mesma entrada sempre produz a mesma configuração resolvida
    - Nenhum estado global é mantido entre invocações

Limites explícitos:
    - Não emite pipeline
    - Não interage com Docker, Concourse ou object store
"""

from .errors import (  # noqa: F401
    ConfigError,
    NotFoundError,
    TestConfigNotFoundError,
    VariantNotFoundError,
    ScriptFileNotFoundError,
    ConfigSyntaxError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
    MissingFieldError,
    ConfigTypeConflictError,
)

from .hashing import compute_config_hash  # noqa: F401
from .schema import (  # noqa: F401
    ConfigDocument,
    ImageRef,
    PreparationStage,
    ResolvedConfig,
    Variant,
    VerificationStage,
    validate_test_config,
)
from .loader import find_test_config, load_test_config, validate_config_file  # noqa: F401
from .variants import find_variant, has_variants, list_variants  # noqa: F401
from .accessors import get_mock_file_content, get_parameter, list_mock_files  # noqa: F401
from .merge import deep_merge, merge, resolve  # noqa: F401
from .settings import PipelineTarget, load_settings  # noqa: F401

# tests/conftest.py
"""
Fixtures compartilhados para testes do Toolkit Dev.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de configuração de teste em YAML (como string)
- um helper para materializar esses documentos em `tmp_path`
- um `PipelineTarget` determinístico
- um `ResolutionContext` isolado

Decisões arquiteturais:
    - Conteúdo YAML é fornecido como string; o I/O fica restrito a `tmp_path`
    - Dados retornados são determinísticos e isolados por teste
    - Imports do pacote são feitos de forma lazy para clareza de erros

Limites explícitos:
    - Não executar pipelines reais
    - Não acessar Docker, Concourse ou object store
"""

from pathlib import Path

import pytest


# =====================================================
# Documentos de teste
# =====================================================

@pytest.fixture
def base_config_yaml() -> str:
    """
    Documento base com duas variantes, usado pelos testes de merge.

    Estrutura:
        - task_parameters com `param1` e `param2`
        - verification com imagem `python:3.11` e script inline
        - variante `override-params` (apenas task_parameters)
        - variante `override-verification` (apenas verification.script)

    Returns:
        str: Conteúdo YAML do documento base.
    """
    return """\
name: variant-test
description: Base configuration for variant tests
mock_resources:
  submission:
    files:
      main.py: |
        print("hello")
  assignment_assets:
    files:
      expected.txt: |
        hello
task_parameters:
  param1: "base"
  param2: "unchanged"
verification:
  image:
    repository: python
    tag: "3.11"
  script: "base script"
variants:
  - name: override-params
    task_parameters:
      param1: "variant_value"
      param3: "new_param"
  - name: override-verification
    verification:
      script: "Variant verification script"
"""


@pytest.fixture
def gcc_config_yaml() -> str:
    """
    Documento realista de um template de compilação (`compilation/gcc.yaml`).

    Inclui parâmetros de tipos variados (string, inteiro, booleano, float)
    e um estágio de preparação com outputs declarados.
    """
    return """\
name: gcc-compilation
mock_resources:
  submission:
    files:
      hello.c: |
        #include <stdio.h>
        int main() {
            printf("Hello, World!\\n");
            return 0;
        }
task_parameters:
  source_file: submission/hello.c
  output_binary: hello
  compiler_flags: "-Wall -Wextra -O2"
  score: 10
  strict: true
  weight: 0.5
preparation:
  image:
    repository: alpine
  script: |
    mkdir -p prepared
    cp submission/* prepared/
  outputs:
    - prepared
verification:
  image:
    repository: busybox
  script: |
    test -f compilation-output/hello
variants:
  - name: pedantic
    task_parameters:
      compiler_flags: "-Wall -Wextra -pedantic"
  - name: alpine-verify
    verification:
      image:
        repository: alpine
        tag: "3.19"
"""


@pytest.fixture
def write_config(tmp_path: Path):
    """
    Fixture factory que grava um documento em `tmp_path` e retorna o caminho.

    Returns:
        Callable[[str, str], Path]: (conteúdo, nome relativo) -> caminho.
    """

    def _write(content: str, name: str = "task.test.yaml") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# =====================================================
# Alvo de pipeline + contexto
# =====================================================

@pytest.fixture
def dummy_target():
    """
    `PipelineTarget` fixo, sem depender de variáveis de ambiente.
    """
    from toolkit_dev.core.config.settings import DEFAULT_SETTINGS, PipelineTarget

    return PipelineTarget.from_mapping(DEFAULT_SETTINGS)


@pytest.fixture
def dummy_ctx():
    """`ResolutionContext` com identidade fixa."""
    from toolkit_dev.core.context import ResolutionContext

    return ResolutionContext(run_id="run-test-001", meta={"source": "pytest"})

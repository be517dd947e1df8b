# src/toolkit_dev/__init__.py
"""
Toolkit Dev - ferramentas locais para testar templates de task de correção.

Este pacote resolve configurações de teste declarativas (`*.test.yaml`)
e gera pipelines de CI que exercitam um template de task contra
recursos mock.

Arquitetura em alto nível:
    - core.config → carregamento, validação, variantes e merge
    - core.context → eventos estruturados por invocação
    - render      → emissão do pipeline e do resumo
    - cli         → interface de linha de comando (`toolkit-dev`)

Limites explícitos:
    - Não executa pipelines nem sobe ambiente Docker
    - Não acessa o object store
"""

__version__ = "0.1.0"

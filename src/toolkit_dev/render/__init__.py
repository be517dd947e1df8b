# src/toolkit_dev/render/__init__.py
"""Toolkit Dev - emissão de artefatos a partir da configuração resolvida.

 - pipeline: YAML do pipeline de teste (resources + job test-task)
 - summary: resumo legível para `--summary`
"""

from .pipeline import encode_parameter, render_pipeline, write_pipeline  # noqa: F401
from .summary import render_summary  # noqa: F401

# src/toolkit_dev/core/__init__.py
"""
Core do Toolkit Dev.

Reúne a resolução de configurações de teste e o contexto explícito de
cada invocação. O core é determinístico, testável de forma isolada e
não depende da CLI nem de serviços externos.

Componentes principais:
    - config  → load, validação, variantes, merge, settings, fingerprint
    - context → eventos estruturados e warnings por etapa
"""

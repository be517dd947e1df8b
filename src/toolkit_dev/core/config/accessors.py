# src/toolkit_dev/core/config/accessors.py
"""Consultas pontuais sobre um documento de teste.

Leitura apenas: nenhuma função altera o documento.
"""

from __future__ import annotations

from typing import Any, List

from .schema import ConfigDocument


def get_parameter(document: ConfigDocument, name: str, default: Any = "") -> Any:
    value = document.task_parameters.get(name)
    return default if value is None else value


def get_mock_file_content(document: ConfigDocument, role: str, filename: str) -> str:
    return document.mock_files(role).get(filename, "")


def list_mock_files(document: ConfigDocument, role: str) -> List[str]:
    return list(document.mock_files(role))

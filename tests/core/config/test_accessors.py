# tests/core/config/test_accessors.py
"""Testes das consultas pontuais sobre o documento de teste."""

from toolkit_dev.core.config.accessors import (
    get_mock_file_content,
    get_parameter,
    list_mock_files,
)
from toolkit_dev.core.config.loader import load_test_config


def test_get_parameter_with_default(write_config, gcc_config_yaml):
    doc = load_test_config(write_config(gcc_config_yaml))
    assert get_parameter(doc, "output_binary") == "hello"
    assert get_parameter(doc, "score") == 10
    assert get_parameter(doc, "strict") is True
    assert get_parameter(doc, "missing") == ""
    assert get_parameter(doc, "missing", "fallback") == "fallback"


def test_mock_file_queries(write_config, gcc_config_yaml):
    doc = load_test_config(write_config(gcc_config_yaml))
    assert list_mock_files(doc, "submission") == ["hello.c"]
    assert get_mock_file_content(doc, "submission", "hello.c").startswith("#include <stdio.h>")
    assert get_mock_file_content(doc, "submission", "nope.c") == ""
    assert list_mock_files(doc, "assignment_assets") == []

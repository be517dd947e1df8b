# tests/core/config/test_settings.py
"""
Testes da resolução de settings do alvo de pipeline (load_settings).

Política testada:
    - defaults embutidos sempre presentes
    - arquivo local opcional aplicado via deep-merge
    - variáveis de ambiente com maior precedência
"""

import pytest

from toolkit_dev.core.config.errors import ConfigTypeConflictError
from toolkit_dev.core.config.settings import DEFAULT_SETTINGS, load_settings


def test_defaults_only():
    target = load_settings(environ={})
    assert target.endpoint == "http://127.0.0.1:9000"
    assert target.access_key == "minioadmin"
    assert target.input_bucket == "task-inputs"
    assert target.output_bucket == "task-outputs"
    assert target.ghost_owner == "zinc-sig"
    assert len(target.settings_hash) == 64


def test_missing_local_file_is_ok(tmp_path):
    target = load_settings(tmp_path / "settings.yaml", environ={})
    assert target.endpoint == "http://127.0.0.1:9000"


def test_local_file_overrides_defaults(tmp_path):
    local = tmp_path / "settings.yaml"
    local.write_text(
        "object_store:\n  endpoint: http://172.18.0.2:9000/\n  output_bucket: results\n",
        encoding="utf-8",
    )
    target = load_settings(local, environ={})
    assert target.endpoint == "http://172.18.0.2:9000"
    assert target.output_bucket == "results"
    # não sobrescritos
    assert target.input_bucket == "task-inputs"
    assert DEFAULT_SETTINGS["object_store"]["output_bucket"] == "task-outputs"


def test_environment_has_highest_precedence(tmp_path):
    local = tmp_path / "settings.json"
    local.write_text('{"object_store": {"endpoint": "http://file:9000"}}', encoding="utf-8")
    target = load_settings(
        local,
        environ={"TOOLKIT_MINIO_ENDPOINT": "http://env:9000", "TOOLKIT_MINIO_SECRET_KEY": ""},
    )
    assert target.endpoint == "http://env:9000"
    assert target.secret_key == "minioadmin"


def test_structural_conflict_raises(tmp_path):
    local = tmp_path / "settings.yaml"
    local.write_text("object_store: http://flat\n", encoding="utf-8")
    with pytest.raises(ConfigTypeConflictError):
        load_settings(local, environ={})

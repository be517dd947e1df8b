# tests/core/config/test_hashing.py
"""
Testes do fingerprint canônico de configuração (compute_config_hash).

Invariantes:
    - O hash independe da ordem das chaves
    - O hash é o SHA-256 do JSON canônico
    - Configurações resolvidas por variantes distintas têm hashes distintos
"""

import hashlib
import json

import pytest

from toolkit_dev.core.config.hashing import compute_config_hash
from toolkit_dev.core.config.loader import load_test_config
from toolkit_dev.core.config.merge import resolve


def test_hash_is_deterministic():
    a = {"name": "x", "task_parameters": {"b": 2, "a": 1}}
    b = {"task_parameters": {"a": 1, "b": 2}, "name": "x"}
    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_matches_sha256_of_canonical_json():
    cfg = {"verification": {"script": "ação"}, "name": "x"}
    canonical = json.dumps(cfg, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    expected = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    assert compute_config_hash(cfg) == expected
    assert len(expected) == 64


def test_hash_rejects_non_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])


def test_fingerprint_changes_with_variant(write_config, base_config_yaml):
    doc = load_test_config(write_config(base_config_yaml))
    base = resolve(doc)
    params = resolve(doc, "override-params")
    verification = resolve(doc, "override-verification")

    fingerprints = {base.fingerprint, params.fingerprint, verification.fingerprint}
    assert len(fingerprints) == 3
    assert resolve(doc, "override-params").fingerprint == params.fingerprint

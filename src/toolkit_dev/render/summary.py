# src/toolkit_dev/render/summary.py
"""Resumo legível de uma configuração resolvida (`--summary`)."""

from __future__ import annotations

from typing import List

from ..core.config.schema import ResolvedConfig
from ..core.config.accessors import list_mock_files
from ..core.config.variants import list_variants
from .pipeline import encode_parameter


def render_summary(resolved: ResolvedConfig) -> str:
    lines: List[str] = []

    lines.append("Configuration Summary:")
    lines.append("=====================")
    lines.append(f"Name: {resolved.name}")
    lines.append(f"Description: {resolved.description or 'No description'}")
    lines.append(f"Variant: {resolved.variant or '<base>'}")
    lines.append(f"Fingerprint: {resolved.fingerprint}")
    lines.append("")

    lines.append("Mock Submission Files:")
    lines.extend(f"  - {path}" for path in list_mock_files(resolved, "submission"))
    lines.append("")

    lines.append("Task Parameters:")
    for key, value in resolved.task_parameters.items():
        lines.append(f"  {key}: {encode_parameter(value)}")
    lines.append("")

    lines.append(f"Verification Image: {resolved.verification.image}")
    if resolved.has_preparation:
        lines.append(f"Preparation Image: {resolved.preparation.image}")

    variants = list_variants(resolved)
    if variants:
        lines.append("")
        lines.append("Available Variants:")
        lines.extend(f"  - {name}" for name in variants)

    return "\n".join(lines) + "\n"

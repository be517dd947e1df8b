# src/toolkit_dev/render/pipeline.py
"""
Emissor do pipeline de teste de um template de task.

Regras:
- O pipeline é derivado EXCLUSIVAMENTE da configuração resolvida e do
  `PipelineTarget`; nenhuma variável de ambiente é consultada aqui.
- Mesma entrada => mesmo texto (determinismo por ordenação estável).
- Fail-fast: todo o texto é montado em memória antes de qualquer escrita;
  qualquer erro interrompe a emissão sem deixar artefato parcial.

Seções, em ordem:
resources:  ghost, task-yaml, recursos mock (um por papel)
jobs:       test-task → gets, prepare (opcional), task sob teste, verify
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.config.errors import ConfigSyntaxError, ScriptFileNotFoundError
from ..core.config.schema import ImageRef, ResolvedConfig
from ..core.config.settings import PipelineTarget
from ..core.context import ResolutionContext

STANDARD_ROLES: List[str] = ["submission", "assignment_assets"]

PLACEHOLDERS: Dict[str, str] = {
    "submission": "No submission files defined",
}
DEFAULT_PLACEHOLDER = "placeholder"

NO_SCRIPT_FALLBACK = 'echo "No verification script defined"'

TASK_STEP_NAMES: Dict[str, str] = {
    "compilation": "compile",
    "execution": "execute",
    "testing": "test",
}

_FILE_INDENT = " " * 8
_CONTENT_INDENT = " " * 10
_PARAM_INDENT = " " * 10
_SCRIPT_INDENT = " " * 16


def encode_parameter(value: Any) -> str:
    """Codificação escalar canônica: bool/números sem aspas, strings com aspas."""
    # datas do YAML (ex.: 2024-01-01) viram string ISO
    return json.dumps(value, ensure_ascii=False, default=str)


def resource_name(role: str) -> str:
    return role.replace("_", "-")


def split_task_path(task_path: str) -> tuple[str, str]:
    """`compilation/gcc.yaml` -> (`compilation`, `gcc`)."""
    path = Path(task_path)
    name = path.name[: -len(".yaml")] if path.name.endswith(".yaml") else path.name
    category = path.parts[0] if len(path.parts) > 1 else ""
    return category, name


def _indent_block(text: str, indent: str) -> List[str]:
    return [indent + line for line in text.split("\n")]


def _image_source(image: ImageRef) -> str:
    # tags como 3.11 precisam de aspas para não virarem float
    return (
        f"{{repository: {encode_parameter(image.repository)}, "
        f"tag: {encode_parameter(image.tag)}}}"
    )


def mock_roles(resolved: ResolvedConfig) -> List[str]:
    roles = list(STANDARD_ROLES)
    for role in resolved.mock_resources:
        if role not in roles:
            roles.append(str(role))
    return roles


def render_mock_files(resolved: ResolvedConfig, role: str) -> List[str]:
    files = resolved.mock_files(role)
    if not files:
        placeholder = PLACEHOLDERS.get(role, DEFAULT_PLACEHOLDER)
        return [f'{_FILE_INDENT}placeholder.txt: "{placeholder}"']

    lines: List[str] = []
    for path, content in files.items():
        lines.append(f"{_FILE_INDENT}{path}: |")
        lines.extend(_indent_block(content, _CONTENT_INDENT))
    return lines


def render_task_parameters(resolved: ResolvedConfig) -> List[str]:
    params = resolved.task_parameters
    if not params:
        return [f"{_PARAM_INDENT}# No parameters defined"]
    # chaves como yes/on/null também vão entre aspas
    return [
        f"{_PARAM_INDENT}{encode_parameter(str(key))}: {encode_parameter(value)}"
        for key, value in params.items()
    ]


def verification_script(resolved: ResolvedConfig) -> str:
    """
    Escolhe a fonte do script de verificação.

    Precedência: `script` não vazio, depois conteúdo de `script_file`
    (relativo ao diretório do arquivo de configuração), depois o
    fallback fixo.

    Raises:
        ScriptFileNotFoundError: se `script_file` não existir.
        ConfigSyntaxError: se `script_file` não for UTF-8 válido.
    """
    stage = resolved.verification
    if stage.script:
        return stage.script

    if stage.script_file:
        path = Path(stage.script_file)
        if not path.is_absolute() and resolved.source is not None:
            path = resolved.source.parent / path
        if not path.is_file():
            raise ScriptFileNotFoundError(f"Verification script file not found: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ConfigSyntaxError(
                f"Invalid encoding in verification script file (expected UTF-8): {path}"
            ) from e

    return NO_SCRIPT_FALLBACK


def _render_script_task(
    name: str,
    image: ImageRef,
    script: str,
    inputs: List[Dict[str, Any]],
    outputs: List[str],
) -> List[str]:
    lines = [
        f"      - task: {name}",
        "        config:",
        "          platform: linux",
        "          image_resource:",
        "            type: registry-image",
        f"            source: {_image_source(image)}",
    ]
    if inputs:
        lines.append("          inputs:")
        for item in inputs:
            lines.append(f"            - name: {item['name']}")
            if item.get("optional"):
                lines.append("              optional: true")
    if outputs:
        lines.append("          outputs:")
        lines.extend(f"            - name: {out}" for out in outputs)
    lines += [
        "          run:",
        "            path: sh",
        "            args:",
        "              - -c",
        "              - |",
    ]
    lines.extend(_indent_block(script.rstrip("\n"), _SCRIPT_INDENT))
    return lines


def render_pipeline(
    resolved: ResolvedConfig,
    *,
    task_path: str,
    version: str,
    target: PipelineTarget,
    ctx: Optional[ResolutionContext] = None,
) -> str:
    """Gera o texto completo do pipeline de teste."""
    category, task_name = split_task_path(task_path)
    roles = mock_roles(resolved)
    # resolvido antes de qualquer linha para manter o fail-fast
    script = verification_script(resolved)

    lines: List[str] = []

    lines.append(f"# Test pipeline for {task_path}: {resolved.name}")
    lines.append(f"# variant: {resolved.variant or '<base>'}")
    lines.append(f"# config-fingerprint: {resolved.fingerprint}")

    # Resources
    lines += [
        "resources:",
        "  - name: ghost",
        "    type: github-release",
        "    source:",
        f"      owner: {target.ghost_owner}",
        f"      repository: {target.ghost_repository}",
        "      release: true",
        "      pre_release: false",
        "",
        "  - name: task-yaml",
        "    type: s3",
        "    source:",
        f"      endpoint: {target.endpoint}",
        f"      bucket: {target.input_bucket}",
        f"      regexp: {task_name}-(.*).yaml",
        f"      access_key_id: {target.access_key}",
        f"      secret_access_key: {target.secret_key}",
        "      disable_ssl: true",
        "      use_v2_signing: true",
    ]

    for role in roles:
        lines += [
            "",
            f"  - name: {resource_name(role)}",
            "    type: mock",
            "    source:",
            "      create_files:",
        ]
        lines.extend(render_mock_files(resolved, role))

    # Jobs
    lines += [
        "",
        "jobs:",
        "  - name: test-task",
        "    plan:",
        "      - in_parallel:",
        "        - get: ghost",
    ]
    lines.extend(f"        - get: {resource_name(role)}" for role in roles)
    lines.append("        - get: task-yaml")

    preparation = resolved.preparation
    if preparation is not None:
        lines.append("")
        lines.extend(
            _render_script_task(
                "prepare",
                preparation.image,
                preparation.script,
                [{"name": resource_name(role)} for role in roles],
                preparation.outputs,
            )
        )

    lines += [
        "",
        f"      - task: {TASK_STEP_NAMES.get(category, 'run-task')}",
        f"        file: task-yaml/{task_name}-{version}.yaml",
        "        vars:",
    ]
    lines.extend(render_task_parameters(resolved))
    lines += [
        "        params:",
        f"          GHOST_UPLOAD_CONFIG_ENDPOINT: {target.endpoint}",
        f"          GHOST_UPLOAD_CONFIG_ACCESS_KEY: {target.access_key}",
        f"          GHOST_UPLOAD_CONFIG_SECRET_KEY: {target.secret_key}",
        f"          GHOST_UPLOAD_CONFIG_BUCKET: {target.output_bucket}",
        "",
    ]

    output_name = f"{category}-output" if category else "task-output"
    lines.extend(
        _render_script_task(
            "verify",
            resolved.verification.image,
            script,
            [{"name": output_name, "optional": True}],
            [],
        )
    )

    if ctx is not None:
        ctx.log(
            stage="render",
            level="INFO",
            message=f"Rendered pipeline for {task_path}",
            roles=roles,
            has_preparation=preparation is not None,
            fingerprint=resolved.fingerprint,
        )

    return "\n".join(lines) + "\n"


def write_pipeline(text: str, output: Path) -> Path:
    """Grava o pipeline já renderizado; o destino só é trocado ao final."""
    output.parent.mkdir(parents=True, exist_ok=True)
    tmp = output.with_name(f".{output.name}.tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(output)
    return output

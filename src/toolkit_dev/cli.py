# src/toolkit_dev/cli.py
"""
Interface de linha de comando `toolkit-dev`.

Comandos:
    generate  resolve a configuração de teste de um template e gera o pipeline
    validate  valida um arquivo `*.test.yaml`
    variants  lista as variantes declaradas

Códigos de saída: 0 em sucesso; 1 em qualquer falha de configuração,
com a mensagem em uma única linha no stderr.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from toolkit_dev import __version__
from toolkit_dev.core.config import (
    ConfigError,
    find_test_config,
    list_variants,
    load_settings,
    load_test_config,
    resolve,
    validate_config_file,
)
from toolkit_dev.core.config.loader import DEFAULT_CONFIG_DIR
from toolkit_dev.core.context import ResolutionContext
from toolkit_dev.render import render_pipeline, render_summary, write_pipeline
from toolkit_dev.render.pipeline import split_task_path

logger = logging.getLogger("toolkit_dev")


def _initialize_logger(log_level):
    logging.basicConfig(
        handlers=[logging.StreamHandler()],
        format="%(asctime)s %(levelname)s %(module)s.%(funcName)s: %(message)s",
        level=log_level,
    )


def _flush_events(ctx):
    for event in ctx.events:
        level = logging.getLevelName(event["level"])
        if not isinstance(level, int):
            level = logging.INFO
        logger.log(level, "[%s] %s: %s", ctx.run_id, event["stage"], event["message"])


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="toolkit-dev", description="test configuration resolver for task templates"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level", default="WARNING", help="logging level, e.g. INFO, DEBUG"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="generate a test pipeline for a task")
    generate.add_argument("task", help="task template path, e.g. compilation/gcc.yaml")
    generate.add_argument("-c", "--config", help="explicit test configuration file")
    generate.add_argument(
        "--config-dir",
        default=DEFAULT_CONFIG_DIR,
        help="directory searched for <category>/<task>.test.yaml",
    )
    generate.add_argument("--variant", help="variant to apply on top of the base config")
    generate.add_argument(
        "--summary", action="store_true", help="print the resolved configuration only"
    )
    generate.add_argument("-o", "--output", help="pipeline file to write")
    generate.add_argument("--task-version", help="uploaded task YAML version suffix")
    generate.add_argument("--settings", help="settings file (object store, ghost)")

    validate = sub.add_parser("validate", help="validate a test configuration file")
    validate.add_argument("config")

    variants = sub.add_parser("variants", help="list variants of a test configuration")
    variants.add_argument("config")

    return parser


def _generate(args, ctx):
    if args.config:
        config_path = Path(args.config)
    else:
        config_path = find_test_config(args.task, args.config_dir)
    ctx.log(stage="load", level="INFO", message=f"Using test configuration {config_path}")

    document = load_test_config(config_path)
    resolved = resolve(document, args.variant, ctx=ctx)

    if args.summary:
        sys.stdout.write(render_summary(resolved))
        return 0

    target = load_settings(args.settings)
    version = args.task_version or f"v{int(time.time())}"
    text = render_pipeline(
        resolved, task_path=args.task, version=version, target=target, ctx=ctx
    )

    _, task_name = split_task_path(args.task)
    output = Path(args.output) if args.output else Path(f".test-{task_name}.yml")
    write_pipeline(text, output)
    print(output)
    return 0


def _validate(args, ctx):
    document = validate_config_file(args.config)
    ctx.log(stage="validate", level="INFO", message=f"{args.config} is valid")
    print(f"{document.name}: OK")
    return 0


def _variants(args, ctx):
    for name in list_variants(load_test_config(args.config)):
        print(name)
    return 0


_COMMANDS = {
    "generate": _generate,
    "validate": _validate,
    "variants": _variants,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    _initialize_logger(args.log_level.upper())

    ctx = ResolutionContext(meta={"command": args.command})
    try:
        return _COMMANDS[args.command](args, ctx)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        _flush_events(ctx)


if __name__ == "__main__":
    sys.exit(main())

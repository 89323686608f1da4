# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from ..config.loader import load_config
from ..config.models import CONFIG_FILENAME, split_list
from ..errors import ConfigError
from .commands import register_commands
from .shared import CLIContext, build_cli_logger

app = typer.Typer(
    name="udeps",
    help="A micro-dependency manager for TypeScript and JavaScript projects.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Path to the package directory; defaults to the nearest directory with package.json.",
        file_okay=False,
    ),
    config_file: Path = typer.Option(
        Path(CONFIG_FILENAME),
        "--config",
        help="Path to the udeps configuration file, relative to the package directory.",
    ),
    lib: str | None = typer.Option(
        None,
        "--lib",
        help=(
            "Comma-separated platform libraries in tsconfig.json format, plus 'node' for Node.js built-ins "
            "and '[inherit]' to inherit from the project's tsconfig.json."
        ),
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        help="Path to a .js or .ts file which stores installed dependencies, relative to the package directory.",
    ),
    registry: str | None = typer.Option(
        None,
        "--registry",
        help="Comma-separated list of file paths or URLs to udeps catalogs.",
    ),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji output."),
) -> None:
    """Load the configuration once and share it with the invoked command."""

    logger = build_cli_logger(emoji=emoji, debug=debug)
    logger.debug("Debug logging enabled")
    overrides: dict[str, Any] = {
        "outputFile": output or None,
        "lib": split_list(lib) if lib else None,
        "registry": split_list(registry) if registry else None,
    }
    try:
        result = load_config(project=project, config_file=config_file, overrides=overrides)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc
    for warning in result.warnings:
        logger.warn(warning)
    config = result.config
    logger.debug(f"project={config.project} output={config.output_path} lib={','.join(config.lib)}")
    for locator in config.registry:
        logger.debug(f"registry={locator}")
    ctx.obj = CLIContext(config=config, logger=logger)


register_commands(app)


def run() -> None:
    """Invoke the udeps CLI."""

    app()


__all__ = ["app", "main", "run"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command rendering catalog reference pages."""

from __future__ import annotations

from pathlib import Path

import typer

from ...docs import generate_catalog_docs
from ...errors import ArtifactError
from ..shared import get_cli_context

DEFAULT_DOCS_DIR = Path("docs") / "registry"


def docs_command(
    ctx: typer.Context,
    sources: list[str] | None = typer.Argument(None, help="Catalog locators; defaults to the configured registry."),
    out: Path = typer.Option(DEFAULT_DOCS_DIR, "--out", help="Directory receiving the Markdown pages."),
) -> None:
    """Generate Markdown documentation for catalogs."""

    state = get_cli_context(ctx)
    config, logger = state.config, state.logger
    out_dir = out if out.is_absolute() else config.project / out
    try:
        result = generate_catalog_docs(
            sources or config.registry,
            out_dir,
            base_dir=config.project,
            timeout=config.fetch_timeout,
        )
    except ArtifactError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc
    for error in result.failures:
        logger.warn(str(error))
    for page in result.written:
        logger.ok(f"Wrote {page}")
    if result.failures and not result.written:
        raise typer.Exit(code=1)


def register(app: typer.Typer) -> None:
    """Register the ``docs`` command on ``app``."""

    app.command("docs")(docs_command)


__all__ = ["docs_command", "register"]

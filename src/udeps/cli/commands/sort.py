# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command sorting the declarations of a catalog or output file."""

from __future__ import annotations

from pathlib import Path

import typer

from ...artifact.patcher import sort_file
from ...errors import ArtifactError
from ..shared import get_cli_context


def sort_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Catalog or output file to sort in place."),
) -> None:
    """Sort exported functions by name, keeping the file header on top."""

    logger = get_cli_context(ctx).logger
    try:
        artifact = sort_file(file)
    except ArtifactError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc
    logger.ok(f"Sorted {len(artifact.declarations)} functions in {file}")


def register(app: typer.Typer) -> None:
    """Register the ``sort`` command on ``app``."""

    app.command("sort")(sort_command)


__all__ = ["register", "sort_command"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command deleting micro-dependencies from the output file."""

from __future__ import annotations

import typer

from ...artifact.patcher import remove_from_file
from ...errors import ArtifactError
from ..shared import get_cli_context


def remove_command(
    ctx: typer.Context,
    names: list[str] = typer.Argument(..., help="Names of the micro-dependencies to remove."),
) -> None:
    """Remove micro-dependencies from your project's udeps file."""

    state = get_cli_context(ctx)
    output = state.config.output_path
    logger = state.logger
    try:
        result = remove_from_file(output, names)
    except ArtifactError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc
    for issue in result.missing:
        logger.issue(issue)
    for name in result.removed:
        logger.ok(f"Function {name} removed from {output}")


def register(app: typer.Typer) -> None:
    """Register the ``remove`` command on ``app``."""

    app.command("remove")(remove_command)


__all__ = ["register", "remove_command"]

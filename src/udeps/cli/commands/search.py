# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command searching every configured catalog."""

from __future__ import annotations

import typer

from ...obsolescence import describe
from ...search import MAX_RESULTS, search_catalogs
from ..shared import get_cli_context


def search_command(
    ctx: typer.Context,
    query: list[str] = typer.Argument(..., help="Search query."),
) -> None:
    """Search the micro-dependency catalogs."""

    state = get_cli_context(ctx)
    logger = state.logger
    text = " ".join(query)
    logger.info(f"Searching for: {text}")
    report = search_catalogs(state.config, text)
    for load in report.failures:
        logger.warn(str(load.error))
    for load in report.loaded:
        logger.debug(f"Loaded entries={len(load.entries)} catalog={load.locator}")
    if report.unsupported:
        logger.info(f"Found {len(report.unsupported)} unsupported matches")
    if not report.supported:
        logger.warn("No supported matches found in any catalog.")
        return
    total = len(report.supported)
    logger.ok(f"Found {'lots of' if total > MAX_RESULTS else total} supported matches:")
    for match in report.supported[:MAX_RESULTS]:
        logger.echo(f"- {match.entry.name}: {match.entry.summary}")
        if match.reason is not None and (hint := describe(match.entry, match.reason)):
            logger.echo(f"  {hint}")
    if total > MAX_RESULTS:
        logger.echo(f"...and {total - MAX_RESULTS} more results.")


def register(app: typer.Typer) -> None:
    """Register the ``search`` command on ``app``."""

    app.command("search")(search_command)


__all__ = ["register", "search_command"]

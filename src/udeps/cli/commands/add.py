# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command copying catalog entries into the output file."""

from __future__ import annotations

import typer

from ...artifact.dialect import detect_dialect, ensure_insertable
from ...artifact.patcher import add_to_file
from ...catalog.models import CatalogEntry
from ...errors import ArtifactError, Issue
from ...obsolescence import describe
from ...selection import Selection, select_entry
from ..shared import CLILogger, get_cli_context

OBSOLETE_PROMPT = "This implementation is obsolete. Are you sure you want to add it?"


def add_command(
    ctx: typer.Context,
    names: list[str] = typer.Argument(..., help="Names of the micro-dependencies to add."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Add obsolete implementations without asking."),
) -> None:
    """Add micro-dependencies to your project's udeps file."""

    state = get_cli_context(ctx)
    config, logger = state.config, state.logger
    output = config.output_path
    try:
        ensure_insertable(detect_dialect(output), output)
    except ArtifactError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    accepted: list[CatalogEntry] = []
    reported: set[Issue] = set()
    failed = False
    for name in names:
        logger.info(f"Adding micro-dependency: {name}")
        selection = select_entry(config, name)
        _report_selection(selection, logger, reported)
        candidate = selection.candidate
        if candidate is None:
            logger.fail(f"No supported implementation of {name} was found.")
            failed = True
            continue
        logger.ok(f"Supported implementation of {name} found in catalog {candidate.locator}")
        if candidate.reason is not None:
            hint = describe(candidate.entry, candidate.reason)
            if hint:
                logger.warn(hint)
            if not yes and not typer.confirm(OBSOLETE_PROMPT, default=False):
                logger.info(f"Skipped {name}.")
                continue
        accepted.append(candidate.entry)

    if accepted:
        try:
            result = add_to_file(output, accepted)
        except ArtifactError as exc:
            logger.fail(str(exc))
            raise typer.Exit(code=1) from exc
        for issue in result.conflicts:
            logger.issue(issue)
            failed = True
        for name in result.added:
            logger.ok(f"Added {name} to {output}")
        if not result.added:
            logger.debug(f"output={output} unchanged")
    if failed:
        raise typer.Exit(code=1)


def _report_selection(selection: Selection, logger: CLILogger, reported: set[Issue]) -> None:
    for load in selection.failures:
        logger.warn(str(load.error))
    for issue in selection.catalog_issues:
        if issue not in reported:
            reported.add(issue)
            logger.issue(issue)
    for issue in selection.skipped:
        logger.info(issue.message)


def register(app: typer.Typer) -> None:
    """Register the ``add`` command on ``app``."""

    app.command("add")(add_command)


__all__ = ["add_command", "register"]

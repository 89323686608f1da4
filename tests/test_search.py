# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for fuzzy catalog search and entry selection."""

from __future__ import annotations

from pathlib import Path

import pytest

try:
    import tree_sitter_typescript  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("tree-sitter-typescript not available", allow_module_level=True)
else:
    _ = tree_sitter_typescript

from udeps.catalog import parse_catalog
from udeps.config import UdepsConfig
from udeps.errors import IssueKind, SourceUnavailableError
from udeps.search import match_score, rank_entries, search_catalogs
from udeps.selection import select_entry


def _config(project_dir: Path, *registry: str, lib: tuple[str, ...] = ("es2020",)) -> UdepsConfig:
    return UdepsConfig(registry=list(registry), project=project_dir, lib=list(lib))


def test_match_score_prefers_exact_substrings() -> None:
    assert match_score("clamp", "clamp Clamps a number") == 1.0
    assert match_score("CLAMP", "clamp") == 1.0
    assert match_score("", "anything") == 0.0
    assert 0.5 < match_score("clmap", "clamp a value") < 1.0


def test_rank_entries_orders_by_score(sample_catalog_text: str) -> None:
    catalog = parse_catalog(sample_catalog_text, locator="sample.ts")

    hits = rank_entries("clamp", catalog.entries)

    assert hits[0].entry.name == "clamp"
    assert hits[0].score == 1.0
    assert rank_entries("zzzzzz", catalog.entries) == []


def test_search_splits_supported_and_unsupported(project_dir: Path) -> None:
    report = search_catalogs(_config(project_dir, "catalog.ts"), "environment variable")

    assert [entry.name for entry in report.unsupported] == ["env"]
    assert all(match.entry.name != "env" for match in report.supported)


def test_search_reports_obsolescence(project_dir: Path) -> None:
    report = search_catalogs(_config(project_dir, "catalog.ts", lib=("es2022",)), "own property")

    assert report.supported[0].entry.name == "hasOwn"
    assert report.supported[0].reason is not None
    assert report.supported[0].reason.replacement == "Object.hasOwn"


def test_search_continues_past_failed_sources(project_dir: Path) -> None:
    report = search_catalogs(_config(project_dir, "missing.ts", "catalog.ts"), "clamp")

    assert [load.locator for load in report.failures] == ["missing.ts"]
    assert isinstance(report.failures[0].error, SourceUnavailableError)
    assert [load.locator for load in report.loaded] == ["catalog.ts"]
    assert report.supported[0].entry.name == "clamp"


def test_select_entry_stops_at_first_supported(project_dir: Path) -> None:
    (project_dir / "second.ts").write_text("{ this is not typescript", encoding="utf-8")

    selection = select_entry(_config(project_dir, "catalog.ts", "second.ts"), "clamp")

    assert selection.candidate is not None
    assert selection.candidate.locator == "catalog.ts"
    assert not selection.candidate.obsolete
    assert [load.locator for load in selection.loads] == ["catalog.ts"]


def test_select_entry_skips_unsupported_implementations(project_dir: Path) -> None:
    (project_dir / "browser.ts").write_text(
        "/**\n * Reads an environment variable.\n * @requires es5\n */\n"
        "export function env(name: string): string | undefined {\n  return undefined;\n}\n",
        encoding="utf-8",
    )

    selection = select_entry(_config(project_dir, "catalog.ts", "browser.ts"), "env")

    assert selection.candidate is not None
    assert selection.candidate.locator == "browser.ts"
    assert [issue.kind for issue in selection.skipped] == [IssueKind.CAPABILITY_UNSATISFIED]
    assert "node" in selection.skipped[0].message


def test_select_entry_reports_not_found(project_dir: Path) -> None:
    selection = select_entry(_config(project_dir, "catalog.ts", "missing.ts"), "nothing")

    assert selection.candidate is None
    assert [load.locator for load in selection.failures] == ["missing.ts"]
    assert any(issue.kind is IssueKind.MISSING_DOCUMENTATION for issue in selection.catalog_issues)

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the udeps commands."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

try:
    import tree_sitter_typescript  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("tree-sitter-typescript not available", allow_module_level=True)
else:
    _ = tree_sitter_typescript

from udeps.cli.app import app
from udeps.cli.shared import CLILogger


def _invoke(project_dir: Path, *args: str, input: str | None = None):
    runner = CliRunner()
    return runner.invoke(app, ["--project", str(project_dir), "--no-emoji", *args], input=input)


def test_add_creates_output_file(project_dir: Path) -> None:
    result = _invoke(project_dir, "add", "clamp")

    assert result.exit_code == 0, result.output
    assert "Supported implementation of clamp found in catalog catalog.ts" in result.output
    text = (project_dir / "udeps.ts").read_text(encoding="utf-8")
    assert "export function clamp(value: number, min: number, max: number): number {" in text
    assert "@requires" not in text


def test_add_existing_entry_is_a_conflict(project_dir: Path) -> None:
    assert _invoke(project_dir, "add", "clamp").exit_code == 0
    before = (project_dir / "udeps.ts").read_text(encoding="utf-8")

    result = _invoke(project_dir, "add", "clamp")

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (project_dir / "udeps.ts").read_text(encoding="utf-8") == before


def test_add_unsupported_entry_fails(project_dir: Path) -> None:
    result = _invoke(project_dir, "add", "env")

    assert result.exit_code == 1
    assert "requires unsupported capabilities: node" in result.output
    assert "No supported implementation of env was found." in result.output
    assert not (project_dir / "udeps.ts").exists()


def test_add_obsolete_entry_asks_for_confirmation(project_dir: Path) -> None:
    declined = _invoke(project_dir, "--lib", "es2022", "add", "hasOwn", input="n\n")

    assert declined.exit_code == 0, declined.output
    assert "Use the native function Object.hasOwn instead" in declined.output
    assert not (project_dir / "udeps.ts").exists()

    accepted = _invoke(project_dir, "--lib", "es2022", "add", "hasOwn", "--yes")

    assert accepted.exit_code == 0, accepted.output
    assert "export function hasOwn" in (project_dir / "udeps.ts").read_text(encoding="utf-8")


def test_add_to_javascript_output_erases_types(project_dir: Path) -> None:
    result = _invoke(project_dir, "--output", "lib/udeps.js", "add", "clamp", "last", "--yes")

    assert result.exit_code == 0, result.output
    text = (project_dir / "lib" / "udeps.js").read_text(encoding="utf-8")
    assert "export function clamp(value, min, max) {" in text
    assert "export function last(items) {" in text


def test_add_to_commonjs_output_is_rejected(project_dir: Path) -> None:
    result = _invoke(project_dir, "--output", "udeps.cjs", "add", "clamp")

    assert result.exit_code == 1
    assert "CommonJS" in result.output
    assert not (project_dir / "udeps.cjs").exists()


def test_remove_entry(project_dir: Path) -> None:
    _invoke(project_dir, "add", "clamp", "hasOwn")

    result = _invoke(project_dir, "remove", "clamp", "missing")

    assert result.exit_code == 0, result.output
    assert "Function clamp removed" in result.output
    assert "Function 'missing' was not found in the output file." in result.output
    text = (project_dir / "udeps.ts").read_text(encoding="utf-8")
    assert "function clamp" not in text
    assert "function hasOwn" in text


def test_remove_without_output_file_fails(project_dir: Path) -> None:
    result = _invoke(project_dir, "remove", "clamp")

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_search_lists_matches(project_dir: Path) -> None:
    result = _invoke(project_dir, "search", "clamp")

    assert result.exit_code == 0, result.output
    assert "- clamp: Clamps a number between two bounds" in result.output


def test_search_reports_unsupported_matches(project_dir: Path) -> None:
    result = _invoke(project_dir, "search", "reads", "an", "environment", "variable")

    assert result.exit_code == 0, result.output
    assert "Found 1 unsupported matches" in result.output
    assert "- env:" not in result.output


def test_search_without_matches(project_dir: Path) -> None:
    result = _invoke(project_dir, "search", "zzzzqqqq")

    assert result.exit_code == 0, result.output
    assert "No supported matches found in any catalog." in result.output


def test_docs_writes_pages(project_dir: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "pages"

    result = _invoke(project_dir, "docs", "--out", str(out_dir))

    assert result.exit_code == 0, result.output
    assert (out_dir / "catalog.md").read_text(encoding="utf-8").startswith("# catalog\n")


def test_sort_rewrites_file(project_dir: Path) -> None:
    target = project_dir / "helpers.ts"
    target.write_text("export function b() {}\n\nexport function a() {}\n", encoding="utf-8")

    result = _invoke(project_dir, "sort", str(target))

    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == "export function a() {}\n\nexport function b() {}\n"


def test_invalid_config_exits(project_dir: Path) -> None:
    (project_dir / "udeps.json").write_text("{oops", encoding="utf-8")

    result = _invoke(project_dir, "search", "clamp")

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_logger_prefixes_follow_emoji_setting() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, no_color=True, width=200)

    CLILogger(console=console, use_emoji=True).ok("done")
    CLILogger(console=console, use_emoji=False).warn("careful")
    CLILogger(console=console, use_emoji=False).debug("hidden")

    assert buffer.getvalue() == "✅ done\ncareful\n"


def test_no_emoji_output_has_no_glyphs(project_dir: Path) -> None:
    result = _invoke(project_dir, "add", "clamp")

    assert result.exit_code == 0, result.output
    assert not any(glyph in result.output for glyph in ("✅", "ℹ️", "⚠️", "❌"))

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the managed output file patcher."""

from __future__ import annotations

from pathlib import Path

import pytest

try:
    import tree_sitter_typescript  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("tree-sitter-typescript not available", allow_module_level=True)
else:
    _ = tree_sitter_typescript

from udeps.artifact import (
    Declaration,
    ManagedArtifact,
    Passthrough,
    add_to_file,
    detect_dialect,
    insert_entries,
    remove_entries,
    remove_from_file,
    sort_declarations,
    sort_file,
)
from udeps.artifact.patcher import strip_metadata
from udeps.catalog import Catalog, parse_catalog
from udeps.errors import ArtifactMissingError, ArtifactSyntaxError, IssueKind, UnsupportedArtifactDialectError

TS = detect_dialect(Path("udeps.ts"))
JS = detect_dialect(Path("udeps.js"))

EXISTING = """\
import { helper } from "./helper";

export function alpha() {
  return helper();
}

export function gamma() {
  return 3;
}
"""


@pytest.fixture
def catalog(sample_catalog_text: str) -> Catalog:
    return parse_catalog(sample_catalog_text, locator="sample.ts")


def _entry(catalog: Catalog, name: str):
    entry = catalog.find(name)
    assert entry is not None
    return entry


def test_insert_into_empty_artifact(catalog: Catalog) -> None:
    result = insert_entries(ManagedArtifact.empty(), [_entry(catalog, "clamp")], TS)

    text = result.artifact.render()
    assert result.added == ("clamp",)
    assert text.startswith("/**\n * Clamps a number between two bounds.")
    assert "@requires" not in text
    assert " * @param value   Number to clamp\n" in text
    assert text.endswith("return Math.min(Math.max(value, min), max);\n}\n")


def test_second_insert_is_a_conflict(catalog: Catalog) -> None:
    clamp = _entry(catalog, "clamp")
    first = insert_entries(ManagedArtifact.empty(), [clamp], TS)
    second = insert_entries(first.artifact, [clamp], TS)

    assert second.added_count == 0
    assert second.artifact is first.artifact
    assert second.artifact.render() == first.artifact.render()
    assert [issue.kind for issue in second.conflicts] == [IssueKind.DUPLICATE_ENTRY_CONFLICT]


def test_insert_keeps_name_order_and_header(catalog: Catalog) -> None:
    artifact = ManagedArtifact.parse(EXISTING)
    result = insert_entries(artifact, [_entry(catalog, "clamp")], TS)
    text = result.artifact.render()

    assert result.artifact.names == ("alpha", "clamp", "gamma")
    assert text.startswith('import { helper } from "./helper";\n\nexport function alpha() {')
    assert text.index("function alpha") < text.index("function clamp") < text.index("function gamma")
    assert "}\n\n/**\n * Clamps" in text
    assert "max);\n}\n\nexport function gamma() {" in text


def test_insert_appends_after_last_declaration(catalog: Catalog) -> None:
    artifact = ManagedArtifact.parse("export function alpha() {}\n\nconsole.log(alpha);\n")
    result = insert_entries(artifact, [_entry(catalog, "hasOwn")], TS)

    assert [type(segment) for segment in result.artifact.segments] == [Declaration, Declaration, Passthrough]
    assert result.artifact.names == ("alpha", "hasOwn")


def test_insert_reports_conflict_after_larger_name(catalog: Catalog) -> None:
    text = "export function zeta() {}\n\nexport function clamp() {}\n"
    result = insert_entries(ManagedArtifact.parse(text), [_entry(catalog, "clamp")], TS)

    assert result.added == ()
    assert result.conflicts[0].subject == "clamp"


def test_insert_processes_every_entry(catalog: Catalog) -> None:
    entries = [_entry(catalog, "last"), _entry(catalog, "clamp"), _entry(catalog, "last")]
    result = insert_entries(ManagedArtifact.empty(), entries, TS)

    assert result.added == ("last", "clamp")
    assert len(result.conflicts) == 1
    assert result.artifact.names == ("clamp", "last")


def test_untyped_destination_erases_types(catalog: Catalog) -> None:
    result = insert_entries(ManagedArtifact.empty(), [_entry(catalog, "clamp")], JS)

    assert result.artifact.render().endswith(
        "export function clamp(value, min, max) {\n  return Math.min(Math.max(value, min), max);\n}\n"
    )


def test_strip_metadata_drops_empty_doc_blocks() -> None:
    comments = "/**\n * @requires ES2015\n * @deprecated inline\n */\n// keep me\n"

    assert strip_metadata(comments) == "// keep me\n"
    assert strip_metadata("/**\n * Text.\n * @requires node\n */\n") == "/**\n * Text.\n */\n"


def test_strip_metadata_drops_tag_continuation_lines() -> None:
    comments = (
        "/**\n"
        " * Checks own properties.\n"
        " * @param obj   Object to check\n"
        " * @deprecated  since=es2022.object,\n"
        " *   replace-with={@link Object.hasOwn}\n"
        " * @returns     Whether the property is own\n"
        " */\n"
    )

    assert strip_metadata(comments) == (
        "/**\n * Checks own properties.\n * @param obj   Object to check\n * @returns     Whether the property is own\n */\n"
    )


def test_strip_metadata_handles_single_line_blocks() -> None:
    assert strip_metadata("/** Reads a value. @requires node */\n") == "/** Reads a value. */\n"
    assert strip_metadata("/** @requires node */\n// keep\n") == "// keep\n"
    assert strip_metadata("/** See {@link Map} for details. */\n") == "/** See {@link Map} for details. */\n"


def test_insert_before_first_keeps_attached_header_on_top(catalog: Catalog) -> None:
    artifact = ManagedArtifact.parse("// Copyright 2025 Me\nexport function zeta() {}\n")
    result = insert_entries(artifact, [_entry(catalog, "clamp")], TS)
    text = result.artifact.render()

    assert result.artifact.names == ("clamp", "zeta")
    assert text.startswith("// Copyright 2025 Me\n/**\n * Clamps")
    assert text.endswith("max);\n}\n\nexport function zeta() {}\n")
    assert remove_entries(result.artifact, ["clamp"]).artifact.render() == (
        "// Copyright 2025 Me\nexport function zeta() {}\n"
    )


def test_sort_keeps_attached_header_on_top() -> None:
    text = "// Copyright 2025 Me\nexport function zeta() {}\n\nexport function beta() {}\n"

    assert sort_declarations(ManagedArtifact.parse(text)).render() == (
        "// Copyright 2025 Me\nexport function beta() {}\n\nexport function zeta() {}\n"
    )


def test_remove_entries_reports_missing() -> None:
    artifact = ManagedArtifact.parse(EXISTING)
    result = remove_entries(artifact, ["gamma", "delta"])

    assert result.removed == ("gamma",)
    assert [issue.kind for issue in result.missing] == [IssueKind.ENTRY_NOT_FOUND]
    assert result.artifact.render() == 'import { helper } from "./helper";\n\nexport function alpha() {\n  return helper();\n}\n'


def test_insert_then_remove_restores_text(catalog: Catalog) -> None:
    artifact = ManagedArtifact.parse(EXISTING)
    inserted = insert_entries(artifact, [_entry(catalog, "clamp")], TS).artifact

    assert remove_entries(inserted, ["clamp"]).artifact.render() == EXISTING


def test_parse_preserves_single_line_breaks() -> None:
    text = 'import a from "a";\nimport b from "b";\n\nexport function one() {}\n'

    assert ManagedArtifact.parse(text).render() == text
    assert ManagedArtifact.empty().render() == ""


def test_parse_rejects_syntax_errors() -> None:
    with pytest.raises(ArtifactSyntaxError):
        ManagedArtifact.parse("export function broken( {\n")


def test_sort_declarations_keeps_header_and_trailing() -> None:
    text = (
        "// header\n\n"
        "export function zeta() {}\n\n"
        "const marker = 1;\n\n"
        "export function beta() {}\n\n"
        "export function Alpha() {}\n"
    )
    artifact = sort_declarations(ManagedArtifact.parse(text))

    assert artifact.names == ("Alpha", "beta", "zeta")
    assert isinstance(artifact.segments[0], Passthrough)
    assert artifact.segments[0].text == "// header"
    assert artifact.segments[-1] == Passthrough(text="const marker = 1;", separator="\n\n")


@pytest.mark.parametrize("name", ["udeps.cjs", "udeps.cts"])
def test_commonjs_outputs_are_rejected(tmp_path: Path, catalog: Catalog, name: str) -> None:
    with pytest.raises(UnsupportedArtifactDialectError):
        add_to_file(tmp_path / name, [_entry(catalog, "clamp")])
    assert not (tmp_path / name).exists()


@pytest.mark.parametrize("name", ["udeps.d.ts", "udeps.txt"])
def test_unknown_outputs_are_rejected(name: str) -> None:
    with pytest.raises(UnsupportedArtifactDialectError):
        detect_dialect(Path(name))


def test_add_to_file_writes_only_when_added(tmp_path: Path, catalog: Catalog) -> None:
    target = tmp_path / "src" / "udeps.ts"
    first = add_to_file(target, [_entry(catalog, "clamp")])
    written = target.read_text(encoding="utf-8")
    target.write_text(written + "\n\n", encoding="utf-8")
    second = add_to_file(target, [_entry(catalog, "clamp")])

    assert first.added == ("clamp",)
    assert second.added_count == 0
    assert target.read_text(encoding="utf-8") == written + "\n\n"


def test_remove_from_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ArtifactMissingError):
        remove_from_file(tmp_path / "udeps.ts", ["clamp"])


def test_remove_from_file_rewrites(tmp_path: Path) -> None:
    target = tmp_path / "udeps.ts"
    target.write_text(EXISTING, encoding="utf-8")
    result = remove_from_file(target, ["alpha"])

    assert result.removed == ("alpha",)
    assert "function alpha" not in target.read_text(encoding="utf-8")


def test_sort_file_rewrites_in_place(tmp_path: Path) -> None:
    target = tmp_path / "udeps.js"
    target.write_text("export function b() {}\n\nexport function a() {}\n", encoding="utf-8")
    sort_file(target)

    assert target.read_text(encoding="utf-8") == "export function a() {}\n\nexport function b() {}\n"

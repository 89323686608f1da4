# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for JSDoc tag parsing."""

from __future__ import annotations

from udeps.tags import (
    DeprecatedTag,
    LicenseTag,
    ObsolescenceReason,
    RequiresTag,
    UnknownTag,
    comment_lines,
    parse_doc_comment,
    parse_tag_properties,
    unwrap_link,
)

DOC = """/**
 * Checks if an array includes a specific item
 * (except `NaN`).
 * @param arr   Array to check
 * @requires    ES5
 * @requires    ES2015.Core
 * @deprecated  since=ES2016.Array.Include, replace-with={@link Array.prototype.includes},
 *              inline=consider
 */"""


def test_parse_doc_comment_builds_typed_tags() -> None:
    doc = parse_doc_comment(DOC)

    assert doc.description == "Checks if an array includes a specific item (except `NaN`)."
    assert [type(tag) for tag in doc.tags] == [UnknownTag, RequiresTag, RequiresTag, DeprecatedTag]
    requires = [tag.capability for tag in doc.tags if isinstance(tag, RequiresTag)]
    assert requires == ["ES5", "ES2015.Core"]
    deprecated = doc.tags_of("deprecated")[0]
    assert isinstance(deprecated, DeprecatedTag)
    assert deprecated.reason == ObsolescenceReason(
        inline="consider",
        since="ES2016.Array.Include",
        replacement="Array.prototype.includes",
    )


def test_parse_tag_properties_handles_flags_and_links() -> None:
    properties = parse_tag_properties("inline, since=ES2019, use={@link Object.fromEntries}")

    assert properties == {"inline": "", "since": "ES2019", "use": "Object.fromEntries"}


def test_replacement_aliases_populate_replacement() -> None:
    for key in ("replace-with", "replacement", "replaceWith"):
        reason = ObsolescenceReason.from_properties(parse_tag_properties(f"{key}={{@link Object.hasOwn}}"))
        assert reason.replacement == "Object.hasOwn"


def test_bare_inline_flag_is_an_empty_string() -> None:
    reason = ObsolescenceReason.from_properties(parse_tag_properties("inline"))

    assert reason == ObsolescenceReason(inline="")


def test_unwrap_link_leaves_plain_values() -> None:
    assert unwrap_link("{@link Array.prototype.at}") == "Array.prototype.at"
    assert unwrap_link("{@link Array.prototype.at | at}") == "Array.prototype.at"
    assert unwrap_link("Object.values") == "Object.values"


def test_license_tag_and_line_comments() -> None:
    doc = parse_doc_comment("/**\n * Module header\n * @license 0BSD\n */")

    assert doc.description == "Module header"
    assert doc.tags == (LicenseTag(title="license", raw="0BSD", license="0BSD"),)
    assert comment_lines("// BSD Zero Clause License") == ["BSD Zero Clause License"]

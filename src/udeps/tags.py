# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse JSDoc blocks into typed tag records.

Catalog metadata lives in free-text JSDoc tags. The raw text is parsed exactly
once, when a catalog is loaded, into one of a closed set of records so that
evaluation code never re-parses tag values.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, TypeAlias

REQUIRES_TAG: Final[str] = "requires"
DEPRECATED_TAG: Final[str] = "deprecated"
LICENSE_TAG: Final[str] = "license"
METADATA_TAGS: Final[frozenset[str]] = frozenset({REQUIRES_TAG, DEPRECATED_TAG})

_REPLACEMENT_KEYS: Final[tuple[str, ...]] = ("replace-with", "replacement", "replaceWith", "replace", "use")
_LINK_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{@link\s+([^}|]+?)\s*(?:\|[^}]*)?\}")
_PROPERTY_SPLIT: Final[re.Pattern[str]] = re.compile(r"\s*,\s*")
_TAG_LINE: Final[re.Pattern[str]] = re.compile(r"^@(?P<title>[\w-]+)\s*(?P<value>.*)$")
_LINE_PREFIX: Final[re.Pattern[str]] = re.compile(r"^\s*\*?\s?")


@dataclass(frozen=True, slots=True)
class ObsolescenceReason:
    """Structured payload of a ``@deprecated`` tag.

    Attributes:
        inline: ``"recommend"``, ``"consider"`` or free text when inlining is
            suggested; an empty string marks a bare ``inline`` flag.
        since: Capability token that provides the native replacement.
        replacement: Name of the native replacement, links unwrapped.
    """

    inline: str | None = None
    since: str | None = None
    replacement: str | None = None

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> ObsolescenceReason:
        """Build a reason from parsed ``key=value`` properties.

        Args:
            properties: Mapping produced by :func:`parse_tag_properties`.

        Returns:
            ObsolescenceReason: Reason carrying every recognised property.
        """

        replacement = next((properties[key] for key in _REPLACEMENT_KEYS if properties.get(key)), None)
        return cls(
            inline=properties.get("inline"),
            since=properties.get("since") or None,
            replacement=replacement,
        )


@dataclass(frozen=True, slots=True)
class RequiresTag:
    """``@requires <capability>`` tag."""

    title: str
    raw: str
    capability: str


@dataclass(frozen=True, slots=True)
class DeprecatedTag:
    """``@deprecated key=value, ...`` tag."""

    title: str
    raw: str
    reason: ObsolescenceReason


@dataclass(frozen=True, slots=True)
class LicenseTag:
    """``@license <identifier>`` tag."""

    title: str
    raw: str
    license: str


@dataclass(frozen=True, slots=True)
class UnknownTag:
    """Any other tag, such as ``@param`` or ``@returns``."""

    title: str
    raw: str


DocTag: TypeAlias = RequiresTag | DeprecatedTag | LicenseTag | UnknownTag


@dataclass(frozen=True, slots=True)
class DocComment:
    """Parsed JSDoc block.

    Attributes:
        description: Free text preceding the first tag, lines joined by spaces.
        tags: Tags in source order.
    """

    description: str
    tags: tuple[DocTag, ...]

    def tags_of(self, title: str) -> tuple[DocTag, ...]:
        """Return tags whose title equals ``title``.

        Args:
            title: Tag title without the ``@`` prefix.

        Returns:
            tuple[DocTag, ...]: Matching tags in source order.
        """

        return tuple(tag for tag in self.tags if tag.title == title)


def unwrap_link(value: str) -> str:
    """Return the bare name referenced by a ``{@link ...}`` wrapper.

    Args:
        value: Property value that may contain a link.

    Returns:
        str: Linked name when a link is present, otherwise ``value`` unchanged.
    """

    match = _LINK_PATTERN.search(value)
    return match.group(1).strip() if match else value


def parse_tag_properties(raw: str) -> dict[str, str]:
    """Parse comma-separated ``key=value`` pairs.

    Bare words without ``=`` become flag keys with an empty value.

    Args:
        raw: Raw tag text.

    Returns:
        dict[str, str]: Properties in source order, link wrappers unwrapped.
    """

    properties: dict[str, str] = {}
    for part in _PROPERTY_SPLIT.split(raw.strip()):
        if not part:
            continue
        key, _, value = part.partition("=")
        value = value.strip()
        properties[key.strip()] = unwrap_link(value) if value else ""
    return properties


def build_tag(title: str, raw: str) -> DocTag:
    """Return the typed record for a single tag.

    Args:
        title: Tag title without the ``@`` prefix.
        raw: Tag text following the title.

    Returns:
        DocTag: Typed tag record.
    """

    value = raw.strip()
    if title == REQUIRES_TAG and value:
        return RequiresTag(title=title, raw=value, capability=value.split()[0])
    if title == DEPRECATED_TAG:
        reason = ObsolescenceReason.from_properties(parse_tag_properties(value))
        return DeprecatedTag(title=title, raw=value, reason=reason)
    if title == LICENSE_TAG and value:
        return LicenseTag(title=title, raw=value, license=value)
    return UnknownTag(title=title, raw=value)


def comment_lines(comment: str) -> list[str]:
    """Return the content lines of a block or line comment.

    Args:
        comment: Comment text including its delimiters.

    Returns:
        list[str]: Lines with comment delimiters and ``*`` gutters removed.
    """

    text = comment.strip()
    if text.startswith("//"):
        return [line.strip().removeprefix("//").strip() for line in text.splitlines()]
    text = text.removeprefix("/**").removeprefix("/*").removesuffix("*/")
    return [_LINE_PREFIX.sub("", line, count=1).rstrip() for line in text.splitlines()]


def parse_doc_comment(comment: str) -> DocComment:
    """Parse a ``/** ... */`` block into a description and typed tags.

    Tag text continues over following lines until the next tag starts.

    Args:
        comment: Comment text including its delimiters.

    Returns:
        DocComment: Parsed description and tags.
    """

    description: list[str] = []
    pending: list[tuple[str, list[str]]] = []
    for line in comment_lines(comment):
        stripped = line.strip()
        match = _TAG_LINE.match(stripped)
        if match is not None:
            pending.append((match.group("title"), [match.group("value")]))
        elif pending:
            if stripped:
                pending[-1][1].append(stripped)
        elif stripped:
            description.append(stripped)
    tags = tuple(build_tag(title, " ".join(parts)) for title, parts in pending)
    return DocComment(description=" ".join(description), tags=tags)


__all__ = [
    "DEPRECATED_TAG",
    "LICENSE_TAG",
    "METADATA_TAGS",
    "REQUIRES_TAG",
    "DeprecatedTag",
    "DocComment",
    "DocTag",
    "LicenseTag",
    "ObsolescenceReason",
    "RequiresTag",
    "UnknownTag",
    "build_tag",
    "comment_lines",
    "parse_doc_comment",
    "parse_tag_properties",
    "unwrap_link",
]

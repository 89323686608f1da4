# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Insert, remove and sort declarations in managed output files.

The ``*_entries`` and :func:`sort_declarations` functions are pure
transformations over :class:`ManagedArtifact`; the ``*_file`` helpers wrap
them with the read and write policy of the command surface.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Final

from ..catalog.models import CatalogEntry
from ..errors import ArtifactMissingError, ArtifactReadError, ArtifactWriteError, Issue, IssueKind
from ..syntax.erasure import erase_types
from ..tags import METADATA_TAGS
from .dialect import ArtifactDialect, detect_dialect, ensure_insertable
from .model import BLANK_LINE, Declaration, ManagedArtifact, Passthrough, Segment

_DOC_BLOCK: Final[re.Pattern[str]] = re.compile(r"/\*\*.*?\*/", re.DOTALL)
# Tags start a line or follow whitespace; "{@link ...}" is not a tag.
_TAG_START: Final[re.Pattern[str]] = re.compile(r"(?<![{\w])@([\w-]+)")
_CLOSING: Final[str] = "*/"
_EMPTY_DOC_BLOCK: Final[re.Pattern[str]] = re.compile(r"/\*\*[\s*]*\*/[ \t]*\r?\n?")


@dataclass(frozen=True, slots=True)
class InsertResult:
    """Outcome of inserting catalog entries into an artifact."""

    artifact: ManagedArtifact
    added: tuple[str, ...] = ()
    conflicts: tuple[Issue, ...] = field(default_factory=tuple)

    @property
    def added_count(self) -> int:
        """Return how many entries were inserted."""

        return len(self.added)


@dataclass(frozen=True, slots=True)
class RemoveResult:
    """Outcome of removing declarations from an artifact."""

    artifact: ManagedArtifact
    removed: tuple[str, ...] = ()
    missing: tuple[Issue, ...] = field(default_factory=tuple)


def strip_metadata(comments: str) -> str:
    """Drop catalog-only ``@requires``/``@deprecated`` tags from doc comments.

    A tag runs until the next tag or the end of its block, so continuation
    lines go with it. A doc block left without content is removed entirely.

    Args:
        comments: Leading comments of a catalog entry.

    Returns:
        str: Comments safe to copy into a consumer project.
    """

    return _EMPTY_DOC_BLOCK.sub("", _DOC_BLOCK.sub(_strip_block, comments))


def _strip_block(match: re.Match[str]) -> str:
    block = match.group(0)
    if "\n" not in block:
        return _strip_single_line(block)
    lines = block.splitlines(keepends=True)
    kept = [lines[0]]
    dropping = False
    for line in lines[1:-1]:
        tag = _leading_tag(line)
        if tag is not None:
            dropping = tag in METADATA_TAGS
        if not dropping:
            kept.append(line)
    head, _, tail = lines[-1].partition(_CLOSING)
    tag = _leading_tag(head)
    if tag is not None:
        dropping = tag in METADATA_TAGS
    if dropping and head.strip():
        indent = head[: len(head) - len(head.lstrip())]
        kept.append(f"{indent}{_CLOSING}{tail}")
    else:
        kept.append(lines[-1])
    return "".join(kept)


def _strip_single_line(block: str) -> str:
    """Strip metadata tags from a ``/** text @tag value */`` block."""

    body = block[3 : -len(_CLOSING)]
    starts = [found.start() for found in _TAG_START.finditer(body)]
    if not starts:
        return block
    pieces = [body[: starts[0]]]
    pieces.extend(body[start:end] for start, end in zip(starts, [*starts[1:], len(body)]))
    kept = [piece for piece in pieces if _leading_tag(piece) not in METADATA_TAGS]
    if len(kept) == len(pieces):
        return block
    return f"/**{''.join(kept).rstrip()} {_CLOSING}"


def _leading_tag(line: str) -> str | None:
    """Return the tag title a comment line starts with, if any."""

    content = line.strip()
    if content.startswith("*"):
        content = content[1:].lstrip()
    found = _TAG_START.match(content)
    return found.group(1) if found is not None else None


def prepare_fragment(entry: CatalogEntry, dialect: ArtifactDialect) -> str:
    """Return the text inserted for ``entry`` into a file of ``dialect``.

    Args:
        entry: Catalog entry to copy.
        dialect: Dialect of the destination file.

    Returns:
        str: Stripped comments followed by the declaration, type-erased when
        the destination is untyped.
    """

    declaration = entry.declaration if dialect.typed else erase_types(entry.declaration, entry.grammar)
    return strip_metadata(entry.comments) + declaration


def insert_entries(
    artifact: ManagedArtifact,
    entries: Iterable[CatalogEntry],
    dialect: ArtifactDialect,
) -> InsertResult:
    """Insert ``entries`` in name order.

    Each entry goes before the first declaration whose name sorts at or after
    its own and takes over the line break that preceded that segment. A name
    already present is reported as a conflict and skipped; the remaining
    entries are still processed.

    Args:
        artifact: Artifact to extend.
        entries: Catalog entries in processing order.
        dialect: Dialect of the destination file.

    Returns:
        InsertResult: New artifact, inserted names and conflicts.
    """

    segments = list(artifact.segments)
    added: list[str] = []
    conflicts: list[Issue] = []
    for entry in entries:
        index, existing = _insertion_point(segments, entry.name)
        if existing:
            conflicts.append(
                Issue(
                    kind=IssueKind.DUPLICATE_ENTRY_CONFLICT,
                    subject=entry.name,
                    message=f"Function '{entry.name}' already exists in the output file.",
                )
            )
            continue
        separator = BLANK_LINE
        if index < len(segments):
            separator = segments[index].separator
            segments[index] = replace(segments[index], separator=BLANK_LINE)
        segments.insert(index, Declaration(name=entry.name, text=prepare_fragment(entry, dialect), separator=separator))
        added.append(entry.name)
    if not added:
        return InsertResult(artifact=artifact, conflicts=tuple(conflicts))
    return InsertResult(
        artifact=ManagedArtifact(segments=tuple(segments)),
        added=tuple(added),
        conflicts=tuple(conflicts),
    )


def remove_entries(artifact: ManagedArtifact, names: Iterable[str]) -> RemoveResult:
    """Remove the declarations called ``names``.

    Args:
        artifact: Artifact to shrink.
        names: Declaration names to delete.

    Returns:
        RemoveResult: New artifact, removed names and not-found warnings.
    """

    segments = list(artifact.segments)
    removed: list[str] = []
    missing: list[Issue] = []
    for name in names:
        index = next(
            (
                position
                for position, segment in enumerate(segments)
                if isinstance(segment, Declaration) and segment.name == name
            ),
            None,
        )
        if index is None:
            missing.append(
                Issue(
                    kind=IssueKind.ENTRY_NOT_FOUND,
                    subject=name,
                    message=f"Function '{name}' was not found in the output file.",
                )
            )
            continue
        if index + 1 < len(segments):
            segments[index + 1] = replace(segments[index + 1], separator=segments[index].separator)
        del segments[index]
        removed.append(name)
    return RemoveResult(artifact=ManagedArtifact(segments=tuple(segments)), removed=tuple(removed), missing=tuple(missing))


def sort_declarations(artifact: ManagedArtifact) -> ManagedArtifact:
    """Return ``artifact`` with its declarations sorted by name.

    Content before the first declaration stays on top; other non-declaration
    segments follow the sorted declarations in their original order. Line
    breaks between declarations stay in place while the names move.

    Args:
        artifact: Artifact to reorder.

    Returns:
        ManagedArtifact: Reordered artifact.
    """

    segments = artifact.segments
    first = next((index for index, segment in enumerate(segments) if isinstance(segment, Declaration)), None)
    if first is None:
        return artifact
    header = segments[:first]
    rest = segments[first:]
    declarations = [segment for segment in rest if isinstance(segment, Declaration)]
    ordered = [
        replace(declaration, separator=slot.separator)
        for declaration, slot in zip(sorted(declarations, key=lambda item: item.name), declarations)
    ]
    trailing = [segment for segment in rest if isinstance(segment, Passthrough)]
    return ManagedArtifact(segments=(*header, *ordered, *trailing))


def read_artifact(path: Path, dialect: ArtifactDialect) -> ManagedArtifact:
    """Load the artifact at ``path``, empty when the file does not exist.

    Raises:
        ArtifactReadError: If the file exists but cannot be read.
        ArtifactSyntaxError: If the file does not parse.
    """

    if not path.exists():
        return ManagedArtifact.empty()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactReadError(f"Unable to read '{path}': {exc}") from exc
    return ManagedArtifact.parse(text, dialect.grammar)


def write_artifact(path: Path, artifact: ManagedArtifact) -> None:
    """Persist ``artifact`` to ``path``.

    Raises:
        ArtifactWriteError: If the file cannot be written.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.render(), encoding="utf-8")
    except OSError as exc:
        raise ArtifactWriteError(f"Unable to write '{path}': {exc}") from exc


def add_to_file(path: Path, entries: Sequence[CatalogEntry]) -> InsertResult:
    """Insert ``entries`` into the output file at ``path``.

    The dialect is checked before the file is read, and the file is written
    only when at least one entry was added.

    Args:
        path: Output file.
        entries: Catalog entries to insert.

    Returns:
        InsertResult: Insertion outcome.

    Raises:
        UnsupportedArtifactDialectError: If the file cannot host ES exports.
        ArtifactReadError: If the file exists but cannot be read.
        ArtifactSyntaxError: If the file does not parse.
        ArtifactWriteError: If the file cannot be written.
    """

    dialect = detect_dialect(path)
    ensure_insertable(dialect, path)
    result = insert_entries(read_artifact(path, dialect), entries, dialect)
    if result.added_count > 0:
        write_artifact(path, result.artifact)
    return result


def remove_from_file(path: Path, names: Sequence[str]) -> RemoveResult:
    """Remove ``names`` from the output file at ``path`` and rewrite it.

    Args:
        path: Output file.
        names: Declaration names to delete.

    Returns:
        RemoveResult: Removal outcome.

    Raises:
        ArtifactMissingError: If the file does not exist.
        UnsupportedArtifactDialectError: For unknown extensions.
        ArtifactReadError: If the file cannot be read.
        ArtifactSyntaxError: If the file does not parse.
        ArtifactWriteError: If the file cannot be written.
    """

    dialect = detect_dialect(path)
    if not path.exists():
        raise ArtifactMissingError(f"Output file '{path}' does not exist.")
    result = remove_entries(read_artifact(path, dialect), names)
    write_artifact(path, result.artifact)
    return result


def sort_file(path: Path) -> ManagedArtifact:
    """Sort the declarations of the file at ``path`` in place.

    Args:
        path: Catalog or output file.

    Returns:
        ManagedArtifact: The sorted artifact that was written.

    Raises:
        ArtifactMissingError: If the file does not exist.
    """

    dialect = detect_dialect(path)
    if not path.exists():
        raise ArtifactMissingError(f"File '{path}' does not exist.")
    artifact = sort_declarations(read_artifact(path, dialect))
    write_artifact(path, artifact)
    return artifact


def _insertion_point(segments: Sequence[Segment], name: str) -> tuple[int, bool]:
    """Return the insertion index for ``name`` and whether it already exists."""

    last_declaration: int | None = None
    for index, segment in enumerate(segments):
        if not isinstance(segment, Declaration):
            continue
        if segment.name == name:
            return index, True
        if segment.name > name:
            exists = any(isinstance(other, Declaration) and other.name == name for other in segments[index:])
            return index, exists
        last_declaration = index
    if last_declaration is None:
        return len(segments), False
    return last_declaration + 1, False


__all__ = [
    "InsertResult",
    "RemoveResult",
    "add_to_file",
    "insert_entries",
    "prepare_fragment",
    "read_artifact",
    "remove_entries",
    "remove_from_file",
    "sort_declarations",
    "sort_file",
    "strip_metadata",
    "write_artifact",
]

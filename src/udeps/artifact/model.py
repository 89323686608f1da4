# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable segment model of a managed output file.

An artifact is an ordered tuple of top-level segments. Exported named
functions become :class:`Declaration` segments and every other construct
(imports, header comments, other statements) is kept verbatim as
:class:`Passthrough`. Each segment remembers the line break that preceded it,
so untouched regions render as they were read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias

from ..errors import ArtifactSyntaxError
from ..syntax.grammars import Grammar
from ..syntax.program import ChunkKind, scan_program

BLANK_LINE: Final[str] = "\n\n"
LINE_BREAK: Final[str] = "\n"


@dataclass(frozen=True, slots=True)
class Declaration:
    """Exported named function, leading comments included."""

    name: str
    text: str
    separator: str = BLANK_LINE


@dataclass(frozen=True, slots=True)
class Passthrough:
    """Top-level content preserved as-is."""

    text: str
    separator: str = BLANK_LINE


Segment: TypeAlias = Declaration | Passthrough


@dataclass(frozen=True, slots=True)
class ManagedArtifact:
    """Ordered top-level segments of an output file."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def empty(cls) -> ManagedArtifact:
        """Return an artifact without segments."""

        return cls()

    @classmethod
    def parse(cls, text: str, grammar: Grammar = Grammar.TYPESCRIPT) -> ManagedArtifact:
        """Split ``text`` into segments.

        Args:
            text: Output file contents.
            grammar: Grammar matching the file's dialect.

        Returns:
            ManagedArtifact: Parsed artifact.

        Raises:
            ArtifactSyntaxError: If the text does not parse.
        """

        scan = scan_program(text, grammar)
        if scan.has_errors:
            raise ArtifactSyntaxError("Output file contains syntax errors; refusing to rewrite it.")
        segments: list[Segment] = []
        cursor = 0
        for chunk in scan.chunks:
            separator = _separator(scan.text(cursor, chunk.start)) if segments else ""
            body = scan.text(chunk.start, chunk.end)
            if chunk.kind is ChunkKind.FUNCTION and chunk.name is not None:
                segments.append(Declaration(name=chunk.name, text=body, separator=separator))
            else:
                segments.append(Passthrough(text=body, separator=separator))
            cursor = chunk.end
        return cls(segments=tuple(segments))

    @property
    def declarations(self) -> tuple[Declaration, ...]:
        """Return declaration segments in file order."""

        return tuple(segment for segment in self.segments if isinstance(segment, Declaration))

    @property
    def names(self) -> tuple[str, ...]:
        """Return declaration names in file order."""

        return tuple(declaration.name for declaration in self.declarations)

    def render(self) -> str:
        """Return the file text, ending with exactly one line break.

        Returns:
            str: Rendered text, empty for an artifact without segments.
        """

        if not self.segments:
            return ""
        parts = [self.segments[0].text]
        for segment in self.segments[1:]:
            parts.append(segment.separator or BLANK_LINE)
            parts.append(segment.text)
        return "".join(parts).rstrip("\r\n") + LINE_BREAK


def _separator(gap: str) -> str:
    """Normalise the whitespace between two segments to one or two breaks."""

    return BLANK_LINE if gap.count("\n") >= 2 else LINE_BREAK


__all__ = ["BLANK_LINE", "Declaration", "ManagedArtifact", "Passthrough", "Segment"]

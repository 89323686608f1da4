# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Split a TypeScript program into top-level chunks.

Tree-sitter exposes comments as sibling nodes, so leading comments are
attached to the declaration they document here: a comment run belongs to the
next statement when no blank line separates them. Comments that start on the
same line as the previous statement trail that statement instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Final

from tree_sitter import Node

from .grammars import Grammar, parse_source

_COMMENT_NODE: Final[str] = "comment"
_EXPORT_NODE: Final[str] = "export_statement"
_FUNCTION_NODES: Final[frozenset[str]] = frozenset({"function_declaration", "generator_function_declaration"})
_DOC_BLOCK_PREFIX: Final[bytes] = b"/**"


class ChunkKind(str, Enum):
    """Classify top-level chunks."""

    FUNCTION = "function"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Chunk:
    """Byte range of one top-level construct.

    Attributes:
        kind: Whether the chunk is an exported named function.
        start: Offset of the first attached comment, or of the statement.
        body_start: Offset of the statement itself.
        end: End offset, including trailing same-line comments.
        name: Function name for function chunks.
        doc_comment: Closest attached ``/** */`` block for function chunks.
        function_start: Offset of the ``function`` keyword inside the export.
        function_end: End offset of the function declaration.
    """

    kind: ChunkKind
    start: int
    body_start: int
    end: int
    name: str | None = None
    doc_comment: str | None = None
    function_start: int = 0
    function_end: int = 0


@dataclass(frozen=True, slots=True)
class ProgramScan:
    """Result of scanning a program's top level.

    Attributes:
        source: UTF-8 encoded program text.
        chunks: Chunks in source order.
        header_comments: Comments before the first statement that are not the
            first declaration's doc block.
        has_errors: Whether Tree-sitter reported syntax errors.
    """

    source: bytes
    chunks: tuple[Chunk, ...]
    header_comments: tuple[str, ...]
    has_errors: bool

    def text(self, start: int, end: int) -> str:
        """Return the decoded text between two byte offsets."""

        return self.source[start:end].decode("utf-8")

    @property
    def functions(self) -> tuple[Chunk, ...]:
        """Return exported function chunks."""

        return tuple(chunk for chunk in self.chunks if chunk.kind is ChunkKind.FUNCTION)


def exported_function(node: Node) -> Node | None:
    """Return the function declared by ``export function name(...)``.

    Args:
        node: Top-level node.

    Returns:
        Node | None: The function declaration node, or ``None`` when ``node``
        is not a named, non-default function export.
    """

    if node.type != _EXPORT_NODE:
        return None
    if any(child.type == "default" for child in node.children):
        return None
    declaration = node.child_by_field_name("declaration")
    if declaration is None or declaration.type not in _FUNCTION_NODES:
        return None
    if declaration.child_by_field_name("name") is None:
        return None
    return declaration


def scan_program(text: str, grammar: Grammar = Grammar.TYPESCRIPT) -> ProgramScan:
    """Scan the top level of ``text``.

    Args:
        text: Program source.
        grammar: Grammar used to parse ``text``.

    Returns:
        ProgramScan: Chunks with attached comments resolved.
    """

    source = text.encode("utf-8")
    tree = parse_source(source, grammar)
    root = tree.root_node
    builder = _ChunkBuilder(source)
    previous: Node | None = None
    pending: list[Node] = []
    for node in root.children:
        if node.type == _COMMENT_NODE:
            if previous is not None and not pending and node.start_point[0] == previous.end_point[0]:
                builder.extend_last(node.end_byte)
            else:
                pending.append(node)
            continue
        builder.add_statement(node, pending)
        pending = []
        previous = node
    builder.add_comments(pending)
    return ProgramScan(
        source=source,
        chunks=tuple(builder.chunks),
        header_comments=tuple(builder.header_comments),
        has_errors=root.has_error,
    )


def single_return_expression(fragment: str, grammar: Grammar = Grammar.TYPESCRIPT) -> str | None:
    """Return the expression of a function whose body is a single ``return``.

    Args:
        fragment: Function declaration source, optionally exported.
        grammar: Grammar used to parse ``fragment``.

    Returns:
        str | None: Source text of the returned expression, or ``None`` when
        the body holds anything else.
    """

    source = fragment.encode("utf-8")
    root = parse_source(source, grammar).root_node
    for node in root.named_children:
        function = exported_function(node) or (node if node.type in _FUNCTION_NODES else None)
        if function is None:
            continue
        body = function.child_by_field_name("body")
        if body is None:
            return None
        statements = [child for child in body.named_children if child.type != _COMMENT_NODE]
        if len(statements) != 1 or statements[0].type != "return_statement":
            return None
        values = [child for child in statements[0].named_children if child.type != _COMMENT_NODE]
        if not values:
            return None
        return source[values[0].start_byte : values[0].end_byte].decode("utf-8")
    return None


class _ChunkBuilder:
    """Accumulate chunks while walking the program's top-level nodes."""

    def __init__(self, source: bytes) -> None:
        self._source = source
        self.chunks: list[Chunk] = []
        self.header_comments: list[str] = []
        self._seen_statement = False

    def extend_last(self, end: int) -> None:
        self.chunks[-1] = replace(self.chunks[-1], end=end)

    def add_comments(self, comments: Sequence[Node]) -> None:
        for comment in comments:
            if not self._seen_statement:
                self.header_comments.append(self._decode(comment))
            self.chunks.append(
                Chunk(kind=ChunkKind.OTHER, start=comment.start_byte, body_start=comment.start_byte, end=comment.end_byte)
            )

    def add_statement(self, node: Node, comments: Sequence[Node]) -> None:
        split = self._attached_index(node, comments)
        self.add_comments(comments[:split])
        attached = comments[split:]
        start = attached[0].start_byte if attached else node.start_byte
        function = exported_function(node)
        if function is None:
            if not self._seen_statement:
                self.header_comments.extend(self._decode(comment) for comment in attached)
            self.chunks.append(Chunk(kind=ChunkKind.OTHER, start=start, body_start=node.start_byte, end=node.end_byte))
            self._seen_statement = True
            return
        doc_index = next(
            (
                index
                for index in range(len(attached) - 1, -1, -1)
                if self._source[attached[index].start_byte :].startswith(_DOC_BLOCK_PREFIX)
            ),
            None,
        )
        doc = attached[doc_index] if doc_index is not None else None
        if not self._seen_statement:
            # Comments above the first doc block form the file header.
            split = doc_index if doc_index is not None else len(attached)
            self.add_comments(attached[:split])
            attached = attached[split:]
            start = attached[0].start_byte if attached else node.start_byte
            self.header_comments.extend(self._decode(comment) for comment in attached if comment is not doc)
        name_node = function.child_by_field_name("name")
        self.chunks.append(
            Chunk(
                kind=ChunkKind.FUNCTION,
                start=start,
                body_start=node.start_byte,
                end=node.end_byte,
                name=self._decode(name_node) if name_node is not None else None,
                doc_comment=self._decode(doc) if doc is not None else None,
                function_start=function.start_byte,
                function_end=function.end_byte,
            )
        )
        self._seen_statement = True

    def _attached_index(self, node: Node, comments: Sequence[Node]) -> int:
        """Return the index of the first comment attached to ``node``."""

        boundary = node.start_byte
        index = len(comments)
        while index > 0:
            candidate = comments[index - 1]
            if self._source[candidate.end_byte : boundary].count(b"\n") > 1:
                break
            boundary = candidate.start_byte
            index -= 1
        return index

    def _decode(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")


__all__ = [
    "Chunk",
    "ChunkKind",
    "ProgramScan",
    "exported_function",
    "scan_program",
    "single_return_expression",
]

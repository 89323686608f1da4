# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Erase TypeScript-only syntax from a source fragment.

The transform re-emits the fragment from its concrete syntax tree, copying
every byte verbatim except the constructs listed below, so the runtime code of
the fragment is left exactly as written.
"""

from __future__ import annotations

from typing import Final

from tree_sitter import Node

from .grammars import Grammar, parse_source

# Nodes deleted together with the whitespace that precedes them.
_ERASED_NODES: Final[frozenset[str]] = frozenset(
    {
        "asserts_annotation",
        "implements_clause",
        "interface_declaration",
        "type_alias_declaration",
        "type_annotation",
        "type_arguments",
        "type_parameters",
        "type_predicate_annotation",
    }
)

# Expression wrappers replaced by one of their named children.
_UNWRAPPED_NODES: Final[dict[str, int]] = {
    "as_expression": 0,
    "non_null_expression": 0,
    "satisfies_expression": 0,
    "type_assertion": -1,
}

# Parents whose accessibility and readonly modifiers are dropped along with the
# whitespace that follows them.
_MODIFIER_PARENTS: Final[frozenset[str]] = frozenset(
    {"required_parameter", "optional_parameter", "public_field_definition", "method_definition"}
)
_MODIFIERS: Final[frozenset[str]] = frozenset({"accessibility_modifier", "override_modifier", "readonly"})

# Optional and definite-assignment markers, keyed by the parent that may carry them.
_MARKERS: Final[dict[str, frozenset[str]]] = {
    "optional_parameter": frozenset({"?"}),
    "public_field_definition": frozenset({"?", "!"}),
    "variable_declarator": frozenset({"!"}),
}
_PARAMETER_LIST: Final[str] = "formal_parameters"
_HERITAGE: Final[str] = "class_heritage"
_IMPLEMENTS: Final[str] = "implements_clause"
_INLINE_WHITESPACE: Final[bytes] = b" \t"


def erase_types(fragment: str, grammar: Grammar = Grammar.TYPESCRIPT) -> str:
    """Return ``fragment`` with static-type-only syntax removed.

    Removed constructs:

    * type annotations on variables, parameters and return positions,
      including type predicates and assertion signatures;
    * accessibility, ``override`` and ``readonly`` modifiers of parameter
      properties, class fields and methods;
    * ``this`` parameter declarations, ``implements`` clauses and definite
      assignment ``!`` markers;
    * ``as``/``satisfies``/``<T>`` assertions and non-null ``!`` wrappers,
      leaving the inner expression;
    * type parameter and type argument lists, optional parameter markers and
      local ``type``/``interface`` declarations.

    Args:
        fragment: TypeScript source fragment.
        grammar: Grammar used to parse ``fragment``.

    Returns:
        str: Fragment that is valid JavaScript when the input was valid TypeScript.
    """

    source = fragment.encode("utf-8")
    root = parse_source(source, grammar).root_node
    erased = _TypeEraser(source).render(root)
    return (source[: root.start_byte] + erased + source[root.end_byte :]).decode("utf-8")


class _TypeEraser:
    """Re-emit a syntax tree while skipping type-only nodes."""

    def __init__(self, source: bytes) -> None:
        self._source = source

    def render(self, node: Node) -> bytes:
        """Return the erased text covered by ``node``."""

        position = _UNWRAPPED_NODES.get(node.type)
        if position is not None and node.named_children:
            return self.render(node.named_children[position])
        if not node.children:
            return self._source[node.start_byte : node.end_byte]
        parts: list[bytes] = []
        cursor = node.start_byte
        strip_next_gap = False
        drop_comma = False
        for child in node.children:
            gap = self._source[cursor : child.start_byte]
            cursor = child.end_byte
            if strip_next_gap:
                gap = gap.lstrip(_INLINE_WHITESPACE)
                strip_next_gap = False
            if drop_comma:
                drop_comma = False
                if child.type == ",":
                    strip_next_gap = True
                    continue
            if _is_erased(node, child):
                if child.type in _MODIFIERS:
                    parts.append(gap)
                    strip_next_gap = True
                drop_comma = _is_this_parameter(child)
                continue
            parts.append(gap)
            parts.append(self.render(child))
        parts.append(self._source[cursor : node.end_byte])
        return b"".join(parts)


def _is_erased(parent: Node, child: Node) -> bool:
    """Return whether ``child`` only carries static type information."""

    if child.type in _ERASED_NODES:
        return True
    if parent.type in _MODIFIER_PARENTS and child.type in _MODIFIERS:
        return True
    if child.type in _MARKERS.get(parent.type, ()):
        return True
    if parent.type == _PARAMETER_LIST:
        return _is_this_parameter(child)
    if child.type == _HERITAGE:
        return all(clause.type == _IMPLEMENTS for clause in child.named_children)
    return False


def _is_this_parameter(node: Node) -> bool:
    """Return whether ``node`` declares the type of ``this``, e.g. ``this: Window``."""

    if node.type != "required_parameter":
        return False
    pattern = node.child_by_field_name("pattern")
    return pattern is not None and pattern.type == "this"


__all__ = ["erase_types"]

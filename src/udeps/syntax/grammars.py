# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve Tree-sitter grammars for TypeScript and TSX sources."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from enum import Enum
from threading import Lock
from types import ModuleType
from typing import Final, cast

from tree_sitter import Language, Parser, Tree

_GRAMMAR_MODULE: Final[str] = "tree_sitter_typescript"

_LANGUAGE_CACHE: dict[str, Language] = {}
_LANGUAGE_CACHE_LOCK = Lock()


class Grammar(str, Enum):
    """Enumerate the grammars shipped by ``tree-sitter-typescript``."""

    TYPESCRIPT = "typescript"
    TSX = "tsx"

    @property
    def factory_name(self) -> str:
        """Return the module attribute producing this grammar's language pointer.

        Returns:
            str: Attribute name on :mod:`tree_sitter_typescript`.
        """

        return f"language_{self.value}"


def grammar_for_suffix(suffix: str) -> Grammar:
    """Return the grammar able to parse files ending with ``suffix``.

    Args:
        suffix: File suffix including the leading dot.

    Returns:
        Grammar: TSX grammar for JSX-capable suffixes, TypeScript otherwise.
    """

    return Grammar.TSX if suffix.lower() in {".tsx", ".jsx"} else Grammar.TYPESCRIPT


def load_language(grammar: Grammar) -> Language:
    """Return the compiled Tree-sitter language for ``grammar``.

    Args:
        grammar: Grammar to resolve.

    Returns:
        Language: Cached language instance.

    Raises:
        RuntimeError: If ``tree-sitter-typescript`` is missing or incomplete.
    """

    with _LANGUAGE_CACHE_LOCK:
        cached = _LANGUAGE_CACHE.get(grammar.value)
        if cached is not None:
            return cached

    module = _import_language_module(_GRAMMAR_MODULE)
    if module is None:
        raise RuntimeError("tree-sitter-typescript is not installed; reinstall udeps with its dependencies.")
    factory = getattr(module, grammar.factory_name, None)
    if not callable(factory):
        raise RuntimeError(f"{_GRAMMAR_MODULE}.{grammar.factory_name} is unavailable; upgrade tree-sitter-typescript.")
    language = Language(factory())
    with _LANGUAGE_CACHE_LOCK:
        _LANGUAGE_CACHE.setdefault(grammar.value, language)
        return _LANGUAGE_CACHE[grammar.value]


def build_parser(grammar: Grammar) -> Parser:
    """Return a new Tree-sitter parser configured for ``grammar``.

    Args:
        grammar: Grammar the parser should use.

    Returns:
        Parser: Parser instance ready to parse source bytes.
    """

    parser = Parser()
    language = load_language(grammar)
    if hasattr(parser, "set_language"):
        setter = cast(Callable[[Language], None], getattr(parser, "set_language"))
        setter(language)
    else:
        setattr(parser, "language", language)
    return parser


def parse_source(source: bytes, grammar: Grammar) -> Tree:
    """Parse ``source`` with a fresh parser for ``grammar``.

    Args:
        source: UTF-8 encoded source text.
        grammar: Grammar used to parse the text.

    Returns:
        Tree: Concrete syntax tree.
    """

    return build_parser(grammar).parse(source)


def _import_language_module(module_name: str) -> ModuleType | None:
    """Import a packaged Tree-sitter language module when available."""

    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError:
        return None


__all__ = ["Grammar", "build_parser", "grammar_for_suffix", "load_language", "parse_source"]

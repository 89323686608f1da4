# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tree-sitter backed helpers for reading and rewriting TypeScript sources."""

from __future__ import annotations

from .erasure import erase_types
from .grammars import Grammar, grammar_for_suffix
from .program import ProgramScan, scan_program, single_return_expression

__all__ = [
    "Grammar",
    "ProgramScan",
    "erase_types",
    "grammar_for_suffix",
    "scan_program",
    "single_return_expression",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Infer how an output file expects its declarations to be written."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from ..errors import UnsupportedArtifactDialectError
from ..syntax.grammars import Grammar


class ModuleKind(str, Enum):
    """Enumerate module systems an output file may use."""

    ESM = "esm"
    CJS = "cjs"


@dataclass(frozen=True, slots=True)
class ArtifactDialect:
    """Type and module conventions of an output file.

    Attributes:
        typed: Whether the file may contain TypeScript-only syntax.
        module_kind: Module system used by the file.
        grammar: Grammar able to parse the file.
    """

    typed: bool
    module_kind: ModuleKind
    grammar: Grammar

    @property
    def hosts_exports(self) -> bool:
        """Return whether ``export function`` declarations are valid here."""

        return self.module_kind is ModuleKind.ESM


DIALECTS: Final[Mapping[str, ArtifactDialect]] = {
    ".ts": ArtifactDialect(typed=True, module_kind=ModuleKind.ESM, grammar=Grammar.TYPESCRIPT),
    ".mts": ArtifactDialect(typed=True, module_kind=ModuleKind.ESM, grammar=Grammar.TYPESCRIPT),
    ".tsx": ArtifactDialect(typed=True, module_kind=ModuleKind.ESM, grammar=Grammar.TSX),
    ".cts": ArtifactDialect(typed=True, module_kind=ModuleKind.CJS, grammar=Grammar.TYPESCRIPT),
    ".js": ArtifactDialect(typed=False, module_kind=ModuleKind.ESM, grammar=Grammar.TYPESCRIPT),
    ".mjs": ArtifactDialect(typed=False, module_kind=ModuleKind.ESM, grammar=Grammar.TYPESCRIPT),
    ".jsx": ArtifactDialect(typed=False, module_kind=ModuleKind.ESM, grammar=Grammar.TSX),
    ".cjs": ArtifactDialect(typed=False, module_kind=ModuleKind.CJS, grammar=Grammar.TYPESCRIPT),
}

_DECLARATION_SUFFIXES: Final[tuple[str, ...]] = (".d.ts", ".d.mts", ".d.cts")


def detect_dialect(path: Path) -> ArtifactDialect:
    """Return the dialect implied by the extension of ``path``.

    Args:
        path: Output file path.

    Returns:
        ArtifactDialect: Dialect of the file.

    Raises:
        UnsupportedArtifactDialectError: For declaration files and unknown
            extensions.
    """

    name = path.name.lower()
    if name.endswith(_DECLARATION_SUFFIXES):
        raise UnsupportedArtifactDialectError(
            f"'{path}' is a declaration file and cannot hold function implementations."
        )
    dialect = DIALECTS.get(path.suffix.lower())
    if dialect is None:
        supported = ", ".join(sorted(DIALECTS))
        raise UnsupportedArtifactDialectError(
            f"Unsupported output file extension for '{path}'; expected one of {supported}."
        )
    return dialect


def ensure_insertable(dialect: ArtifactDialect, path: Path) -> None:
    """Reject dialects that cannot host exported function declarations.

    Args:
        dialect: Dialect of the output file.
        path: Output file path used in the error message.

    Raises:
        UnsupportedArtifactDialectError: When the file is a CommonJS module.
    """

    if not dialect.hosts_exports:
        raise UnsupportedArtifactDialectError(
            f"'{path}' is a CommonJS module; snippets are ES module exports. "
            "Use an ES module output file such as udeps.ts or udeps.mjs."
        )


__all__ = ["DIALECTS", "ArtifactDialect", "ModuleKind", "detect_dialect", "ensure_insertable"]

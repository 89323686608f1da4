# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Managed output file model and patching operations."""

from __future__ import annotations

from .dialect import ArtifactDialect, ModuleKind, detect_dialect, ensure_insertable
from .model import Declaration, ManagedArtifact, Passthrough
from .patcher import (
    InsertResult,
    RemoveResult,
    add_to_file,
    insert_entries,
    remove_entries,
    remove_from_file,
    sort_declarations,
    sort_file,
)

__all__ = [
    "ArtifactDialect",
    "Declaration",
    "InsertResult",
    "ManagedArtifact",
    "ModuleKind",
    "Passthrough",
    "RemoveResult",
    "add_to_file",
    "detect_dialect",
    "ensure_insertable",
    "insert_entries",
    "remove_entries",
    "remove_from_file",
    "sort_declarations",
    "sort_file",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions and non-fatal issue records shared by the udeps engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UdepsError(RuntimeError):
    """Base class for every error raised by the udeps engine."""


class ConfigError(UdepsError):
    """Raised when configuration input is invalid."""


class CatalogSourceError(UdepsError):
    """Raised when a single catalog source cannot be loaded.

    Failures of this family are isolated to one source; sibling sources are
    still evaluated by :func:`udeps.catalog.loader.iter_catalogs`.
    """

    def __init__(self, locator: str, message: str) -> None:
        """Initialise the error with the offending ``locator``.

        Args:
            locator: Catalog locator that failed to load.
            message: Human-readable description of the failure.
        """

        super().__init__(message)
        self.locator = locator


class SourceUnavailableError(CatalogSourceError):
    """Raised when a catalog locator cannot be fetched or read."""


class UnsupportedLocatorError(CatalogSourceError):
    """Raised when a locator is neither an HTTP(S) URL nor a filesystem path."""


class CatalogSyntaxError(CatalogSourceError):
    """Raised when a catalog source does not parse as TypeScript."""


class ArtifactError(UdepsError):
    """Base class for failures touching the managed output file."""


class UnsupportedArtifactDialectError(ArtifactError):
    """Raised when the output file cannot host exported function declarations."""


class ArtifactSyntaxError(ArtifactError):
    """Raised when the output file exists but does not parse."""


class ArtifactReadError(ArtifactError):
    """Raised when the output file exists but cannot be read."""


class ArtifactWriteError(ArtifactError):
    """Raised when the output file cannot be persisted."""


class ArtifactMissingError(ArtifactError):
    """Raised when a removal targets an output file that does not exist."""


class IssueKind(str, Enum):
    """Enumerate non-fatal outcomes reported alongside engine results."""

    MISSING_DOCUMENTATION = "missing-documentation"
    DUPLICATE_CATALOG_ENTRY = "duplicate-catalog-entry"
    LICENSE_MISMATCH = "license-mismatch"
    DUPLICATE_ENTRY_CONFLICT = "duplicate-entry-conflict"
    ENTRY_NOT_FOUND = "entry-not-found"
    CAPABILITY_UNSATISFIED = "capability-unsatisfied"


@dataclass(frozen=True, slots=True)
class Issue:
    """Describe a non-fatal condition encountered while evaluating a command.

    Attributes:
        kind: Category of the issue.
        subject: Entry name or locator the issue refers to.
        message: Human-readable explanation suitable for console output.
    """

    kind: IssueKind
    subject: str
    message: str

    @property
    def is_error(self) -> bool:
        """Return whether the issue should be reported as an error.

        Returns:
            bool: ``True`` for name conflicts, ``False`` for warnings and
            informational outcomes.
        """

        return self.kind is IssueKind.DUPLICATE_ENTRY_CONFLICT


__all__ = [
    "ArtifactError",
    "ArtifactMissingError",
    "ArtifactReadError",
    "ArtifactSyntaxError",
    "ArtifactWriteError",
    "CatalogSourceError",
    "CatalogSyntaxError",
    "ConfigError",
    "Issue",
    "IssueKind",
    "SourceUnavailableError",
    "UdepsError",
    "UnsupportedArtifactDialectError",
    "UnsupportedLocatorError",
]

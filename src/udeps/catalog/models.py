# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable records produced by the catalog loader."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import CatalogSourceError, Issue
from ..syntax.grammars import Grammar
from ..tags import DeprecatedTag, DocTag, RequiresTag


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One documented snippet exported by a catalog source.

    Attributes:
        name: Exported function name, unique within its source.
        description: Free-text description from the doc block.
        tags: Typed doc tags in source order.
        comments: Leading comments up to the ``export`` keyword, verbatim.
        declaration: The exported declaration, verbatim.
        body_fragment: The function declaration without ``export``.
        source: Locator of the catalog the entry came from.
        grammar: Grammar able to re-parse the fragments.
    """

    name: str
    description: str
    tags: tuple[DocTag, ...]
    comments: str
    declaration: str
    body_fragment: str
    source: str = ""
    grammar: Grammar = Grammar.TYPESCRIPT

    @property
    def source_fragment(self) -> str:
        """Return the full exported declaration with its leading comments."""

        return f"{self.comments}{self.declaration}"

    @property
    def summary(self) -> str:
        """Return the first sentence of the description."""

        return self.description.split(". ")[0]

    @property
    def required_capabilities(self) -> list[str]:
        """Return the tokens listed by ``@requires`` tags."""

        return [tag.capability for tag in self.tags if isinstance(tag, RequiresTag)]

    @property
    def deprecations(self) -> tuple[DeprecatedTag, ...]:
        """Return the ``@deprecated`` tags in source order."""

        return tuple(tag for tag in self.tags if isinstance(tag, DeprecatedTag))


@dataclass(frozen=True, slots=True)
class Catalog:
    """Entries and metadata parsed from one catalog source.

    Attributes:
        locator: Locator the catalog was loaded from.
        entries: Usable entries in source order.
        description: Module description from the header doc block.
        license: License declared by the header, if any.
        issues: Non-fatal problems found while loading.
    """

    locator: str
    entries: tuple[CatalogEntry, ...]
    description: str = ""
    license: str | None = None
    issues: tuple[Issue, ...] = field(default_factory=tuple)

    def find(self, name: str) -> CatalogEntry | None:
        """Return the entry called ``name`` when present.

        Args:
            name: Exported function name.

        Returns:
            CatalogEntry | None: Matching entry or ``None``.
        """

        return next((entry for entry in self.entries if entry.name == name), None)


@dataclass(frozen=True, slots=True)
class CatalogLoad:
    """Outcome of loading one configured source.

    Exactly one of ``catalog`` and ``error`` is set.
    """

    locator: str
    catalog: Catalog | None = None
    error: CatalogSourceError | None = None

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        """Return the loaded entries, empty when the source failed."""

        return self.catalog.entries if self.catalog is not None else ()


__all__ = ["Catalog", "CatalogEntry", "CatalogLoad"]

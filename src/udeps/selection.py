# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pick the first usable implementation of a name across catalogs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .catalog.loader import iter_catalogs
from .catalog.models import CatalogEntry, CatalogLoad
from .errors import Issue, IssueKind
from .obsolescence import ObsolescenceReason, evaluate, missing_capabilities

if TYPE_CHECKING:
    from .config.models import UdepsConfig


@dataclass(frozen=True, slots=True)
class Candidate:
    """Supported implementation chosen for a requested name."""

    entry: CatalogEntry
    locator: str
    reason: ObsolescenceReason | None = None

    @property
    def obsolete(self) -> bool:
        return self.reason is not None


@dataclass(frozen=True, slots=True)
class Selection:
    """Outcome of looking up one name.

    Attributes:
        name: Requested entry name.
        candidate: First supported implementation, if any.
        skipped: Implementations rejected because the target lacks capabilities.
        loads: Catalog loads pulled before the search stopped.
    """

    name: str
    candidate: Candidate | None = None
    skipped: tuple[Issue, ...] = ()
    loads: tuple[CatalogLoad, ...] = field(default_factory=tuple)

    @property
    def failures(self) -> tuple[CatalogLoad, ...]:
        return tuple(load for load in self.loads if load.error is not None)

    @property
    def catalog_issues(self) -> tuple[Issue, ...]:
        return tuple(issue for load in self.loads if load.catalog is not None for issue in load.catalog.issues)


def select_entry(config: UdepsConfig, name: str) -> Selection:
    """Return the first implementation of ``name`` the target supports.

    Catalogs are pulled lazily in configured order and loading stops as soon
    as a supported implementation is found.

    Args:
        config: Resolved configuration.
        name: Entry name to look up.

    Returns:
        Selection: Chosen candidate plus skipped implementations.
    """

    loads: list[CatalogLoad] = []
    skipped: list[Issue] = []
    for load in iter_catalogs(config):
        loads.append(load)
        if load.catalog is None:
            continue
        entry = load.catalog.find(name)
        if entry is None:
            continue
        missing = missing_capabilities(config, entry)
        if missing:
            skipped.append(
                Issue(
                    kind=IssueKind.CAPABILITY_UNSATISFIED,
                    subject=load.locator,
                    message=(
                        f"The implementation in catalog '{load.locator}' requires unsupported capabilities: "
                        f"{', '.join(missing)}"
                    ),
                )
            )
            continue
        candidate = Candidate(entry=entry, locator=load.locator, reason=evaluate(entry, config.lib))
        return Selection(name=name, candidate=candidate, skipped=tuple(skipped), loads=tuple(loads))
    return Selection(name=name, skipped=tuple(skipped), loads=tuple(loads))


__all__ = ["Candidate", "Selection", "select_entry"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fuzzy search across every configured catalog."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import TYPE_CHECKING, Final

from .catalog.loader import iter_catalogs
from .catalog.models import CatalogEntry, CatalogLoad
from .obsolescence import ObsolescenceReason, evaluate, missing_capabilities

if TYPE_CHECKING:
    from .config.models import UdepsConfig

MAX_RESULTS: Final[int] = 5
MATCH_THRESHOLD: Final[float] = 0.5


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Catalog entry matched by a query."""

    entry: CatalogEntry
    score: float


@dataclass(frozen=True, slots=True)
class SupportedMatch:
    """Matched entry usable on the configured target."""

    entry: CatalogEntry
    reason: ObsolescenceReason | None = None


@dataclass(frozen=True, slots=True)
class SearchReport:
    """Matches split by target support, plus sources that failed to load."""

    query: str
    supported: tuple[SupportedMatch, ...] = ()
    unsupported: tuple[CatalogEntry, ...] = ()
    failures: tuple[CatalogLoad, ...] = field(default_factory=tuple)
    loaded: tuple[CatalogLoad, ...] = field(default_factory=tuple)


def match_score(query: str, text: str) -> float:
    """Return how well ``query`` matches the best window of ``text``.

    The query is compared against every substring of ``text`` with the same
    length, so a short query is not penalised for a long description.

    Args:
        query: Search query.
        text: Candidate text.

    Returns:
        float: Similarity between ``0.0`` and ``1.0``.
    """

    needle = " ".join(query.lower().split())
    haystack = " ".join(text.lower().split())
    if not needle:
        return 0.0
    if needle in haystack:
        return 1.0
    width = len(needle)
    if len(haystack) <= width:
        return SequenceMatcher(None, needle, haystack).ratio()
    matcher = SequenceMatcher(None)
    matcher.set_seq2(needle)
    best = 0.0
    for start in range(len(haystack) - width + 1):
        matcher.set_seq1(haystack[start : start + width])
        if matcher.real_quick_ratio() <= best or matcher.quick_ratio() <= best:
            continue
        best = max(best, matcher.ratio())
    return best


def rank_entries(
    query: str,
    entries: Iterable[CatalogEntry],
    *,
    threshold: float = MATCH_THRESHOLD,
) -> list[SearchHit]:
    """Return entries whose name and description match ``query``.

    Args:
        query: Search query.
        entries: Candidate entries.
        threshold: Minimum score for an entry to be returned.

    Returns:
        list[SearchHit]: Hits ordered by descending score, then by name.
    """

    hits = [
        SearchHit(entry=entry, score=score)
        for entry in entries
        for score in (match_score(query, f"{entry.name} {entry.description}"),)
        if score >= threshold
    ]
    return sorted(hits, key=lambda hit: (-hit.score, hit.entry.name))


def search_catalogs(config: UdepsConfig, query: str) -> SearchReport:
    """Search every configured catalog for ``query``.

    Args:
        config: Resolved configuration.
        query: Search query.

    Returns:
        SearchReport: Ranked matches split by target support.
    """

    loads = list(iter_catalogs(config))
    entries = [entry for load in loads for entry in load.entries]
    supported: list[SupportedMatch] = []
    unsupported: list[CatalogEntry] = []
    for hit in rank_entries(query, entries):
        if missing_capabilities(config, hit.entry):
            unsupported.append(hit.entry)
        else:
            supported.append(SupportedMatch(entry=hit.entry, reason=evaluate(hit.entry, config.lib)))
    return SearchReport(
        query=query,
        supported=tuple(supported),
        unsupported=tuple(unsupported),
        failures=tuple(load for load in loads if load.error is not None),
        loaded=tuple(load for load in loads if load.catalog is not None),
    )


__all__ = [
    "MATCH_THRESHOLD",
    "MAX_RESULTS",
    "SearchHit",
    "SearchReport",
    "SupportedMatch",
    "match_score",
    "rank_entries",
    "search_catalogs",
]

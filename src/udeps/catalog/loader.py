# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load catalog sources into immutable entries."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from ..errors import CatalogSourceError, CatalogSyntaxError, Issue, IssueKind
from ..syntax.grammars import Grammar, grammar_for_suffix
from ..syntax.program import Chunk, ProgramScan, scan_program
from ..tags import LicenseTag, comment_lines, parse_doc_comment
from .licensing import is_public_domain_equivalent
from .models import Catalog, CatalogEntry, CatalogLoad
from .sources import DEFAULT_FETCH_TIMEOUT, read_locator

if TYPE_CHECKING:
    from ..config.models import UdepsConfig


def load_catalog(locator: str, *, base_dir: Path, timeout: float = DEFAULT_FETCH_TIMEOUT) -> Catalog:
    """Fetch and parse one catalog source.

    Args:
        locator: HTTP(S) URL or filesystem path of the catalog.
        base_dir: Directory anchoring relative paths.
        timeout: Seconds to wait for a remote fetch.

    Returns:
        Catalog: Parsed entries plus header metadata and warnings.

    Raises:
        SourceUnavailableError: If the source cannot be fetched or read.
        UnsupportedLocatorError: If ``locator`` has an unsupported shape.
        CatalogSyntaxError: If the source does not parse.
    """

    text = read_locator(locator, base_dir=base_dir, timeout=timeout)
    return parse_catalog(text, locator=locator, grammar=grammar_for_locator(locator))


def iter_catalogs(config: UdepsConfig) -> Iterator[CatalogLoad]:
    """Yield the configured catalogs lazily, one source at a time.

    Each call starts a fresh pass that re-reads every source. A source that
    fails to load is yielded with its error and iteration continues with the
    next one, so consumers may stop early or exhaust the sequence.

    Args:
        config: Resolved configuration providing ``registry`` and ``project``.

    Yields:
        CatalogLoad: Outcome for each locator in configured order.
    """

    for locator in config.registry:
        try:
            catalog = load_catalog(locator, base_dir=config.project, timeout=config.fetch_timeout)
        except CatalogSourceError as exc:
            yield CatalogLoad(locator=locator, error=exc)
            continue
        yield CatalogLoad(locator=locator, catalog=catalog)


def parse_catalog(text: str, *, locator: str, grammar: Grammar = Grammar.TYPESCRIPT) -> Catalog:
    """Parse catalog source text.

    Only named ``export function`` declarations with an attached ``/** */``
    block become entries; undocumented exports are reported and skipped.

    Args:
        text: Catalog source.
        locator: Locator used in entries and messages.
        grammar: Grammar used to parse ``text``.

    Returns:
        Catalog: Parsed catalog.

    Raises:
        CatalogSyntaxError: If Tree-sitter reports syntax errors.
    """

    scan = scan_program(text, grammar)
    if scan.has_errors:
        raise CatalogSyntaxError(locator, f"Catalog '{locator}' contains syntax errors.")
    description, license_text, issues = _read_header(scan.header_comments, locator)
    entries: list[CatalogEntry] = []
    seen: set[str] = set()
    for chunk in scan.functions:
        name = chunk.name or ""
        if chunk.doc_comment is None:
            issues.append(
                Issue(
                    kind=IssueKind.MISSING_DOCUMENTATION,
                    subject=name,
                    message=f"Function '{name}' in '{locator}' has no doc comment and was skipped.",
                )
            )
            continue
        if name in seen:
            issues.append(
                Issue(
                    kind=IssueKind.DUPLICATE_CATALOG_ENTRY,
                    subject=name,
                    message=f"Function '{name}' is declared more than once in '{locator}'; keeping the first.",
                )
            )
            continue
        seen.add(name)
        entries.append(_build_entry(scan, chunk, locator=locator, grammar=grammar))
    return Catalog(
        locator=locator,
        entries=tuple(entries),
        description=description,
        license=license_text,
        issues=tuple(issues),
    )


def grammar_for_locator(locator: str) -> Grammar:
    """Return the grammar matching the file extension of ``locator``."""

    path = urlparse(locator).path if "://" in locator else locator
    return grammar_for_suffix(PurePosixPath(path.replace("\\", "/")).suffix)


def _build_entry(scan: ProgramScan, chunk: Chunk, *, locator: str, grammar: Grammar) -> CatalogEntry:
    doc = parse_doc_comment(chunk.doc_comment or "")
    return CatalogEntry(
        name=chunk.name or "",
        description=doc.description,
        tags=doc.tags,
        comments=scan.text(chunk.start, chunk.body_start),
        declaration=scan.text(chunk.body_start, chunk.end),
        body_fragment=scan.text(chunk.function_start, chunk.function_end),
        source=locator,
        grammar=grammar,
    )


def _read_header(comments: Sequence[str], locator: str) -> tuple[str, str | None, list[Issue]]:
    """Return the module description, license and license warnings."""

    description = ""
    license_text: str | None = None
    for comment in comments:
        if not comment.startswith("/*"):
            continue
        doc = parse_doc_comment(comment)
        description = description or doc.description
        if license_text is None:
            license_text = next((tag.license for tag in doc.tags if isinstance(tag, LicenseTag)), None)
    if license_text is None:
        plain = " ".join(line for comment in comments for line in comment_lines(comment) if line)
        license_text = plain or None

    issues: list[Issue] = []
    if license_text is None:
        issues.append(
            Issue(
                kind=IssueKind.LICENSE_MISMATCH,
                subject=locator,
                message=f"Catalog '{locator}' does not declare a license.",
            )
        )
    elif not is_public_domain_equivalent(license_text):
        issues.append(
            Issue(
                kind=IssueKind.LICENSE_MISMATCH,
                subject=locator,
                message=(
                    f"Catalog '{locator}' is not declared under a public-domain-equivalent license; "
                    "check its terms before copying snippets."
                ),
            )
        )
    return description, license_text, issues


__all__ = ["grammar_for_locator", "iter_catalogs", "load_catalog", "parse_catalog"]

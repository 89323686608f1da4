# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render catalog sources as Markdown reference pages."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Final
from urllib.parse import urlparse

from .capabilities import NAMESPACE_SEPARATOR
from .catalog.licensing import PUBLIC_DOMAIN_LICENSES, license_url
from .catalog.loader import load_catalog
from .catalog.models import Catalog, CatalogEntry
from .catalog.sources import DEFAULT_FETCH_TIMEOUT
from .errors import ArtifactWriteError, CatalogSourceError
from .obsolescence import INLINE_RECOMMEND, docs_url
from .tags import DeprecatedTag

_BROWSER_PREFIX: Final[str] = "dom"
_NODE_PREFIX: Final[str] = "node"
_EDITION_PREFIX: Final[re.Pattern[str]] = re.compile(r"^es(\d+)$", re.IGNORECASE)
_LAST_IMPLICIT_EDITION: Final[int] = 5
_CATALOG_SUFFIXES: Final[tuple[str, ...]] = (".tsx", ".ts", ".mts", ".jsx", ".js", ".mjs")


@dataclass(frozen=True, slots=True)
class DocsResult:
    """Pages written and sources that failed."""

    written: tuple[Path, ...] = ()
    failures: tuple[CatalogSourceError, ...] = field(default_factory=tuple)


def generate_catalog_docs(
    sources: Sequence[str],
    out_dir: Path,
    *,
    base_dir: Path | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> DocsResult:
    """Write one Markdown page per catalog source into ``out_dir``.

    A source that fails to load is reported in the result and the remaining
    sources are still rendered.

    Args:
        sources: Catalog locators.
        out_dir: Destination directory, created when missing.
        base_dir: Directory anchoring relative locators.
        timeout: Seconds to wait for a remote fetch.

    Returns:
        DocsResult: Written pages and per-source failures.

    Raises:
        ArtifactWriteError: If a page cannot be written.
    """

    anchor = base_dir or Path.cwd()
    written: list[Path] = []
    failures: list[CatalogSourceError] = []
    for locator in sources:
        try:
            catalog = load_catalog(locator, base_dir=anchor, timeout=timeout)
        except CatalogSourceError as exc:
            failures.append(exc)
            continue
        page = out_dir / f"{catalog_title(locator)}.md"
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            page.write_text(render_catalog_markdown(catalog, title=catalog_title(locator)), encoding="utf-8")
        except OSError as exc:
            raise ArtifactWriteError(f"Unable to write '{page}': {exc}") from exc
        written.append(page)
    return DocsResult(written=tuple(written), failures=tuple(failures))


def catalog_title(locator: str) -> str:
    """Return the page title for ``locator``: its file name without extension."""

    path = urlparse(locator).path if "://" in locator else locator
    name = PurePosixPath(path.replace("\\", "/")).name
    for suffix in _CATALOG_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def render_catalog_markdown(catalog: Catalog, *, title: str) -> str:
    """Render ``catalog`` as a Markdown page.

    Args:
        catalog: Parsed catalog.
        title: Page heading.

    Returns:
        str: Markdown document.
    """

    parts = [f"# {title}\n\n"]
    if catalog.description:
        parts.append(f"{catalog.description}\n\n")
    if catalog.license in PUBLIC_DOMAIN_LICENSES:
        parts.append(f"**License:** [{catalog.license}]({license_url(catalog.license)})\n\n")
    for entry in catalog.entries:
        parts.append(render_entry_markdown(entry))
    return "".join(parts)


def render_entry_markdown(entry: CatalogEntry) -> str:
    """Render one entry as a Markdown section."""

    parts = [f"## {entry.name}\n\n"]
    if entry.description:
        parts.append(f"{entry.description}\n\n")
    required = entry.required_capabilities
    if any(token.lower().startswith(_BROWSER_PREFIX) for token in required):
        parts.append(_callout("NOTE", "This function requires a browser."))
    if any(token.lower().startswith(_NODE_PREFIX) for token in required):
        parts.append(_callout("NOTE", "This function requires Node.js."))
    editions = [
        int(match.group(1))
        for token in required
        for match in (_EDITION_PREFIX.match(token.split(NAMESPACE_SEPARATOR)[0]),)
        if match is not None
    ]
    if editions and max(editions) > _LAST_IMPLICIT_EDITION:
        parts.append(_callout("NOTE", f"This function requires ES{max(editions)}."))
    for tag in entry.deprecations:
        parts.append(_deprecation_callout(tag))
    parts.append(f"```ts\n{entry.body_fragment}\n```\n\n")
    return "".join(parts)


def _deprecation_callout(tag: DeprecatedTag) -> str:
    reason = tag.reason
    kind = "IMPORTANT" if reason.since or reason.inline == INLINE_RECOMMEND else "NOTE"
    sentences: list[str] = []
    if reason.since:
        sentences.append(f"**Deprecated since {reason.since.split(NAMESPACE_SEPARATOR)[0]}.**")
    if reason.replacement:
        sentences.append(f"Use [{reason.replacement}]({docs_url(reason.replacement)}) instead.")
    if reason.inline == INLINE_RECOMMEND:
        sentences.append("You should inline this function instead of importing it.")
    elif reason.inline:
        sentences.append("Consider inlining this function.")
    return _callout(kind, " ".join(sentences) or "Deprecated.")


def _callout(kind: str, text: str) -> str:
    return f"> [!{kind}]\n> {text}\n\n"


__all__ = ["DocsResult", "catalog_title", "generate_catalog_docs", "render_catalog_markdown", "render_entry_markdown"]

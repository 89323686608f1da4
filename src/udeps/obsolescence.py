# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide whether catalog entries have a native replacement on the target."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Final

from .capabilities import unsupported
from .syntax.erasure import erase_types
from .syntax.program import single_return_expression
from .tags import DeprecatedTag, ObsolescenceReason

if TYPE_CHECKING:
    from .catalog.models import CatalogEntry
    from .config.models import UdepsConfig

INLINE_RECOMMEND: Final[str] = "recommend"
INLINE_CONSIDER: Final[str] = "consider"
MDN_GLOBAL_OBJECTS_URL: Final[str] = "https://developer.mozilla.org/en-US/docs/Web/JavaScript/Reference/Global_Objects/"
_PROTOTYPE_SEGMENT: Final[str] = "prototype"


def missing_capabilities(config: UdepsConfig, entry: CatalogEntry) -> list[str]:
    """Return the ``@requires`` tokens of ``entry`` the configured target lacks.

    Args:
        config: Resolved configuration providing the target ``lib``.
        entry: Catalog entry to check.

    Returns:
        list[str]: Unsatisfied capability tokens in tag order.
    """

    return unsupported(config.lib, entry.required_capabilities)


def evaluate(entry: CatalogEntry, target: Sequence[str]) -> ObsolescenceReason | None:
    """Return why ``entry`` is obsolete for ``target``, if it is.

    A ``since`` capability the target does not provide means the snippet is
    still the only working implementation, so only an inline hint survives.
    When an entry carries several ``@deprecated`` tags, the first fully
    obsolete reason wins, then the first inline-only hint.

    Args:
        entry: Catalog entry to evaluate.
        target: Capability tokens declared by the target.

    Returns:
        ObsolescenceReason | None: Full reason when obsolete, an inline-only
        reason when inlining is still suggested, otherwise ``None``.
    """

    partial: ObsolescenceReason | None = None
    for tag in entry.deprecations:
        reason = _evaluate_tag(tag, target)
        if reason is None:
            continue
        if reason is tag.reason:
            return reason
        partial = partial or reason
    return partial


def _evaluate_tag(tag: DeprecatedTag, target: Sequence[str]) -> ObsolescenceReason | None:
    reason = tag.reason
    if reason.since is not None and unsupported(target, [reason.since]):
        return ObsolescenceReason(inline=reason.inline) if reason.inline is not None else None
    return reason


def inline_suggestion(entry: CatalogEntry) -> str | None:
    """Return the JavaScript expression ``entry`` can be inlined as.

    Args:
        entry: Catalog entry whose body should be a single ``return``.

    Returns:
        str | None: Type-erased return expression, or ``None`` when the body
        is not a single ``return`` statement.
    """

    erased = erase_types(entry.body_fragment, entry.grammar)
    return single_return_expression(erased, entry.grammar)


def docs_url(name: str) -> str:
    """Return the MDN reference page for a global such as ``Array.prototype.at``.

    Args:
        name: Dotted name of the native replacement.

    Returns:
        str: MDN ``Global_Objects`` URL with ``prototype`` segments dropped.
    """

    parts = [part for part in name.split(".") if part and part != _PROTOTYPE_SEGMENT]
    return MDN_GLOBAL_OBJECTS_URL + "/".join(parts)


def describe(entry: CatalogEntry, reason: ObsolescenceReason) -> str:
    """Render a one-line hint explaining what to use instead of ``entry``.

    Args:
        entry: Obsolete catalog entry.
        reason: Result of :func:`evaluate`.

    Returns:
        str: Hint text, empty when there is nothing actionable to say.
    """

    if reason.replacement:
        return f"Use the native function {reason.replacement} instead ({docs_url(reason.replacement)})."
    if reason.inline is not None:
        inline = inline_suggestion(entry)
        if inline:
            if reason.inline == INLINE_RECOMMEND:
                return f"This should be inlined as {inline}"
            return f"Consider inlining this as {inline}"
    return ""


__all__ = [
    "INLINE_CONSIDER",
    "INLINE_RECOMMEND",
    "ObsolescenceReason",
    "describe",
    "docs_url",
    "evaluate",
    "inline_suggestion",
    "missing_capabilities",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve required platform capabilities against a target capability set.

Capability tokens follow the ``lib`` vocabulary of ``tsconfig.json``. A token
either names an ECMAScript level (``ES5``, ``es2020``, ``ESNext``), a feature
namespaced under a level (``ES2016.Array.Include``), or an opaque platform
marker such as ``node`` or ``DOM``. Comparisons are case-insensitive.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from typing import Final

SENTINEL_TOKEN: Final[str] = "esnext"
NAMESPACE_SEPARATOR: Final[str] = "."

_LEVEL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^es(\d+)", re.IGNORECASE)
_LEVEL_LIKE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^es", re.IGNORECASE)
_LEGACY_EDITION_LIMIT: Final[int] = 6
_FIRST_YEARLY_EDITION: Final[int] = 2015
_LAST_YEARLY_EDITION: Final[int] = 2099


def parse_level(token: str) -> float | None:
    """Return the ordinal of the ECMAScript level encoded in ``token``.

    Editions up to ES6 keep their number; yearly editions continue the
    sequence so that ``ES2015`` equals ``ES6``. The leading ``es<digits>``
    prefix is all that matters, so ``ES2017.Object`` resolves to the ES2017
    ordinal.

    Args:
        token: Capability token to inspect.

    Returns:
        float | None: Ordinal for level tokens, ``math.inf`` for the sentinel
        token, ``None`` when ``token`` does not encode a level.
    """

    lowered = token.strip().lower()
    if lowered == SENTINEL_TOKEN:
        return math.inf
    match = _LEVEL_PATTERN.match(lowered)
    if match is None:
        return None
    edition = int(match.group(1))
    if edition <= _LEGACY_EDITION_LIMIT:
        return float(edition)
    if _FIRST_YEARLY_EDITION <= edition <= _LAST_YEARLY_EDITION:
        return float(edition - _FIRST_YEARLY_EDITION + _LEGACY_EDITION_LIMIT)
    return None


def target_level(target: Iterable[str]) -> float:
    """Return the effective level of a target capability set.

    Only tokens without a namespace separator contribute; tokens that fail to
    parse are ignored.

    Args:
        target: Capability tokens declared by the target platform.

    Returns:
        float: Highest ordinal found, ``-math.inf`` when none parse.
    """

    levels = [
        level
        for token in target
        if NAMESPACE_SEPARATOR not in token
        for level in (parse_level(token),)
        if level is not None
    ]
    return max(levels, default=-math.inf)


def unsupported(target: Sequence[str], required: Sequence[str]) -> list[str]:
    """Return the required capabilities the target does not provide.

    A required token is satisfied when it parses as a level no higher than
    the target level, or when its lowercase form is literally declared by the
    target.

    Args:
        target: Capability tokens declared by the target platform.
        required: Capability tokens a catalog entry depends on.

    Returns:
        list[str]: Unsatisfied tokens in their original order and casing.
    """

    level = target_level(target)
    declared = {token.strip().lower() for token in target}
    missing: list[str] = []
    for token in required:
        ordinal = parse_level(token)
        if ordinal is not None and ordinal <= level:
            continue
        if token.strip().lower() in declared:
            continue
        missing.append(token)
    return missing


def lint_target(target: Iterable[str]) -> list[str]:
    """Return warnings for target tokens that look like levels but do not parse.

    Such tokens silently contribute nothing to the target level, so they are
    flagged when the configuration is loaded rather than during resolution.

    Args:
        target: Capability tokens declared by the target platform.

    Returns:
        list[str]: One warning per suspicious token.
    """

    warnings: list[str] = []
    for token in target:
        stripped = token.strip()
        if not stripped:
            warnings.append("Empty capability token in 'lib' is ignored.")
            continue
        if NAMESPACE_SEPARATOR in stripped or not _LEVEL_LIKE_PATTERN.match(stripped):
            continue
        if parse_level(stripped) is None:
            warnings.append(
                f"Capability '{stripped}' is not a known ECMAScript level and does not raise the target level."
            )
    return warnings


__all__ = [
    "NAMESPACE_SEPARATOR",
    "SENTINEL_TOKEN",
    "lint_target",
    "parse_level",
    "target_level",
    "unsupported",
]

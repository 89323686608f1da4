# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""License compliance checks for catalog headers.

Snippets are copied into consumer projects without attribution, so catalogs
are expected to carry a public-domain-equivalent license.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

PUBLIC_DOMAIN_LICENSES: Final[Mapping[str, str]] = {
    "0BSD": "BSD Zero Clause License",
    "CC0-1.0": "Creative Commons Zero",
    "MIT-0": "MIT No Attribution",
    "Unlicense": "The Unlicense",
    "WTFPL": "Do What The F*ck You Want To Public License",
}

PUBLIC_DOMAIN_PHRASES: Final[tuple[str, ...]] = (
    *PUBLIC_DOMAIN_LICENSES.values(),
    "CC0 1.0 Universal",
    "public domain",
)

SPDX_LICENSE_URL: Final[str] = "https://spdx.org/licenses/{identifier}.html"


def is_public_domain_equivalent(text: str) -> bool:
    """Return whether ``text`` names an allowed license.

    Args:
        text: ``@license`` value or header comment text.

    Returns:
        bool: ``True`` on an exact SPDX identifier match or a case-insensitive
        phrase match.
    """

    stripped = text.strip()
    if stripped in PUBLIC_DOMAIN_LICENSES:
        return True
    lowered = " ".join(stripped.lower().split())
    return any(phrase.lower() in lowered for phrase in PUBLIC_DOMAIN_PHRASES)


def license_url(identifier: str) -> str:
    """Return the SPDX page for ``identifier``."""

    return SPDX_LICENSE_URL.format(identifier=identifier.strip())


__all__ = [
    "PUBLIC_DOMAIN_LICENSES",
    "PUBLIC_DOMAIN_PHRASES",
    "is_public_domain_equivalent",
    "license_url",
]

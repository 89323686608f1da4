# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read catalog sources from HTTP(S) URLs or the filesystem."""

from __future__ import annotations

import re
import ssl
import urllib.error
import urllib.request
from enum import Enum
from pathlib import Path
from typing import Final
from urllib.parse import urlparse

from .. import __version__
from ..errors import SourceUnavailableError, UnsupportedLocatorError

DEFAULT_FETCH_TIMEOUT: Final[float] = 10.0
_REMOTE_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
# A scheme needs at least two letters so Windows drive letters stay paths.
_URL_SCHEME: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]+:")


class LocatorKind(str, Enum):
    """Enumerate supported locator shapes."""

    REMOTE = "remote"
    PATH = "path"


def classify_locator(locator: str) -> LocatorKind:
    """Return the shape of ``locator``.

    Args:
        locator: Catalog locator from the configuration.

    Returns:
        LocatorKind: Remote URL or filesystem path.

    Raises:
        UnsupportedLocatorError: If the locator is empty or uses another URL scheme.
    """

    stripped = locator.strip()
    if not stripped:
        raise UnsupportedLocatorError(locator, "Empty catalog locator.")
    parsed = urlparse(stripped)
    if parsed.scheme.lower() in _REMOTE_SCHEMES:
        if not parsed.netloc:
            raise UnsupportedLocatorError(locator, f"Catalog URL '{locator}' has no host.")
        return LocatorKind.REMOTE
    if _URL_SCHEME.match(stripped):
        raise UnsupportedLocatorError(
            locator,
            f"Unsupported catalog locator '{locator}': expected an http(s) URL or a file path.",
        )
    return LocatorKind.PATH


def resolve_path(locator: str, base_dir: Path) -> Path:
    """Return the filesystem path a path locator refers to.

    Args:
        locator: Path locator, relative paths being anchored at ``base_dir``.
        base_dir: Project directory.

    Returns:
        Path: Absolute path of the catalog file.
    """

    path = Path(locator.strip()).expanduser()
    return path if path.is_absolute() else (base_dir / path)


def read_locator(locator: str, *, base_dir: Path, timeout: float = DEFAULT_FETCH_TIMEOUT) -> str:
    """Return the text behind ``locator``.

    Args:
        locator: HTTP(S) URL or filesystem path.
        base_dir: Directory anchoring relative paths.
        timeout: Seconds to wait for a remote fetch.

    Returns:
        str: Decoded catalog source.

    Raises:
        SourceUnavailableError: If the source cannot be fetched or read.
        UnsupportedLocatorError: If ``locator`` has an unsupported shape.
    """

    if classify_locator(locator) is LocatorKind.REMOTE:
        return _fetch(locator, timeout=timeout)
    path = resolve_path(locator, base_dir)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailableError(locator, f"Unable to read catalog '{path}': {exc}") from exc


def _fetch(url: str, *, timeout: float) -> str:
    """Download ``url`` and decode it as UTF-8."""

    request = urllib.request.Request(url.strip(), headers={"User-Agent": f"udeps/{__version__}"})
    opener = urllib.request.build_opener(urllib.request.HTTPSHandler(context=ssl.create_default_context()))
    try:
        with opener.open(request, timeout=timeout) as response:
            payload = response.read()
    except (urllib.error.URLError, TimeoutError, OSError) as exc:
        raise SourceUnavailableError(url, f"Unable to fetch catalog '{url}': {exc}") from exc
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceUnavailableError(url, f"Catalog '{url}' is not valid UTF-8: {exc}") from exc


__all__ = [
    "DEFAULT_FETCH_TIMEOUT",
    "LocatorKind",
    "classify_locator",
    "read_locator",
    "resolve_path",
]

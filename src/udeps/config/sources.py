# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Concrete configuration sources (defaults, tsconfig, udeps.json, CLI)."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Protocol

from ..errors import ConfigError
from .models import DEFAULT_LIB, DEFAULT_OUTPUT_FILE

COMPILER_OPTIONS_KEY: Final[str] = "compilerOptions"
LIB_KEY: Final[str] = "lib"

# Strings are matched first so comment markers inside them survive.
_JSON_COMMENT: Final[re.Pattern[str]] = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
_TRAILING_COMMA: Final[re.Pattern[str]] = re.compile(r",(\s*[}\]])")


class ConfigSource(Protocol):
    """Provide configuration data loaded from disk or other mediums."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return configuration values keyed like ``udeps.json``."""


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return {"outputFile": DEFAULT_OUTPUT_FILE, LIB_KEY: list(DEFAULT_LIB)}


class JsonConfigSource:
    """Load configuration data from a ``udeps.json`` document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        if not self._path.exists():
            return {}
        document = read_json_document(self._path)
        if not isinstance(document, Mapping):
            raise ConfigError(f"Configuration at {self._path} must be a JSON object")
        return dict(document)


class TsconfigLibSource:
    """Read ``compilerOptions.lib`` from the project's ``tsconfig.json``."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self.name = str(path)

    def load(self) -> Mapping[str, Any]:
        lib = self.lib()
        return {LIB_KEY: lib} if lib else {}

    def lib(self) -> list[str] | None:
        """Return the declared ``lib`` list, ``None`` when absent."""

        if not self._path.exists():
            return None
        document = read_json_document(self._path)
        options = document.get(COMPILER_OPTIONS_KEY) if isinstance(document, Mapping) else None
        lib = options.get(LIB_KEY) if isinstance(options, Mapping) else None
        if lib is None:
            return None
        if not isinstance(lib, list) or not all(isinstance(item, str) for item in lib):
            raise ConfigError(f"'{COMPILER_OPTIONS_KEY}.{LIB_KEY}' in {self._path} must be a list of strings")
        return list(lib)


class OverrideConfigSource:
    """Expose explicit overrides, typically parsed from the command line."""

    def __init__(self, values: Mapping[str, Any], *, name: str = "command line") -> None:
        self._values = {key: value for key, value in values.items() if value is not None}
        self.name = name

    def load(self) -> Mapping[str, Any]:
        return dict(self._values)


def read_json_document(path: Path) -> Any:
    """Parse a JSON file, tolerating the comments and trailing commas of tsconfig.

    Args:
        path: File to read.

    Returns:
        Any: Decoded JSON value.

    Raises:
        ConfigError: If the file cannot be read or decoded.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    relaxed = _TRAILING_COMMA.sub(r"\1", _JSON_COMMENT.sub(lambda match: match.group(1) or "", text))
    try:
        return json.loads(relaxed)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc


__all__ = [
    "ConfigSource",
    "DefaultConfigSource",
    "JsonConfigSource",
    "OverrideConfigSource",
    "TsconfigLibSource",
    "read_json_document",
]

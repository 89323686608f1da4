# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic model describing a resolved udeps configuration."""

from __future__ import annotations

import re
from importlib import resources
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..catalog.sources import DEFAULT_FETCH_TIMEOUT

CONFIG_FILENAME: Final[str] = "udeps.json"
TSCONFIG_FILENAME: Final[str] = "tsconfig.json"
PACKAGE_MANIFEST: Final[str] = "package.json"
DEFAULT_OUTPUT_FILE: Final[str] = "udeps.ts"
DEFAULT_LIB: Final[tuple[str, ...]] = ("es2020",)
INHERIT_TOKEN: Final[str] = "[inherit]"
BUNDLED_CATALOGS: Final[tuple[str, ...]] = ("udeps.ts", "compat.ts")
LIST_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[,;\s]+")


def split_list(value: str) -> list[str]:
    """Split a comma, semicolon or whitespace separated option value."""

    return [item for item in LIST_SEPARATORS.split(value.strip()) if item]


def bundled_catalog(name: str) -> str:
    """Return the filesystem path of a catalog shipped with udeps."""

    return str(resources.files("udeps").joinpath("registry", name))


def default_registry() -> list[str]:
    """Return the bundled catalogs searched when no registry is configured."""

    return [bundled_catalog(name) for name in BUNDLED_CATALOGS]


class UdepsConfig(BaseModel):
    """Resolved configuration consumed by every command.

    Field aliases follow the camelCase keys of ``udeps.json``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    output_file: Path = Field(default=Path(DEFAULT_OUTPUT_FILE), alias="outputFile")
    lib: list[str] = Field(default_factory=lambda: list(DEFAULT_LIB))
    registry: list[str] = Field(default_factory=default_registry)
    project: Path = Field(default_factory=Path.cwd)
    fetch_timeout: float = Field(default=DEFAULT_FETCH_TIMEOUT, alias="fetchTimeout", gt=0)

    @field_validator("lib", "registry", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_list(value)
        return value

    @field_validator("lib", "registry")
    @classmethod
    def _strip_items(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]

    @property
    def output_path(self) -> Path:
        """Return the output file anchored at the project directory."""

        path = self.output_file.expanduser()
        return path if path.is_absolute() else self.project / path


__all__ = [
    "BUNDLED_CATALOGS",
    "CONFIG_FILENAME",
    "DEFAULT_LIB",
    "DEFAULT_OUTPUT_FILE",
    "INHERIT_TOKEN",
    "PACKAGE_MANIFEST",
    "TSCONFIG_FILENAME",
    "UdepsConfig",
    "bundled_catalog",
    "default_registry",
    "split_list",
]

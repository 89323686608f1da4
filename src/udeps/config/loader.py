# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence and traceability."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..capabilities import lint_target
from ..errors import ConfigError
from .models import CONFIG_FILENAME, INHERIT_TOKEN, PACKAGE_MANIFEST, TSCONFIG_FILENAME, UdepsConfig, split_list
from .sources import ConfigSource, DefaultConfigSource, JsonConfigSource, OverrideConfigSource, TsconfigLibSource

PROJECT_KEY = "project"
LIB_KEY = "lib"


class ConfigLoadResult(BaseModel):
    """Container bundling a resolved config with provenance metadata."""

    model_config = ConfigDict(validate_assignment=True)

    config: UdepsConfig
    warnings: list[str] = Field(default_factory=list)
    sources: dict[str, str] = Field(default_factory=dict)


def find_project_dir(start: Path | None = None) -> Path:
    """Return the nearest directory at or above ``start`` holding ``package.json``.

    Args:
        start: Directory to start from, the working directory by default.

    Returns:
        Path: Package directory, or ``start`` itself when none is found.
    """

    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if (candidate / PACKAGE_MANIFEST).is_file():
            return candidate
    return origin


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(
        self,
        *,
        project_dir: Path,
        sources: Sequence[ConfigSource],
        inherited_lib: Sequence[str] | None = None,
    ) -> None:
        """Initialise a loader that merges the supplied configuration sources.

        Args:
            project_dir: Directory that anchors relative paths.
            sources: Ordered sources, later ones taking precedence.
            inherited_lib: Capability tokens substituted for ``[inherit]``.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._project_dir = project_dir.resolve()
        self._sources = list(sources)
        self._inherited_lib = list(inherited_lib) if inherited_lib is not None else None

    @classmethod
    def for_root(
        cls,
        project_dir: Path,
        *,
        config_file: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> ConfigLoader:
        """Build a loader for ``project_dir`` with the default precedence.

        Precedence, lowest first: built-in defaults, ``tsconfig.json`` lib,
        ``udeps.json``, explicit overrides.

        Args:
            project_dir: Package directory.
            config_file: Configuration file, relative to ``project_dir``.
            overrides: Values taking precedence over every file.

        Returns:
            ConfigLoader: Configured loader.
        """

        root = project_dir.resolve()
        config_path = config_file if config_file is not None else Path(CONFIG_FILENAME)
        if not config_path.is_absolute():
            config_path = root / config_path
        tsconfig = TsconfigLibSource(root / TSCONFIG_FILENAME)
        sources: list[ConfigSource] = [DefaultConfigSource(), tsconfig, JsonConfigSource(config_path)]
        if overrides:
            sources.append(OverrideConfigSource(overrides))
        return cls(project_dir=root, sources=sources, inherited_lib=tsconfig.lib())

    def load(self) -> UdepsConfig:
        """Return the resolved configuration without provenance metadata."""

        return self.load_with_trace().config

    def load_with_trace(self) -> ConfigLoadResult:
        """Return the resolved configuration with warnings and provenance.

        Returns:
            ConfigLoadResult: Resolved configuration, warnings about suspicious
            values and the source that last set each key.

        Raises:
            ConfigError: If a source is malformed or a value is invalid.
        """

        merged: dict[str, Any] = {}
        provenance: dict[str, str] = {}
        for source in self._sources:
            fragment = source.load()
            for key, value in fragment.items():
                merged[key] = value
                provenance[key] = source.name
        warnings: list[str] = []
        if LIB_KEY in merged:
            merged[LIB_KEY] = self._expand_lib(merged[LIB_KEY], warnings)
        merged[PROJECT_KEY] = self._resolve_project(merged.get(PROJECT_KEY))
        try:
            config = UdepsConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
        warnings.extend(lint_target(config.lib))
        return ConfigLoadResult(config=config, warnings=warnings, sources=provenance)

    def _expand_lib(self, raw: Any, warnings: list[str]) -> Any:
        """Replace ``[inherit]`` with the tsconfig lib, keeping first occurrences."""

        tokens = split_list(raw) if isinstance(raw, str) else raw
        if not isinstance(tokens, list):
            return raw
        expanded: list[str] = []
        for token in tokens:
            if isinstance(token, str) and token.strip().lower() == INHERIT_TOKEN:
                if self._inherited_lib is None:
                    warnings.append(f"'{INHERIT_TOKEN}' used but {TSCONFIG_FILENAME} declares no lib.")
                    continue
                expanded.extend(self._inherited_lib)
            else:
                expanded.append(token)
        return list(dict.fromkeys(expanded))

    def _resolve_project(self, value: Any) -> Path:
        if value is None:
            return self._project_dir
        path = Path(str(value)).expanduser()
        return path if path.is_absolute() else (self._project_dir / path).resolve()


def load_config(
    *,
    project: Path | None = None,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ConfigLoadResult:
    """Discover the project directory and load its configuration.

    Args:
        project: Explicit project directory; discovered from the working
            directory when omitted.
        config_file: Configuration file relative to the project directory.
        overrides: Values taking precedence over every file.

    Returns:
        ConfigLoadResult: Resolved configuration and warnings.
    """

    project_dir = project.resolve() if project is not None else find_project_dir()
    return ConfigLoader.for_root(project_dir, config_file=config_file, overrides=overrides).load_with_trace()


__all__ = ["ConfigLoadResult", "ConfigLoader", "find_project_dir", "load_config"]

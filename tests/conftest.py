# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

SAMPLE_CATALOG = """\
/**
 * Sample catalog used by the test-suite
 * @module sample
 * @license 0BSD
 */

/**
 * Clamps a number between two bounds. Useful for sliders.
 * @param value   Number to clamp
 * @returns       Clamped number
 * @requires      ES5
 */
export function clamp(value: number, min: number, max: number): number {
  return Math.min(Math.max(value, min), max);
}

/**
 * Reads an environment variable.
 * @requires node
 */
export function env(name: string): string | undefined {
  return process.env[name];
}

/**
 * Checks if an object has a specific property as its own property.
 * @param obj    Object to check
 * @param prop   Property name to check
 * @requires     ES5
 * @deprecated   since=es2022.object, replace-with={@link Object.hasOwn}
 */
export function hasOwn(obj: object, prop: PropertyKey): boolean {
  return Object.prototype.hasOwnProperty.call(obj, prop);
}

/**
 * Returns the last element of an array.
 * @param items   Array to read
 * @returns       Last element, or undefined for empty arrays
 * @requires      ES2015
 * @deprecated    inline=consider
 */
export function last<T>(items: readonly T[]): T | undefined {
  return items[items.length - 1];
}

export function undocumented(): void {}
"""


@pytest.fixture
def sample_catalog_text() -> str:
    """Return the source of a small catalog with one entry per scenario."""
    return SAMPLE_CATALOG


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Return a package directory whose config points at the sample catalog."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "package.json").write_text('{"name": "demo"}', encoding="utf-8")
    (root / "catalog.ts").write_text(SAMPLE_CATALOG, encoding="utf-8")
    (root / "udeps.json").write_text(
        json.dumps({"registry": ["catalog.ts"], "lib": ["es2020"]}),
        encoding="utf-8",
    )
    return root

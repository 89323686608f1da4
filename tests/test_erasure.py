# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the type-erasure transform."""

from __future__ import annotations

import pytest

try:
    import tree_sitter_typescript  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("tree-sitter-typescript not available", allow_module_level=True)
else:
    _ = tree_sitter_typescript

from udeps.syntax import erase_types, single_return_expression


def test_parameter_and_return_annotations_are_removed() -> None:
    source = "export function add(a: number, b: number): number {\n  return a + b;\n}"

    assert erase_types(source) == "export function add(a, b) {\n  return a + b;\n}"


def test_type_parameters_and_optional_markers_are_removed() -> None:
    source = "function first<T>(items: readonly T[], fallback?: T): T | undefined {\n  return items[0] ?? fallback;\n}"

    assert erase_types(source) == "function first(items, fallback) {\n  return items[0] ?? fallback;\n}"


def test_assertions_unwrap_to_inner_expression() -> None:
    source = "function size(value: unknown) {\n  return (value as string[])!.length;\n}"

    assert erase_types(source) == "function size(value) {\n  return (value).length;\n}"


def test_local_type_declarations_and_variable_annotations_are_removed() -> None:
    source = (
        "function pair(a: string) {\n"
        "  type Pair = [string, string];\n"
        "  const result: Pair = [a, a];\n"
        "  return result;\n"
        "}"
    )

    assert erase_types(source) == "function pair(a) {\n  const result = [a, a];\n  return result;\n}"


def test_parameter_properties_become_plain_parameters() -> None:
    source = "class Box {\n  constructor(private readonly value: number) {}\n}"

    assert erase_types(source) == "class Box {\n  constructor(value) {}\n}"


def test_this_parameter_is_dropped() -> None:
    assert erase_types("function f(this: Window, x: number) { return x; }") == "function f(x) { return x; }"
    assert erase_types("function g(this: Window) { return this; }") == "function g() { return this; }"


def test_definite_assignment_marker_is_removed() -> None:
    assert erase_types("let x!: number;") == "let x;"


def test_class_only_syntax_is_removed() -> None:
    source = (
        "class A extends Base implements B, C {\n"
        "  private x: number = 1;\n"
        "  protected readonly y?: string;\n"
        "  declared!: boolean;\n"
        "  public override run(): void {}\n"
        "}"
    )

    assert erase_types(source) == (
        "class A extends Base {\n  x = 1;\n  y;\n  declared;\n  run() {}\n}"
    )
    assert erase_types("class A implements B { private x: number = 1; }") == "class A { x = 1; }"


def test_type_predicate_is_removed() -> None:
    source = "function isString(value: unknown): value is string {\n  return typeof value === \"string\";\n}"

    assert erase_types(source) == "function isString(value) {\n  return typeof value === \"string\";\n}"


def test_runtime_code_is_untouched() -> None:
    source = "function greet(name) {\n  // say hi\n  return `hi ${name}`;\n}\n"

    assert erase_types(source) == source


def test_single_return_expression() -> None:
    erased = erase_types("export function isEven(num: number): boolean {\n  return num % 2 === 0;\n}")

    assert single_return_expression(erased) == "num % 2 === 0"
    assert single_return_expression("function noop() {}") is None
    assert single_return_expression("function two() {\n  const x = 1;\n  return x + 1;\n}") is None

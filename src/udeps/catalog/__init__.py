# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Catalog loading: locators, parsing and license checks."""

from __future__ import annotations

from .loader import iter_catalogs, load_catalog, parse_catalog
from .models import Catalog, CatalogEntry, CatalogLoad

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogLoad",
    "iter_catalogs",
    "load_catalog",
    "parse_catalog",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and layered loading."""

from __future__ import annotations

from .loader import ConfigLoader, ConfigLoadResult, find_project_dir, load_config
from .models import UdepsConfig, split_list

__all__ = [
    "ConfigLoadResult",
    "ConfigLoader",
    "UdepsConfig",
    "find_project_dir",
    "load_config",
    "split_list",
]

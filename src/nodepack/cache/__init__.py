# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Two-tier cache management for dependency and tool download caches."""

from .layout import TOOL_CACHE_DOMAINS, CacheDomain, CacheLayout, CacheMode, DomainPaths
from .manager import CacheManager, RestorePlan, RestoreStrategy, select_strategy

__all__ = [
    "TOOL_CACHE_DOMAINS",
    "CacheDomain",
    "CacheLayout",
    "CacheManager",
    "CacheMode",
    "DomainPaths",
    "RestorePlan",
    "RestoreStrategy",
    "select_strategy",
]

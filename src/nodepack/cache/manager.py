# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Restore and persist dependency and tool caches around the install step."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..config import BuildContext
from ..fs import relink, remove_path, replace_tree
from ..logging import Reporter
from .layout import CacheLayout, CacheMode

_LOGGER = logging.getLogger(__name__)


class RestoreStrategy(str, Enum):
    """Source used to populate ``node_modules`` before npm runs."""

    CHECKED_IN = "checked_in"
    CACHED = "cached"
    FRESH = "fresh"


@dataclass(frozen=True, slots=True)
class RestorePlan:
    """Decisions taken during restore that the install and persist steps rely on."""

    mode: CacheMode
    strategy: RestoreStrategy


def select_strategy(workspace_has_modules: bool, cache_has_modules: bool) -> RestoreStrategy:
    """Return the restore strategy; checked-in modules win over cached ones."""

    if workspace_has_modules:
        return RestoreStrategy.CHECKED_IN
    if cache_has_modules:
        return RestoreStrategy.CACHED
    return RestoreStrategy.FRESH


class CacheManager:
    """Own the cache domains across the restore and persist phases of a build."""

    def __init__(self, *, reporter: Reporter | None = None) -> None:
        self._reporter = reporter or Reporter()

    def restore_all(self, ctx: BuildContext) -> RestorePlan:
        """Populate live cache locations and choose the dependency restore strategy."""

        layout = CacheLayout(ctx)
        mode = layout.mode
        if mode is CacheMode.GLOBAL:
            self._link_global(layout)
        else:
            self._copy_local(layout)

        deps = layout.dependencies
        strategy = select_strategy(deps.live.is_dir(), deps.local.is_dir())
        if strategy is RestoreStrategy.CHECKED_IN:
            self._reporter.info("Found existing node_modules directory; skipping cache")
        elif strategy is RestoreStrategy.CACHED:
            self._reporter.info("Restoring node_modules from cache")
            replace_tree(deps.local, deps.live)
        else:
            self._reporter.info("No cached node_modules; performing a fresh install")
        _LOGGER.debug("restore plan: mode=%s strategy=%s", mode.value, strategy.value)
        return RestorePlan(mode=mode, strategy=strategy)

    def persist_all(self, ctx: BuildContext, plan: RestorePlan) -> None:
        """Save caches for the next build and remove transient scratch directories."""

        layout = CacheLayout(ctx)
        deps = layout.dependencies
        if replace_tree(deps.live, deps.local):
            self._reporter.info("Caching node_modules for future builds")
        else:
            remove_path(deps.local)

        if plan.mode is CacheMode.LOCAL:
            for domain, paths in layout.tool_caches.items():
                if replace_tree(paths.live, paths.local):
                    _LOGGER.debug("persisted %s: %s -> %s", domain.value, paths.live, paths.local)

        for scratch in layout.scratch_paths:
            remove_path(scratch)

    def _link_global(self, layout: CacheLayout) -> None:
        self._reporter.info(f"Using global cache at {layout.context.global_cache_dir}")
        for domain, paths in layout.tool_caches.items():
            if paths.global_ is None:
                msg = f"cache domain {domain.value!r} has no global location"
                raise ValueError(msg)
            relink(paths.live, paths.global_)
            _LOGGER.debug("linked %s: %s -> %s", domain.value, paths.live, paths.global_)

    def _copy_local(self, layout: CacheLayout) -> None:
        for domain, paths in layout.tool_caches.items():
            if replace_tree(paths.local, paths.live):
                _LOGGER.debug("restored %s: %s -> %s", domain.value, paths.local, paths.live)


__all__ = ["CacheManager", "RestorePlan", "RestoreStrategy", "select_strategy"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cache domains and the paths each one occupies in the global and per-build tiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import BuildContext
from ..constants import BOWER_CACHE_DIR, NODE_GYP_DIR, NODE_MODULES_DIR, NPM_CACHE_DIR


class CacheDomain(str, Enum):
    """Independent trees persisted between builds."""

    DEPENDENCIES = "dependencies"
    NPM_CACHE = "npm_cache"
    BOWER_CACHE = "bower_cache"


class CacheMode(str, Enum):
    """Storage tier backing every cache domain for one run."""

    GLOBAL = "global"
    LOCAL = "local"


TOOL_CACHE_DOMAINS: tuple[CacheDomain, ...] = (CacheDomain.NPM_CACHE, CacheDomain.BOWER_CACHE)


@dataclass(frozen=True, slots=True)
class DomainPaths:
    """Filesystem locations associated with a single cache domain.

    Attributes:
        live: Where the build and its tools read and write the tree.
        local: Per-build cache copy under ``cache_dir``.
        global_: Shared copy under the global cache root, or ``None`` when the
            domain is never shared across builds.
    """

    live: Path
    local: Path
    global_: Path | None = None


@dataclass(frozen=True, slots=True)
class CacheLayout:
    """Filesystem layout for the cache domains of a build context."""

    context: BuildContext

    @property
    def mode(self) -> CacheMode:
        """Return the tier selected for this run: global when its root exists."""

        return CacheMode.GLOBAL if self.context.global_cache_dir.is_dir() else CacheMode.LOCAL

    def paths(self, domain: CacheDomain) -> DomainPaths:
        """Return the locations occupied by ``domain``.

        Args:
            domain: Cache domain to locate.

        Returns:
            DomainPaths: Live, per-build and (for shareable domains) global paths.
        """

        ctx = self.context
        if domain is CacheDomain.DEPENDENCIES:
            return DomainPaths(
                live=ctx.build_dir / NODE_MODULES_DIR,
                local=ctx.cache_dir / NODE_MODULES_DIR,
            )
        if domain is CacheDomain.NPM_CACHE:
            return DomainPaths(
                live=ctx.build_dir / NPM_CACHE_DIR,
                local=ctx.cache_dir / NPM_CACHE_DIR,
                global_=ctx.global_cache_dir / NPM_CACHE_DIR,
            )
        return DomainPaths(
            live=ctx.home_dir / BOWER_CACHE_DIR,
            local=ctx.cache_dir / BOWER_CACHE_DIR,
            global_=ctx.global_cache_dir / BOWER_CACHE_DIR,
        )

    @property
    def dependencies(self) -> DomainPaths:
        """Return the paths of the ``node_modules`` domain."""

        return self.paths(CacheDomain.DEPENDENCIES)

    @property
    def tool_caches(self) -> dict[CacheDomain, DomainPaths]:
        """Return the download caches that may be shared through the global tier."""

        return {domain: self.paths(domain) for domain in TOOL_CACHE_DOMAINS}

    @property
    def scratch_paths(self) -> tuple[Path, ...]:
        """Return transient directories removed after every build."""

        return (
            self.context.build_dir / NODE_GYP_DIR,
            self.context.build_dir / NPM_CACHE_DIR,
            self.context.home_dir / BOWER_CACHE_DIR,
        )


__all__ = ["TOOL_CACHE_DOMAINS", "CacheDomain", "CacheLayout", "CacheMode", "DomainPaths"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end build pipeline wiring the provisioning and cache components."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .cache import CacheManager, RestorePlan
from .config import BuildContext, BuildSettings
from .env_file import load_scoped_env
from .installer import DependencyInstaller
from .logging import Reporter
from .manifest import load_manifest
from .procfile import ensure_procfile
from .profile import write_profile
from .runtime import RuntimeProvisioner
from .telemetry import Poster, http_post, post_manifest
from .versioning import VersionResolver


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Summary of a completed build."""

    node_version: str
    plan: RestorePlan
    procfile: Path | None
    profile_script: Path


class BuildPipeline:
    """Run resolve, provision, restore, install, persist, and finalize in order."""

    def __init__(
        self,
        settings: BuildSettings,
        *,
        reporter: Reporter | None = None,
        resolver: VersionResolver | None = None,
        provisioner: RuntimeProvisioner | None = None,
        cache_manager: CacheManager | None = None,
        telemetry_post: Poster = http_post,
    ) -> None:
        self._settings = settings
        self._reporter = reporter or Reporter()
        self._resolver = resolver or VersionResolver(
            settings.resolver_url,
            reporter=self._reporter,
            timeout=settings.http_timeout,
        )
        self._provisioner = provisioner or RuntimeProvisioner(
            settings.mirror_url,
            reporter=self._reporter,
            timeout=settings.http_timeout,
        )
        self._cache = cache_manager or CacheManager(reporter=self._reporter)
        self._telemetry_post = telemetry_post

    def run(self, ctx: BuildContext) -> BuildResult:
        """Execute the build for *ctx*; any :class:`~nodepack.errors.BuildError` aborts it."""

        reporter = self._reporter
        manifest = load_manifest(ctx.build_dir)

        reporter.section("Resolving node version")
        version = self._resolver.resolve(manifest.node_constraint)

        reporter.section(f"Installing node {version}")
        runtime = self._provisioner.provision(version, ctx.cache_dir, ctx.build_dir)

        reporter.section("Restoring cache")
        plan = self._cache.restore_all(ctx)

        installer = DependencyInstaller(
            runtime,
            reporter=reporter,
            build_profile=self._settings.build_profile,
        )
        installer.install(ctx, plan.strategy, load_scoped_env(ctx.env_file))
        installer.run_frontend_tools(ctx)

        reporter.section("Caching dependencies")
        self._cache.persist_all(ctx, plan)
        post_manifest(manifest.path, self._settings, post=self._telemetry_post)

        reporter.section("Finalizing")
        procfile = ensure_procfile(ctx, manifest, reporter=reporter)
        profile_script = write_profile(ctx)
        reporter.ok("Build succeeded")
        return BuildResult(
            node_version=version,
            plan=plan,
            procfile=procfile,
            profile_script=profile_script,
        )


def build(ctx: BuildContext, settings: BuildSettings, *, reporter: Reporter | None = None) -> BuildResult:
    """Run the default pipeline for *ctx*."""

    return BuildPipeline(settings, reporter=reporter).run(ctx)


__all__ = ["BuildPipeline", "BuildResult", "build"]

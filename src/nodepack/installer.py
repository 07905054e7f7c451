# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run npm under the selected restore strategy, then optional front-end tools."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from .cache import RestoreStrategy
from .config import BuildContext
from .constants import (
    BOWER_MANIFEST,
    GRUNT_FILE,
    NODE_MODULES_BIN,
    NPM_CACHE_DIR,
    NPM_DEBUG_LOG,
)
from .errors import InstallError
from .logging import Reporter
from .process_utils import SubprocessExecutionError, stream_command
from .runtime import RuntimeHandle

NPM_REBUILD: tuple[str, ...] = ("npm", "rebuild")
NPM_PRUNE: tuple[str, ...] = ("npm", "prune")
NPM_INSTALL: tuple[str, ...] = ("npm", "install", "--production")


def strategy_commands(strategy: RestoreStrategy) -> list[tuple[str, ...]]:
    """Return the npm commands executed for *strategy*, in order."""

    if strategy is RestoreStrategy.CHECKED_IN:
        return [NPM_REBUILD, NPM_INSTALL]
    if strategy is RestoreStrategy.CACHED:
        return [NPM_PRUNE, NPM_INSTALL]
    return [NPM_INSTALL]


class DependencyInstaller:
    """Drive npm (and bower/grunt when present) inside the build workspace."""

    def __init__(
        self,
        runtime: RuntimeHandle | None = None,
        *,
        reporter: Reporter | None = None,
        build_profile: str | None = None,
    ) -> None:
        self._runtime = runtime
        self._reporter = reporter or Reporter()
        self._build_profile = build_profile

    def base_env(self, ctx: BuildContext) -> dict[str, str]:
        """Return the environment shared by every subprocess of the install step."""

        env = self._runtime.path_env() if self._runtime is not None else dict(os.environ)
        env["npm_config_cache"] = str(ctx.build_dir / NPM_CACHE_DIR)
        return env

    def install(
        self,
        ctx: BuildContext,
        strategy: RestoreStrategy,
        scoped_env: Mapping[str, str] | None = None,
    ) -> int:
        """Install production dependencies according to *strategy*.

        ``scoped_env`` is merged into the environment of ``npm install`` only;
        no other subprocess and not the current process ever sees it.

        Returns:
            int: ``0`` once every command has succeeded.

        Raises:
            InstallError: If any npm command exits non-zero. The npm debug log
                is printed first when one exists.
        """

        base = self.base_env(ctx)
        for command in strategy_commands(strategy):
            env = base
            if command == NPM_INSTALL:
                self._reporter.section("Installing dependencies")
                if scoped_env:
                    env = {**base, **scoped_env}
            elif command == NPM_REBUILD:
                self._reporter.section("Rebuilding dependencies")
            else:
                self._reporter.section("Pruning unused dependencies")
            self._run_npm(command, ctx, env)
        return 0

    def run_frontend_tools(self, ctx: BuildContext) -> None:
        """Run ``bower install`` and ``grunt`` when their files and binaries are present."""

        env = self.base_env(ctx)
        bin_dir = ctx.build_dir / NODE_MODULES_BIN
        bower = bin_dir / "bower"
        if (ctx.build_dir / BOWER_MANIFEST).is_file() and bower.exists():
            self._reporter.section("Found bower.json, running bower install")
            self._run_tool([str(bower), "install"], ctx, env)
        grunt = bin_dir / "grunt"
        if (ctx.build_dir / GRUNT_FILE).is_file() and grunt.exists():
            command = [str(grunt)]
            if self._build_profile:
                command.append(self._build_profile)
            self._reporter.section(f"Found {GRUNT_FILE}, running grunt")
            self._run_tool(command, ctx, env)

    def _run_npm(self, command: Sequence[str], ctx: BuildContext, env: Mapping[str, str]) -> None:
        try:
            stream_command(command, sink=self._reporter.line, cwd=ctx.build_dir, env=env)
        except SubprocessExecutionError as exc:
            debug_log = self.dump_debug_log(ctx.build_dir)
            raise InstallError(command, exc.returncode, debug_log=debug_log) from exc
        except FileNotFoundError as exc:
            raise InstallError(command, 127) from exc

    def _run_tool(self, command: Sequence[str], ctx: BuildContext, env: Mapping[str, str]) -> None:
        try:
            stream_command(command, sink=self._reporter.line, cwd=ctx.build_dir, env=env)
        except SubprocessExecutionError as exc:
            raise InstallError(command, exc.returncode) from exc

    def dump_debug_log(self, build_dir: Path) -> str | None:
        """Print ``npm-debug.log`` from *build_dir* and return its contents, if any."""

        log_path = build_dir / NPM_DEBUG_LOG
        if not log_path.is_file():
            return None
        contents = log_path.read_text(encoding="utf-8", errors="replace")
        self._reporter.fail(f"{NPM_DEBUG_LOG}:")
        for line in contents.splitlines():
            self._reporter.line(line)
        return contents


__all__ = [
    "DependencyInstaller",
    "NPM_INSTALL",
    "NPM_PRUNE",
    "NPM_REBUILD",
    "strategy_commands",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``nodepack compile`` command."""

from __future__ import annotations

import logging
from pathlib import Path
import typer

from ..build import build
from ..config import BuildContext, BuildSettings
from ..errors import BuildError
from ..logging import Reporter


def compile_command(
    build_dir: Path = typer.Argument(..., help="Application workspace to build."),
    cache_dir: Path = typer.Argument(..., help="Per-build cache directory."),
    env_file: Path | None = typer.Argument(
        None,
        help="Optional KEY=VALUE file exported only while npm install runs.",
    ),
    emoji: bool = typer.Option(
        False,
        "--emoji/--no-emoji",
        help="Toggle emoji in build output.",
    ),
    color: bool = typer.Option(
        True,
        "--color/--no-color",
        help="Colour output when stdout is a terminal.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log cache decisions."),
) -> None:
    """Install Node.js and production dependencies into BUILD_DIR."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    reporter = Reporter(use_emoji=emoji, use_color=None if color else False)
    settings = BuildSettings.from_environ()
    ctx = BuildContext.from_paths(build_dir, cache_dir, env_file, settings)

    try:
        build(ctx, settings, reporter=reporter)
    except BuildError as exc:
        reporter.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


__all__ = ["compile_command"]

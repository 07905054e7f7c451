# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Write a default ``Procfile`` when the application does not ship one."""

from __future__ import annotations

from pathlib import Path

from .config import BuildContext
from .constants import DEFAULT_ENTRY_FILE, DEFAULT_WEB_COMMAND, PROCFILE_FILENAME
from .logging import Reporter
from .manifest import PackageManifest

UNDEFINED_START_ADVISORY = (
    "No Procfile, no scripts.start in package.json (undefined), and no server.js found"
)


def ensure_procfile(
    ctx: BuildContext,
    manifest: PackageManifest,
    *,
    reporter: Reporter | None = None,
) -> Path | None:
    """Create ``Procfile`` mapping ``web`` to ``npm start`` if it is missing.

    Returns:
        Path | None: The written Procfile, or ``None`` when nothing was written.
    """

    reporter = reporter or Reporter()
    procfile = ctx.build_dir / PROCFILE_FILENAME
    if procfile.exists():
        return None
    if manifest.start_script is None and not (ctx.build_dir / DEFAULT_ENTRY_FILE).is_file():
        reporter.tip(UNDEFINED_START_ADVISORY)
        return None
    procfile.write_text(f"web: {DEFAULT_WEB_COMMAND}\n", encoding="utf-8")
    reporter.info(f"No Procfile found; created one with 'web: {DEFAULT_WEB_COMMAND}'")
    return procfile


__all__ = ["UNDEFINED_START_ADVISORY", "ensure_procfile"]

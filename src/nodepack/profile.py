# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Write the ``.profile.d`` fragment that puts the vendored runtime on ``PATH``."""

from __future__ import annotations

from pathlib import Path

from .config import BuildContext
from .constants import NODE_MODULES_BIN, PROFILE_DIR, PROFILE_SCRIPT, VENDOR_NODE_DIR

PROFILE_TEMPLATE = 'export PATH="$HOME/{node_bin}:$HOME/bin:$HOME/{modules_bin}:$PATH"\n'


def write_profile(ctx: BuildContext) -> Path:
    """Write ``.profile.d/nodejs.sh`` and return its path."""

    script = ctx.build_dir / PROFILE_DIR / PROFILE_SCRIPT
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(
        PROFILE_TEMPLATE.format(
            node_bin=(VENDOR_NODE_DIR / "bin").as_posix(),
            modules_bin=NODE_MODULES_BIN.as_posix(),
        ),
        encoding="utf-8",
    )
    return script


__all__ = ["PROFILE_TEMPLATE", "write_profile"]

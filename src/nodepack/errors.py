# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the build pipeline."""

from __future__ import annotations

from collections.abc import Sequence


class BuildError(RuntimeError):
    """Base class for fatal build failures."""

    exit_code: int = 1


class ManifestError(BuildError):
    """Raised when ``package.json`` is missing or cannot be parsed."""


class ResolutionError(BuildError):
    """Raised when the version oracle is unreachable or returns no match."""


class DownloadError(BuildError):
    """Raised when the runtime archive cannot be fetched from the mirror."""


class ProvisionError(BuildError):
    """Raised when a runtime archive cannot be unpacked into the workspace."""


class InstallError(BuildError):
    """Raised when an npm (or front-end tool) subcommand exits non-zero."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        *,
        debug_log: str | None = None,
    ) -> None:
        super().__init__(f"Command '{' '.join(command)}' exited with status {returncode}")
        self.command = tuple(command)
        self.returncode = returncode
        self.debug_log = debug_log
        self.exit_code = returncode or 1


__all__ = [
    "BuildError",
    "DownloadError",
    "InstallError",
    "ManifestError",
    "ProvisionError",
    "ResolutionError",
]

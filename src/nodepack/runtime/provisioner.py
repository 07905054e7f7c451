# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fetch, cache, and unpack Node runtime archives into the build workspace."""

from __future__ import annotations

import http.client
import os
import shutil
import stat
import tarfile
import tempfile
import urllib.error
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from ..constants import VENDOR_NODE_DIR, archive_basename, archive_filename
from ..errors import DownloadError, ProvisionError
from ..fs import remove_path
from ..logging import Reporter
from ..versioning import USER_AGENT

Downloader = Callable[[str, Path, float | None], None]

_EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def download_to(url: str, destination: Path, timeout: float | None = None) -> None:
    """Stream ``url`` into ``destination`` without buffering the whole body."""

    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    # Bandit: the mirror URL comes from configuration and a validated version.
    with urllib.request.urlopen(request, timeout=timeout) as response, destination.open("wb") as handle:  # nosec B310
        shutil.copyfileobj(response, handle)


@dataclass(frozen=True, slots=True)
class RuntimeHandle:
    """Location of an installed Node runtime inside the workspace."""

    version: str
    root: Path

    @property
    def bin_dir(self) -> Path:
        """Return the directory holding ``node`` and ``npm``."""

        return self.root / "bin"

    def path_env(self, environ: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return a copy of *environ* with the runtime ``bin`` directory first on ``PATH``."""

        env = dict(os.environ if environ is None else environ)
        current = env.get("PATH", "")
        env["PATH"] = f"{self.bin_dir}{os.pathsep}{current}" if current else str(self.bin_dir)
        return env


class RuntimeProvisioner:
    """Install a resolved Node version, reusing a cached archive when one exists."""

    def __init__(
        self,
        mirror_url: str,
        *,
        reporter: Reporter | None = None,
        download: Downloader = download_to,
        timeout: float | None = None,
    ) -> None:
        self._mirror_url = mirror_url.rstrip("/")
        self._reporter = reporter or Reporter()
        self._download = download
        self._timeout = timeout

    def archive_url(self, version: str) -> str:
        """Return the mirror URL of the Linux x64 archive for *version*.

        Args:
            version: Concrete Node version without a ``v`` prefix.

        Returns:
            str: Absolute archive URL.
        """

        return f"{self._mirror_url}/v{version}/{archive_filename(version)}"

    def provision(self, version: str, cache_dir: Path, build_dir: Path) -> RuntimeHandle:
        """Install Node *version* into ``build_dir/vendor/node``.

        Raises:
            DownloadError: If the archive cannot be fetched.
            ProvisionError: If the archive cannot be unpacked.
        """

        archive = cache_dir / archive_filename(version)
        if archive.is_file():
            self._reporter.info(f"Using cached node {version}")
        else:
            self._reporter.info(f"Downloading node {version}")
            self._fetch(version, archive)
        root = self._unpack(version, archive, build_dir)
        self._mark_executables(root / "bin")
        return RuntimeHandle(version=version, root=root)

    def _fetch(self, version: str, archive: Path) -> None:
        """Download into a sibling temporary file and promote it on success only."""

        archive.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{archive.name}.", suffix=".part", dir=archive.parent)
        os.close(fd)
        tmp_path = Path(tmp_name)
        url = self.archive_url(version)
        try:
            self._download(url, tmp_path, self._timeout)
            os.replace(tmp_path, archive)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            raise DownloadError(f"Unable to download {url}: {exc}") from exc
        finally:
            tmp_path.unlink(missing_ok=True)

    def _unpack(self, version: str, archive: Path, build_dir: Path) -> Path:
        """Extract *archive* into a scratch directory and move its tree to ``vendor/node``.

        Args:
            version: Version the archive is expected to contain.
            archive: Cached ``.tar.gz`` to extract.
            build_dir: Workspace receiving the runtime.

        Returns:
            Path: The installed runtime root.

        Raises:
            ProvisionError: If extraction fails or the archive has an unexpected
                layout; the cached archive is deleted first.
        """

        target = build_dir / VENDOR_NODE_DIR
        build_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix=".nodepack-unpack-", dir=build_dir) as scratch:
            scratch_dir = Path(scratch)
            try:
                with tarfile.open(archive, "r:gz") as tar:
                    tar.extractall(scratch_dir, filter="data")
            except (tarfile.TarError, EOFError, OSError) as exc:
                archive.unlink(missing_ok=True)
                raise ProvisionError(f"Unable to unpack {archive.name}: {exc}") from exc
            unpacked = self._locate_tree(version, scratch_dir)
            if unpacked is None:
                archive.unlink(missing_ok=True)
                raise ProvisionError(f"{archive.name} does not contain {archive_basename(version)}/")
            remove_path(target)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(unpacked), str(target))
        return target

    @staticmethod
    def _locate_tree(version: str, scratch_dir: Path) -> Path | None:
        """Return the runtime tree inside *scratch_dir*, or ``None`` when ambiguous.

        Args:
            version: Version used to derive the expected top-level directory.
            scratch_dir: Directory the archive was extracted into.

        Returns:
            Path | None: The expected directory, else the sole extracted directory.
        """

        expected = scratch_dir / archive_basename(version)
        if expected.is_dir():
            return expected
        entries = [entry for entry in scratch_dir.iterdir() if entry.is_dir()]
        return entries[0] if len(entries) == 1 else None

    @staticmethod
    def _mark_executables(bin_dir: Path) -> None:
        """Add execute bits to every entry of *bin_dir*; dangling links are skipped."""

        if not bin_dir.is_dir():
            return
        for entry in bin_dir.iterdir():
            if not entry.exists():
                continue
            mode = entry.stat().st_mode
            entry.chmod(mode | _EXECUTABLE_BITS)


__all__ = ["Downloader", "RuntimeHandle", "RuntimeProvisioner", "download_to"]

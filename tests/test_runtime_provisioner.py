# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for fetching, caching, and unpacking Node runtime archives."""

from __future__ import annotations

import http.client
import os
import urllib.error
from collections.abc import Callable
from pathlib import Path

import pytest

from nodepack.errors import DownloadError, ProvisionError
from nodepack.runtime import RuntimeProvisioner

MIRROR = "https://mirror.test/node"
VERSION = "0.10.33"


class RecordingDownloader:
    def __init__(self, payload: bytes) -> None:
        self.payload = payload
        self.calls: list[str] = []

    def __call__(self, url: str, destination: Path, timeout: float | None) -> None:
        self.calls.append(url)
        destination.write_bytes(self.payload)


def test_archive_url_is_templated_on_version() -> None:
    provisioner = RuntimeProvisioner(MIRROR + "/")
    assert provisioner.archive_url(VERSION) == f"{MIRROR}/v{VERSION}/node-v{VERSION}-linux-x64.tar.gz"


def test_cache_miss_downloads_and_persists_archive(
    tmp_path: Path,
    node_tarball: Callable[[str], bytes],
) -> None:
    cache_dir = tmp_path / "cache"
    build_dir = tmp_path / "build"
    downloader = RecordingDownloader(node_tarball(VERSION))

    handle = RuntimeProvisioner(MIRROR, download=downloader).provision(VERSION, cache_dir, build_dir)

    assert downloader.calls == [f"{MIRROR}/v{VERSION}/node-v{VERSION}-linux-x64.tar.gz"]
    assert (cache_dir / f"node-v{VERSION}-linux-x64.tar.gz").is_file()
    assert [p.name for p in cache_dir.iterdir()] == [f"node-v{VERSION}-linux-x64.tar.gz"]
    assert handle.root == build_dir / "vendor" / "node"
    assert handle.version == VERSION
    assert (handle.bin_dir / "node").is_file()
    assert os.access(handle.bin_dir / "node", os.X_OK)
    assert os.access(handle.bin_dir / "npm", os.X_OK)
    assert not any(p.name.startswith(".nodepack-unpack-") for p in build_dir.iterdir())


def test_cache_hit_makes_no_network_calls(
    tmp_path: Path,
    node_tarball: Callable[[str], bytes],
) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    (cache_dir / f"node-v{VERSION}-linux-x64.tar.gz").write_bytes(node_tarball(VERSION))

    def forbidden(url: str, destination: Path, timeout: float | None) -> None:
        raise AssertionError("network must not be used on a cache hit")

    handle = RuntimeProvisioner(MIRROR, download=forbidden).provision(VERSION, cache_dir, tmp_path / "build")
    assert (handle.bin_dir / "node").is_file()


def test_provision_replaces_previous_runtime(
    tmp_path: Path,
    node_tarball: Callable[[str], bytes],
) -> None:
    build_dir = tmp_path / "build"
    stale = build_dir / "vendor" / "node" / "bin" / "stale"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")

    RuntimeProvisioner(MIRROR, download=RecordingDownloader(node_tarball(VERSION))).provision(
        VERSION,
        tmp_path / "cache",
        build_dir,
    )
    assert not stale.exists()


def test_failed_download_leaves_no_cache_entry(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"

    def partial(url: str, destination: Path, timeout: float | None) -> None:
        destination.write_bytes(b"truncated")
        raise urllib.error.URLError("reset by peer")

    with pytest.raises(DownloadError):
        RuntimeProvisioner(MIRROR, download=partial).provision(VERSION, cache_dir, tmp_path / "build")
    assert list(cache_dir.iterdir()) == []


def test_truncated_response_raises_download_error(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"

    def truncated(url: str, destination: Path, timeout: float | None) -> None:
        destination.write_bytes(b"partial")
        raise http.client.IncompleteRead(b"partial", 4096)

    with pytest.raises(DownloadError, match="IncompleteRead"):
        RuntimeProvisioner(MIRROR, download=truncated).provision(VERSION, cache_dir, tmp_path / "build")
    assert list(cache_dir.iterdir()) == []


def test_corrupt_cached_archive_is_evicted(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    archive = cache_dir / f"node-v{VERSION}-linux-x64.tar.gz"
    archive.write_bytes(b"not a tarball")

    with pytest.raises(ProvisionError):
        RuntimeProvisioner(MIRROR).provision(VERSION, cache_dir, tmp_path / "build")
    assert not archive.exists()


def test_path_env_prepends_runtime_bin(
    tmp_path: Path,
    node_tarball: Callable[[str], bytes],
) -> None:
    handle = RuntimeProvisioner(MIRROR, download=RecordingDownloader(node_tarball(VERSION))).provision(
        VERSION,
        tmp_path / "cache",
        tmp_path / "build",
    )
    env = handle.path_env({"PATH": "/usr/bin", "HOME": "/home/app"})
    assert env["PATH"] == f"{handle.bin_dir}{os.pathsep}/usr/bin"
    assert env["HOME"] == "/home/app"

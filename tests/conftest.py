# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import io
import json
import tarfile
from collections.abc import Callable
from pathlib import Path

import pytest

from nodepack.config import BuildContext


def make_node_tarball(version: str) -> bytes:
    """Return a gzipped tarball shaped like an official Node linux-x64 release."""

    top = f"node-v{version}-linux-x64"
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, payload, mode in (
            (f"{top}/bin/node", b"#!/bin/sh\necho v" + version.encode() + b"\n", 0o644),
            (f"{top}/bin/npm", b"#!/bin/sh\nexit 0\n", 0o644),
            (f"{top}/README.md", b"node\n", 0o644),
        ):
            info = tarfile.TarInfo(name)
            info.size = len(payload)
            info.mode = mode
            tar.addfile(info, io.BytesIO(payload))
    return buffer.getvalue()


@pytest.fixture
def node_tarball() -> Callable[[str], bytes]:
    return make_node_tarball


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    build_dir = tmp_path / "build"
    build_dir.mkdir()
    return build_dir


@pytest.fixture
def make_context(tmp_path: Path, workspace: Path) -> Callable[..., BuildContext]:
    def _make(*, global_cache: bool = False, env_file: Path | None = None) -> BuildContext:
        global_dir = tmp_path / "global-cache"
        if global_cache:
            global_dir.mkdir(exist_ok=True)
        home = tmp_path / "home"
        home.mkdir(exist_ok=True)
        cache_dir = tmp_path / "cache"
        cache_dir.mkdir(exist_ok=True)
        return BuildContext(
            build_dir=workspace,
            cache_dir=cache_dir,
            env_file=env_file,
            global_cache_dir=global_dir,
            home_dir=home,
        )

    return _make


def write_manifest(build_dir: Path, payload: dict[str, object]) -> Path:
    path = build_dir / "package.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def tree_snapshot(root: Path) -> dict[str, str]:
    """Return ``{relative path: contents}`` for every regular file below *root*."""

    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def manifest_writer() -> Callable[[Path, dict[str, object]], Path]:
    return write_manifest


@pytest.fixture
def snapshot_tree() -> Callable[[Path], dict[str, str]]:
    return tree_snapshot

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for default Procfile synthesis and the profile fragment."""

from __future__ import annotations

from pathlib import Path

import pytest

from nodepack.manifest import load_manifest
from nodepack.procfile import UNDEFINED_START_ADVISORY, ensure_procfile
from nodepack.profile import write_profile


def test_start_script_writes_default_procfile(make_context, manifest_writer) -> None:
    ctx = make_context()
    manifest_writer(ctx.build_dir, {"scripts": {"start": "node app.js"}})

    written = ensure_procfile(ctx, load_manifest(ctx.build_dir))

    assert written == ctx.build_dir / "Procfile"
    assert written.read_text(encoding="utf-8") == "web: npm start\n"


def test_server_js_writes_default_procfile(make_context, manifest_writer) -> None:
    ctx = make_context()
    manifest_writer(ctx.build_dir, {})
    (ctx.build_dir / "server.js").write_text("", encoding="utf-8")

    assert ensure_procfile(ctx, load_manifest(ctx.build_dir)) is not None


def test_existing_procfile_is_never_modified(make_context, manifest_writer) -> None:
    ctx = make_context()
    manifest_writer(ctx.build_dir, {"scripts": {"start": "node app.js"}})
    procfile = ctx.build_dir / "Procfile"
    procfile.write_text("web: node custom.js\n", encoding="utf-8")
    manifest = load_manifest(ctx.build_dir)

    assert ensure_procfile(ctx, manifest) is None
    assert ensure_procfile(ctx, manifest) is None
    assert procfile.read_text(encoding="utf-8") == "web: node custom.js\n"


def test_undefined_start_emits_advisory_only(
    make_context,
    manifest_writer,
    capsys: pytest.CaptureFixture[str],
) -> None:
    ctx = make_context()
    manifest_writer(ctx.build_dir, {"name": "app"})

    assert ensure_procfile(ctx, load_manifest(ctx.build_dir)) is None

    assert not (ctx.build_dir / "Procfile").exists()
    assert UNDEFINED_START_ADVISORY in capsys.readouterr().out


def test_write_profile_amends_path(make_context) -> None:
    ctx = make_context()
    script: Path = write_profile(ctx)
    assert script == ctx.build_dir / ".profile.d" / "nodejs.sh"
    assert script.read_text(encoding="utf-8") == (
        'export PATH="$HOME/vendor/node/bin:$HOME/bin:$HOME/node_modules/.bin:$PATH"\n'
    )

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for build settings and context construction."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from nodepack.config import BuildContext, BuildSettings
from nodepack.constants import DEFAULT_MIRROR_URL, DEFAULT_RESOLVER_URL


def test_settings_defaults() -> None:
    settings = BuildSettings.from_environ({"HOME": "/home/app"})
    assert settings.resolver_url == DEFAULT_RESOLVER_URL
    assert settings.mirror_url == DEFAULT_MIRROR_URL
    assert settings.home_dir == Path("/home/app")
    assert settings.telemetry_url == ""
    assert settings.build_profile is None
    assert settings.http_timeout is None


def test_settings_from_environ_overrides() -> None:
    settings = BuildSettings.from_environ(
        {
            "NODEPACK_RESOLVER_URL": "https://resolver.test/node/resolve/",
            "NODEPACK_MIRROR_URL": "https://mirror.test/node/",
            "NODEPACK_GLOBAL_CACHE": "/srv/shared-cache",
            "NODEPACK_TELEMETRY_URL": "https://usage.test",
            "REQUEST_ID": "req-1",
            "NODEPACK_BUILD_PROFILE": "staging",
            "NODEPACK_HTTP_TIMEOUT": "30",
            "HOME": "/home/app",
        },
    )
    assert settings.resolver_url == "https://resolver.test/node/resolve"
    assert settings.mirror_url == "https://mirror.test/node"
    assert settings.global_cache_dir == Path("/srv/shared-cache")
    assert settings.request_id == "req-1"
    assert settings.build_profile == "staging"
    assert settings.http_timeout == 30.0


def test_blank_optional_settings_are_none() -> None:
    settings = BuildSettings.from_environ({"NODEPACK_BUILD_PROFILE": " ", "NODEPACK_HTTP_TIMEOUT": ""})
    assert settings.build_profile is None
    assert settings.http_timeout is None


def test_context_resolves_paths_and_is_frozen(tmp_path: Path) -> None:
    settings = BuildSettings(global_cache_dir=tmp_path / "global", home_dir=tmp_path / "home")
    ctx = BuildContext.from_paths(tmp_path / "build", tmp_path / "cache", None, settings)
    assert ctx.build_dir.is_absolute()
    assert ctx.env_file is None
    assert ctx.global_cache_dir == tmp_path / "global"
    with pytest.raises(ValidationError):
        ctx.build_dir = tmp_path  # type: ignore[misc]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build settings and the immutable per-run build context."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_GLOBAL_CACHE_DIR, DEFAULT_MIRROR_URL, DEFAULT_RESOLVER_URL


class BuildSettings(BaseModel):
    """Endpoints and host-level knobs read from the process environment."""

    model_config = ConfigDict(frozen=True)

    resolver_url: str = DEFAULT_RESOLVER_URL
    mirror_url: str = DEFAULT_MIRROR_URL
    global_cache_dir: Path = DEFAULT_GLOBAL_CACHE_DIR
    home_dir: Path = Field(default_factory=Path.home)
    telemetry_url: str = ""
    request_id: str = ""
    build_profile: str | None = None
    http_timeout: float | None = None

    @field_validator("resolver_url", "mirror_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("build_profile", "http_timeout", mode="before")
    @classmethod
    def _blank_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "BuildSettings":
        """Return settings populated from ``NODEPACK_*`` variables in *environ*."""

        env = os.environ if environ is None else environ
        mapping = {
            "resolver_url": "NODEPACK_RESOLVER_URL",
            "mirror_url": "NODEPACK_MIRROR_URL",
            "global_cache_dir": "NODEPACK_GLOBAL_CACHE",
            "home_dir": "HOME",
            "telemetry_url": "NODEPACK_TELEMETRY_URL",
            "request_id": "REQUEST_ID",
            "build_profile": "NODEPACK_BUILD_PROFILE",
            "http_timeout": "NODEPACK_HTTP_TIMEOUT",
        }
        values = {field: env[name] for field, name in mapping.items() if name in env}
        return cls.model_validate(values)


class BuildContext(BaseModel):
    """Paths describing a single build; constructed once and never mutated."""

    model_config = ConfigDict(frozen=True)

    build_dir: Path
    cache_dir: Path
    env_file: Path | None = None
    global_cache_dir: Path
    home_dir: Path

    @classmethod
    def from_paths(
        cls,
        build_dir: Path,
        cache_dir: Path,
        env_file: Path | None,
        settings: BuildSettings,
    ) -> "BuildContext":
        """Resolve the CLI paths against *settings* into a build context."""

        return cls(
            build_dir=build_dir.resolve(),
            cache_dir=cache_dir.resolve(),
            env_file=env_file.resolve() if env_file is not None else None,
            global_cache_dir=settings.global_cache_dir,
            home_dir=settings.home_dir,
        )


__all__ = ["BuildContext", "BuildSettings"]

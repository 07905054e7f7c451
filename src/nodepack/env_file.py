# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse build environment files into a denylist-filtered scoped mapping."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from .constants import ENV_DENYLIST

_EXPORT_PREFIX = "export "


def parse_env_text(text: str) -> dict[str, str]:
    """Return ``KEY=VALUE`` pairs parsed from *text*.

    Blank lines, ``#`` comments and lines without ``=`` are ignored. A leading
    ``export`` keyword and matching surrounding quotes are stripped.
    """

    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith(_EXPORT_PREFIX):
            line = line[len(_EXPORT_PREFIX) :].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
            value = value[1:-1]
        values[key] = value
    return values


def scope_env(values: Mapping[str, str], denylist: frozenset[str] = ENV_DENYLIST) -> dict[str, str]:
    """Return *values* without any key in *denylist*."""

    allowed = set(values) - denylist
    return {key: values[key] for key in values if key in allowed}


def load_scoped_env(env_file: Path | None) -> dict[str, str] | None:
    """Return the scoped environment for *env_file*, or ``None`` when absent."""

    if env_file is None or not env_file.is_file():
        return None
    return scope_env(parse_env_text(env_file.read_text(encoding="utf-8")))


__all__ = ["load_scoped_env", "parse_env_text", "scope_env"]

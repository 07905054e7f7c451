# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read the subset of ``package.json`` that drives the build."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import MANIFEST_FILENAME
from .errors import ManifestError


class Engines(BaseModel):
    """The ``engines`` block; only the Node constraint is consumed."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    node: str | None = None

    @field_validator("node", mode="before")
    @classmethod
    def _coerce_node(cls, value: object) -> object:
        """Accept bare numbers such as ``8``, which npm treats as version ranges.

        Args:
            value: Raw ``engines.node`` value from the JSON payload.

        Returns:
            object: The value as a string when it is numeric, otherwise unchanged.
        """

        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        return value


class Scripts(BaseModel):
    """The ``scripts`` block; only ``start`` matters to the build."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    start: str | None = None


class PackageManifest(BaseModel):
    """Fields of ``package.json`` consumed by the build pipeline."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    path: Path
    engines: Engines = Field(default_factory=Engines)
    scripts: Scripts = Field(default_factory=Scripts)

    @property
    def node_constraint(self) -> str | None:
        """Return the declared ``engines.node`` range, if any."""

        return self.engines.node

    @property
    def start_script(self) -> str | None:
        """Return ``scripts.start``, treating an empty string as undefined."""

        return self.scripts.start or None


def load_manifest(build_dir: Path) -> PackageManifest:
    """Parse ``package.json`` from *build_dir*.

    Raises:
        ManifestError: If the file is missing, is not valid JSON, or has an
            unexpected shape for ``engines``/``scripts``.
    """

    path = build_dir / MANIFEST_FILENAME
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestError(f"{MANIFEST_FILENAME} not found in {build_dir}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Unable to parse {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    engines = payload.get("engines")
    scripts = payload.get("scripts")
    try:
        return PackageManifest(
            path=path,
            engines=engines if isinstance(engines, dict) else {},
            scripts=scripts if isinstance(scripts, dict) else {},
        )
    except ValidationError as exc:
        raise ManifestError(f"Invalid {MANIFEST_FILENAME}: {exc}") from exc


__all__ = ["Engines", "PackageManifest", "Scripts", "load_manifest"]

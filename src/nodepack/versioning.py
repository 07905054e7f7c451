# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve ``engines.node`` constraints into concrete Node versions."""

from __future__ import annotations

import http.client
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable
from enum import Enum
from typing import Final

from packaging.version import InvalidVersion, Version

from .constants import ANY_VERSION_RANGE
from .errors import ResolutionError
from .logging import Reporter

USER_AGENT: Final[str] = "nodepack/1.0"

HttpGet = Callable[[str, float | None], bytes]


class ConstraintShape(str, Enum):
    """Shapes of ``engines.node`` that carry distinct advisory policies."""

    ABSENT = "absent"
    WILDCARD = "wildcard"
    UNBOUNDED = "unbounded"
    BOUNDED = "bounded"


ADVISORIES: Final[dict[ConstraintShape, str]] = {
    ConstraintShape.ABSENT: "Specify a node version in package.json",
    ConstraintShape.WILDCARD: "Avoid using semver ranges like '*' in engines.node",
    ConstraintShape.UNBOUNDED: "Avoid using semver ranges starting with '>' in engines.node",
}


def classify(constraint: str | None) -> ConstraintShape:
    """Return the :class:`ConstraintShape` of *constraint*."""

    if constraint is None or not constraint.strip():
        return ConstraintShape.ABSENT
    stripped = constraint.strip()
    if stripped == ANY_VERSION_RANGE:
        return ConstraintShape.WILDCARD
    if stripped.startswith(">"):
        return ConstraintShape.UNBOUNDED
    return ConstraintShape.BOUNDED


def http_get(url: str, timeout: float | None = None) -> bytes:
    """Return the body of ``GET url``; HTTP error statuses raise ``HTTPError``."""

    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    # Bandit: URLs are assembled from configured https endpoints.
    with urllib.request.urlopen(request, timeout=timeout) as response:  # nosec B310
        return response.read()


class VersionResolver:
    """Turn a declared constraint into a concrete version via the resolver service."""

    def __init__(
        self,
        resolver_url: str,
        *,
        reporter: Reporter | None = None,
        fetch: HttpGet = http_get,
        timeout: float | None = None,
    ) -> None:
        self._resolver_url = resolver_url
        self._reporter = reporter or Reporter()
        self._fetch = fetch
        self._timeout = timeout

    def query_url(self, version_range: str) -> str:
        """Return the oracle URL carrying *version_range* as the ``range`` parameter."""

        return f"{self._resolver_url}?{urllib.parse.urlencode({'range': version_range})}"

    def advise(self, constraint: str | None) -> ConstraintShape:
        """Emit the advisory matching *constraint*, if any, and return its shape."""

        shape = classify(constraint)
        advisory = ADVISORIES.get(shape)
        if advisory is not None:
            self._reporter.tip(advisory)
        return shape

    def resolve(self, constraint: str | None) -> str:
        """Return the concrete version the oracle selects for *constraint*.

        Raises:
            ResolutionError: If the oracle is unreachable, answers with an error
                status, or returns something that is not a version.
        """

        shape = self.advise(constraint)
        version_range = ANY_VERSION_RANGE if shape is ConstraintShape.ABSENT else str(constraint).strip()
        self._reporter.info(f"Requested node range: {version_range}")
        url = self.query_url(version_range)
        try:
            body = self._fetch(url, self._timeout)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            raise ResolutionError(f"Unable to resolve node version '{version_range}': {exc}") from exc
        resolved = self.normalize(body.decode("utf-8", errors="replace"))
        if resolved is None:
            raise ResolutionError(f"No node version matches '{version_range}'")
        self._reporter.info(f"Resolved node version: {resolved}")
        return resolved

    @staticmethod
    def normalize(raw: str | None) -> str | None:
        """Return *raw* stripped of whitespace and a ``v`` prefix if it is a valid version."""

        if not raw:
            return None
        candidate = raw.strip().removeprefix("v")
        if not candidate:
            return None
        try:
            Version(candidate)
        except InvalidVersion:
            return None
        return candidate


__all__ = ["ADVISORIES", "ConstraintShape", "HttpGet", "VersionResolver", "classify", "http_get"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Best-effort upload of ``package.json`` to a usage endpoint.

The upload runs on a non-daemon thread: the build never joins it, but the
interpreter waits for it at shutdown, so a ``nodepack compile`` run that has
already printed its result still gets to deliver the manifest. The POST is
bounded by :data:`TELEMETRY_TIMEOUT` (or ``NODEPACK_HTTP_TIMEOUT`` when set), which
caps how long process exit can be delayed. The exit status is never affected.
"""

from __future__ import annotations

import logging
import threading
import urllib.parse
import urllib.request
from collections.abc import Callable
from pathlib import Path
from typing import Final

from .config import BuildSettings
from .versioning import USER_AGENT

_LOGGER = logging.getLogger(__name__)

TELEMETRY_TIMEOUT: Final[float] = 10.0

Poster = Callable[[str, bytes, float], None]


def http_post(url: str, body: bytes, timeout: float = TELEMETRY_TIMEOUT) -> None:
    """POST ``body`` as JSON to ``url`` and discard the response.

    Args:
        url: Endpoint including its query string.
        body: Raw manifest bytes.
        timeout: Socket timeout in seconds.
    """

    request = urllib.request.Request(
        url,
        data=body,
        method="POST",
        headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
    )
    # Bandit: endpoint comes from operator configuration.
    with urllib.request.urlopen(request, timeout=timeout) as response:  # nosec B310
        response.read()


def telemetry_url(settings: BuildSettings) -> str:
    """Return the configured endpoint with the ``request_id`` query parameter appended."""

    query = urllib.parse.urlencode({"request_id": settings.request_id})
    return f"{settings.telemetry_url}?{query}"


def _send(url: str, manifest_path: Path, post: Poster, timeout: float) -> None:
    """Thread body: post the manifest and log, never raise, on failure.

    Args:
        url: Fully qualified telemetry URL.
        manifest_path: ``package.json`` to upload.
        post: Transport used for the request.
        timeout: Upper bound handed to ``post``.
    """

    try:
        post(url, manifest_path.read_bytes(), timeout)
    except Exception:  # noqa: BLE001 - telemetry must never affect the build
        _LOGGER.debug("telemetry upload to %s failed", url, exc_info=True)


def post_manifest(
    manifest_path: Path,
    settings: BuildSettings,
    *,
    post: Poster = http_post,
) -> threading.Thread | None:
    """Start a background thread that posts *manifest_path*; the caller never joins it.

    Args:
        manifest_path: ``package.json`` to upload.
        settings: Source of the endpoint, request id and timeout.
        post: Transport, replaceable in tests.

    Returns:
        threading.Thread | None: The started thread, or ``None`` when telemetry
        is disabled or there is no manifest to send.
    """

    if not settings.telemetry_url or not manifest_path.is_file():
        return None
    timeout = settings.http_timeout or TELEMETRY_TIMEOUT
    thread = threading.Thread(
        target=_send,
        args=(telemetry_url(settings), manifest_path, post, timeout),
        name="nodepack-telemetry",
        daemon=False,
    )
    thread.start()
    return thread


__all__ = ["Poster", "TELEMETRY_TIMEOUT", "http_post", "post_manifest", "telemetry_url"]

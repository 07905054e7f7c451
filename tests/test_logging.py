# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for build output helpers."""

from __future__ import annotations

import pytest

from nodepack.logging import Reporter, build_console


def test_build_console_is_cached_per_flag_combination() -> None:
    plain = build_console(color=False, emoji=False, tty=False)
    assert build_console(color=False, emoji=False, tty=False) is plain
    assert build_console(color=True, emoji=False, tty=True) is not plain
    assert plain.no_color


def test_reporter_prefixes(capsys: pytest.CaptureFixture[str]) -> None:
    reporter = Reporter(use_color=False)
    reporter.section("Installing dependencies")
    reporter.info("cached")
    reporter.tip("pin a version")
    reporter.fail("boom")

    assert capsys.readouterr().out.splitlines() == [
        "-----> Installing dependencies",
        "       cached",
        "       PRO TIP: pin a version",
        " !     boom",
    ]

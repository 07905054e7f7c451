# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing build output helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from rich.console import Console
from rich.text import Text

from .process_utils import INDENT

ColorSystem = Literal["auto", "standard", "256", "truecolor", "windows"]


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def build_console(*, color: bool, emoji: bool, tty: bool) -> Console:
    """Return the shared console for one combination of output flags.

    Build output is plain text, so highlighting is off and long lines are not
    wrapped; colour only applies when stdout is a terminal.

    Args:
        color: Whether ANSI styling was requested.
        emoji: Whether rich should render emoji codes.
        tty: Whether stdout is a terminal.

    Returns:
        Console: A console cached per flag combination.
    """

    styled = color and tty
    color_system: ColorSystem | None = "auto" if styled else None
    return Console(
        color_system=color_system,
        force_terminal=tty,
        no_color=not styled,
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = build_console(color=color_enabled, emoji=use_emoji, tty=detect_tty())
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_color: bool | None = None) -> None:
    """Print a ``----->`` build step header."""

    _print_line(f"-----> {title}", style="bold cyan", use_emoji=False, use_color=use_color)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an indented informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{INDENT}{prefix}{msg}", style=None, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    prefix = emoji("✅ ", use_emoji)
    _print_line(f"{INDENT}{prefix}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f" !     {prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def tip(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an advisory that never affects control flow."""

    prefix = emoji("💡 ", use_emoji)
    _print_line(
        f"{INDENT}{prefix}PRO TIP: {msg}",
        style="magenta",
        use_emoji=use_emoji,
        use_color=use_color,
    )


def raw(line: str, *, use_color: bool | None = None) -> None:
    """Print a pre-formatted line such as indented subprocess output."""

    _print_line(line, style=None, use_emoji=False, use_color=use_color)


@dataclass(frozen=True, slots=True)
class Reporter:
    """Bind output preferences once so build components can share them."""

    use_emoji: bool = False
    use_color: bool | None = None

    def section(self, title: str) -> None:
        section(title, use_color=self.use_color)

    def info(self, msg: str) -> None:
        info(msg, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, msg: str) -> None:
        ok(msg, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, msg: str) -> None:
        fail(msg, use_emoji=self.use_emoji, use_color=self.use_color)

    def tip(self, msg: str) -> None:
        tip(msg, use_emoji=self.use_emoji, use_color=self.use_color)

    def line(self, text: str) -> None:
        raw(text, use_color=self.use_color)


__all__ = ["Reporter", "emoji", "fail", "info", "ok", "raw", "section", "tip"]

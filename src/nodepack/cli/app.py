# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .compile import compile_command

app = typer.Typer(
    name="nodepack",
    help="Provision Node.js and npm dependencies for a build workspace.",
    add_completion=False,
    no_args_is_help=True,
)
app.command("compile")(compile_command)


@app.callback()
def main() -> None:
    """Provision Node.js and npm dependencies for a build workspace."""


__all__ = ["app"]

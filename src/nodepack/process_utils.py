# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# npm and front-end tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Final

INDENT: Final[str] = "       "

LineSink = Callable[[str], None]


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _normalize_args(args: Sequence[str], env: Mapping[str, str] | None = None) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    search_path = env.get("PATH") if env is not None else None
    resolved = shutil.which(head, path=search_path)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def indent_lines(lines: Iterable[str], prefix: str = INDENT) -> Iterator[str]:
    """Yield each line of *lines* with *prefix* prepended and the newline stripped."""

    for line in lines:
        yield prefix + line.rstrip("\r\n")


def stream_command(
    args: Sequence[str],
    *,
    sink: LineSink,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
) -> int:
    """Run *args* merging stderr into stdout and feed indented lines to *sink*.

    Args:
        args: Command and arguments to execute.
        sink: Callable receiving each indented output line.
        cwd: Working directory for the subprocess.
        env: Full environment for the subprocess; ``None`` inherits ours.
        check: Raise :class:`SubprocessExecutionError` on a non-zero exit.

    Returns:
        int: Exit status reported by the subprocess.
    """

    normalized = _normalize_args(args, env)
    # Bandit: commands are fixed npm/bower/grunt invocations passed without a shell.
    with subprocess.Popen(  # nosec B603
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        env=dict(env) if env is not None else None,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
    ) as process:
        stdout = process.stdout
        if stdout is None:
            msg = "subprocess stdout pipe was not opened"
            raise RuntimeError(msg)
        for line in indent_lines(stdout):
            sink(line)
        returncode = process.wait()

    if check and returncode != 0:
        raise SubprocessExecutionError(normalized, returncode, None, None)
    return returncode


__all__ = [
    "INDENT",
    "LineSink",
    "SubprocessExecutionError",
    "indent_lines",
    "stream_command",
]

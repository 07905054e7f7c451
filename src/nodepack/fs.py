# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers for cache restore and persist operations."""

from __future__ import annotations

import shutil
from pathlib import Path


def remove_path(path: Path) -> None:
    """Remove ``path`` whether it is a tree, a file, or a symlink; missing is fine.

    Symlinks are unlinked and never followed, so removing a link into a shared
    cache leaves the shared directory intact.
    """

    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
    elif path.is_dir():
        shutil.rmtree(path)


def replace_tree(source: Path, destination: Path) -> bool:
    """Overwrite ``destination`` with a copy of the ``source`` tree.

    Returns:
        bool: ``False`` when ``source`` is not a directory and nothing was copied.
    """

    if not source.is_dir():
        return False
    remove_path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination, symlinks=True)
    return True


def relink(link: Path, target: Path) -> None:
    """Point ``link`` at ``target``, replacing whatever ``link`` was before.

    The previous entry is always removed first rather than inspected, so
    concurrent builds racing on the same host converge on the same link.
    """

    target.mkdir(parents=True, exist_ok=True)
    remove_path(link)
    link.parent.mkdir(parents=True, exist_ok=True)
    try:
        link.symlink_to(target, target_is_directory=True)
    except FileExistsError:
        remove_path(link)
        link.symlink_to(target, target_is_directory=True)


__all__ = ["relink", "remove_path", "replace_tree"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fixed names, endpoints, and layout constants shared by the build pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Final

DEFAULT_RESOLVER_URL: Final[str] = "https://semver.io/node/resolve"
DEFAULT_MIRROR_URL: Final[str] = "https://s3pository.heroku.com/node"
DEFAULT_GLOBAL_CACHE_DIR: Final[Path] = Path("/var/cache/nodepack")

MANIFEST_FILENAME: Final[str] = "package.json"
PROCFILE_FILENAME: Final[str] = "Procfile"
DEFAULT_ENTRY_FILE: Final[str] = "server.js"
DEFAULT_WEB_COMMAND: Final[str] = "npm start"
NPM_DEBUG_LOG: Final[str] = "npm-debug.log"

NODE_MODULES_DIR: Final[str] = "node_modules"
NODE_MODULES_BIN: Final[Path] = Path(NODE_MODULES_DIR) / ".bin"
NPM_CACHE_DIR: Final[str] = ".npm"
BOWER_CACHE_DIR: Final[Path] = Path(".cache") / "bower"
NODE_GYP_DIR: Final[str] = ".node-gyp"

VENDOR_NODE_DIR: Final[Path] = Path("vendor") / "node"
PROFILE_DIR: Final[str] = ".profile.d"
PROFILE_SCRIPT: Final[str] = "nodejs.sh"

BOWER_MANIFEST: Final[str] = "bower.json"
GRUNT_FILE: Final[str] = "Gruntfile.js"

ANY_VERSION_RANGE: Final[str] = "*"
ARCHIVE_PLATFORM: Final[str] = "linux-x64"

# Variables that would corrupt process execution or linking when exported from an env file.
ENV_DENYLIST: Final[frozenset[str]] = frozenset(
    {"PATH", "GIT_DIR", "CPATH", "CPPATH", "LD_PRELOAD", "LIBRARY_PATH"},
)


def archive_basename(version: str) -> str:
    """Return the unpacked directory name for the Node ``version`` tarball."""

    return f"node-v{version}-{ARCHIVE_PLATFORM}"


def archive_filename(version: str) -> str:
    """Return the runtime archive filename, which doubles as its cache key."""

    return f"{archive_basename(version)}.tar.gz"


__all__ = [
    "ANY_VERSION_RANGE",
    "ARCHIVE_PLATFORM",
    "BOWER_CACHE_DIR",
    "BOWER_MANIFEST",
    "DEFAULT_ENTRY_FILE",
    "DEFAULT_GLOBAL_CACHE_DIR",
    "DEFAULT_MIRROR_URL",
    "DEFAULT_RESOLVER_URL",
    "DEFAULT_WEB_COMMAND",
    "ENV_DENYLIST",
    "GRUNT_FILE",
    "MANIFEST_FILENAME",
    "NODE_GYP_DIR",
    "NODE_MODULES_BIN",
    "NODE_MODULES_DIR",
    "NPM_CACHE_DIR",
    "NPM_DEBUG_LOG",
    "PROCFILE_FILENAME",
    "PROFILE_DIR",
    "PROFILE_SCRIPT",
    "VENDOR_NODE_DIR",
    "archive_basename",
    "archive_filename",
]

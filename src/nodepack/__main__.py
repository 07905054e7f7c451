# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m nodepack``."""

from .cli import app

if __name__ == "__main__":  # pragma: no cover
    app()

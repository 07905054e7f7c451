# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Node runtime provisioning."""

from .provisioner import RuntimeHandle, RuntimeProvisioner, download_to

__all__ = ["RuntimeHandle", "RuntimeProvisioner", "download_to"]

# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Services package."""

from schoolerp.services import (
    auth_service,
    branch_service,
    rbac_seed_service,
    rbac_service,
)

__all__ = [
    "auth_service",
    "branch_service",
    "rbac_seed_service",
    "rbac_service",
]

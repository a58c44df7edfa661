# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Pydantic schemas package."""

from schoolerp.schemas.auth import AuthResponse, LoginRequest, UserResponse
from schoolerp.schemas.branch import (
    BranchCreate,
    BranchOrderItem,
    BranchResponse,
    BranchUpdate,
)
from schoolerp.schemas.common import ErrorResponse, HealthResponse
from schoolerp.schemas.rbac import (
    PermissionSchema,
    RoleCreateSchema,
    RolePermissionsUpdateSchema,
    RoleSchema,
    RoleSummarySchema,
    RoleUpdateSchema,
    RoleWithPermissionsSchema,
    SuccessResponse,
    UserPermissionsSchema,
    UserRoleAssignmentSchema,
    UserRoleSchema,
)

__all__ = [
    "AuthResponse",
    "BranchCreate",
    "BranchOrderItem",
    "BranchResponse",
    "BranchUpdate",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "PermissionSchema",
    "RoleCreateSchema",
    "RolePermissionsUpdateSchema",
    "RoleSchema",
    "RoleSummarySchema",
    "RoleUpdateSchema",
    "RoleWithPermissionsSchema",
    "SuccessResponse",
    "UserPermissionsSchema",
    "UserResponse",
    "UserRoleAssignmentSchema",
    "UserRoleSchema",
]

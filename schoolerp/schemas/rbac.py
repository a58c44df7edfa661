# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""RBAC schemas."""

import datetime
import uuid

from pydantic import BaseModel, ConfigDict, Field


class PermissionSchema(BaseModel):
    """Schema representing a permission."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    category: str
    is_active: bool = True


class RoleSchema(BaseModel):
    """Schema representing a role."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    is_system: bool
    is_active: bool
    branch_id: str | None = None


class RoleSummarySchema(RoleSchema):
    """Role annotated with how many permissions and users it has."""

    permission_count: int
    user_count: int


class RoleWithPermissionsSchema(RoleSchema):
    """Schema representing a role along with its permissions."""

    permissions: list[PermissionSchema]
    user_count: int


class RoleCreateSchema(BaseModel):
    """Schema for creating a new role.

    ``permissions`` wins over ``copy_from_role_id`` when both are given.
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    permissions: list[str] | None = None  # Permission names
    copy_from_role_id: uuid.UUID | None = None
    branch_id: str | None = None  # None for a role offered in every branch


class RoleUpdateSchema(BaseModel):
    """Schema for updating a role's metadata."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    is_active: bool | None = None


class RolePermissionsUpdateSchema(BaseModel):
    """Replacement permission set for a role."""

    permissions: list[str]


class UserRoleSchema(BaseModel):
    """Schema representing a user's role assignment."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    role_id: uuid.UUID
    branch_id: str | None = None
    assigned_at: datetime.datetime
    role: RoleSchema


class UserRoleAssignmentSchema(BaseModel):
    """Schema for assigning a role to a user."""

    role_id: uuid.UUID
    branch_id: str | None = None


class UserPermissionsSchema(BaseModel):
    """Schema representing a user's effective permissions."""

    is_super_admin: bool
    permissions: list[str]


class SuccessResponse(BaseModel):
    """Acknowledgement for mutations that return no entity."""

    success: bool = True

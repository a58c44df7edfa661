# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Role and permission management API endpoints."""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from schoolerp.api.deps import get_current_session, get_current_user, require_permission
from schoolerp.database import get_db
from schoolerp.models import User
from schoolerp.models.session import Session as SessionModel
from schoolerp.rbac.permissions import PermissionTag
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
from schoolerp.services import rbac_service

router = APIRouter(prefix="/rbac", tags=["rbac"])

manage_roles = require_permission(PermissionTag.MANAGE_ROLES.value)


@router.get("/permissions", response_model=list[PermissionSchema], summary="List all available permissions")
def list_permissions(
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Retrieve the permission catalog ordered by name."""
    return rbac_service.get_all_permissions(db)


@router.get("/roles", response_model=list[RoleSummarySchema], summary="List all roles")
def list_roles(
    branch_id: str | None = None,
    include_system: bool = True,
    include_inactive: bool = True,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Retrieve all roles with their permission and user counts.
    With branch_id, only that branch's roles and the global roles are listed.
    """
    return rbac_service.get_all_roles(
        db,
        branch_id=branch_id,
        include_system=include_system,
        include_inactive=include_inactive,
    )


@router.get("/roles/{role_id}", response_model=RoleWithPermissionsSchema, summary="Get a role by ID with its permissions")
def get_role(
    role_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Retrieve a specific role by its ID, including all associated permissions."""
    return rbac_service.get_role_by_id(db, role_id)


@router.post("/roles", response_model=RoleSchema, status_code=status.HTTP_201_CREATED, summary="Create a new custom role")
def create_role(
    role_in: RoleCreateSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Create a custom role from a permission list or a copy of another role."""
    return rbac_service.create_role(db, role_in)


@router.put("/roles/{role_id}", response_model=RoleSchema, summary="Update an existing role")
def update_role(
    role_id: uuid.UUID,
    role_in: RoleUpdateSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Update a role's name, description or active flag.
    System roles cannot be renamed.
    """
    return rbac_service.update_role(db, role_id, role_in)


@router.delete("/roles/{role_id}", response_model=RoleSchema, summary="Delete a custom role")
def delete_role(
    role_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Delete a custom role and return it. System roles cannot be deleted."""
    return rbac_service.delete_role(db, role_id)


@router.get("/roles/{role_id}/permissions", response_model=list[PermissionSchema], summary="Get a role's permissions")
def get_role_permissions(
    role_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    return rbac_service.get_role_permissions(db, role_id)


@router.put("/roles/{role_id}/permissions", response_model=SuccessResponse, summary="Replace a role's permissions")
def update_role_permissions(
    role_id: uuid.UUID,
    data: RolePermissionsUpdateSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Replace the complete permission set of a role.
    System roles must keep at least one permission.
    """
    rbac_service.update_role_permissions(db, role_id, data.permissions)
    return SuccessResponse()


@router.get("/users/{user_id}/roles", response_model=list[RoleSchema], summary="Get a user's roles")
def get_user_roles(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    return rbac_service.get_user_roles(db, user_id)


@router.post("/users/{user_id}/roles", response_model=UserRoleSchema, summary="Assign a role to a user")
def assign_role_to_user(
    user_id: uuid.UUID,
    assignment: UserRoleAssignmentSchema,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Assign a role to a user. Assigning an existing role is a no-op."""
    return rbac_service.assign_role_to_user(
        db,
        user_id=user_id,
        role_id=assignment.role_id,
        assigned_by=current_user,
        branch_id=assignment.branch_id,
    )


@router.delete("/users/{user_id}/roles/{role_id}", response_model=SuccessResponse, summary="Remove a role from a user")
def remove_role_from_user(
    user_id: uuid.UUID,
    role_id: uuid.UUID,
    branch_id: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_roles),
):
    """Remove a role assignment from a user. Missing assignments are ignored.
    Without branch_id every assignment of the role is removed.
    """
    rbac_service.remove_role_from_user(db, user_id, role_id, branch_id)
    return SuccessResponse()


@router.get("/me/permissions", response_model=UserPermissionsSchema, summary="Get current user's effective permissions")
def get_my_permissions(
    branch_id: str | None = None,
    db: Session = Depends(get_db),
    session_obj: SessionModel = Depends(get_current_session),
    current_user: User = Depends(get_current_user),
):
    """Retrieve the current authenticated user's effective permissions,
    optionally narrowed to one branch.
    """
    return UserPermissionsSchema(
        is_super_admin=rbac_service.is_super_admin(
            db, current_user, session_obj.identity_claims
        ),
        permissions=sorted(
            rbac_service.get_user_permissions(db, current_user, branch_id)
        ),
    )

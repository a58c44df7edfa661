# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Role, permission and user-role management."""

import logging
import uuid
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from schoolerp.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from schoolerp.models import Branch, Permission, Role, RolePermission, User, UserRole
from schoolerp.rbac.roles import SUPER_ADMIN_ALIASES
from schoolerp.schemas.rbac import RoleCreateSchema, RoleUpdateSchema

from . import rbac_seed_service

logger = logging.getLogger(__name__)


def _role_to_dict(role: Role) -> dict[str, Any]:
    return {
        "id": role.id,
        "name": role.name,
        "description": role.description,
        "is_system": role.is_system,
        "is_active": role.is_active,
        "branch_id": role.branch_id,
    }


def _count_by_role(db: Session, model) -> dict[uuid.UUID, int]:
    rows = db.query(model.role_id, func.count()).group_by(model.role_id)
    return {role_id: count for role_id, count in rows}


def _unique(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))


def _for_branch(query, column, branch_id: str | None):
    """Restrict to rows of ``branch_id`` plus the global (branchless) ones."""
    if branch_id is None:
        return query
    return query.filter(or_(column == branch_id, column.is_(None)))


# --- Catalog -----------------------------------------------------------------


def get_all_permissions(db: Session) -> list[Permission]:
    """Get the permission catalog ordered by name, seeding it on first use."""
    rbac_seed_service.seed_permissions(db)
    return db.query(Permission).order_by(Permission.name).all()


def get_role(db: Session, role_id: uuid.UUID) -> Role | None:
    """Get a role by ID."""
    return db.query(Role).filter(Role.id == role_id).first()


def get_role_by_name(db: Session, name: str) -> Role | None:
    """Get a role by its exact name."""
    return db.query(Role).filter(Role.name == name).first()


def get_all_roles(
    db: Session,
    branch_id: str | None = None,
    include_system: bool = True,
    include_inactive: bool = True,
) -> list[dict[str, Any]]:
    """Get all roles with permission and user counts.

    Default roles are seeded first if no role exists yet. With ``branch_id``
    only that branch's roles and the global roles are listed. System roles
    are listed before custom roles, each group ordered by name.
    """
    rbac_seed_service.seed_roles(db)

    query = _for_branch(db.query(Role), Role.branch_id, branch_id)
    if not include_system:
        query = query.filter(Role.is_system == False)  # noqa: E712
    if not include_inactive:
        query = query.filter(Role.is_active == True)  # noqa: E712
    roles = query.order_by(Role.is_system.desc(), Role.name).all()

    permission_counts = _count_by_role(db, RolePermission)
    user_counts = _count_by_role(db, UserRole)

    return [
        {
            **_role_to_dict(role),
            "permission_count": permission_counts.get(role.id, 0),
            "user_count": user_counts.get(role.id, 0),
        }
        for role in roles
    ]


def get_role_by_id(db: Session, role_id: uuid.UUID) -> dict[str, Any]:
    """Get a role with its full permission list and number of users."""
    role = get_role(db, role_id)
    if not role:
        raise NotFoundError("Role not found")

    user_count = db.query(UserRole).filter(UserRole.role_id == role_id).count()
    return {
        **_role_to_dict(role),
        "permissions": _permissions_of(db, role_id),
        "user_count": user_count,
    }


def _permissions_of(db: Session, role_id: uuid.UUID) -> list[Permission]:
    return (
        db.query(Permission)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .filter(RolePermission.role_id == role_id)
        .order_by(Permission.name)
        .all()
    )


def _resolve_permissions(db: Session, names: list[str]) -> list[Permission]:
    """Look up permissions by name, failing on the first unknown one."""
    names = _unique(names)
    if not names:
        return []

    found = {p.name: p for p in db.query(Permission).filter(Permission.name.in_(names))}
    for name in names:
        if name not in found:
            raise BadRequestError(f"Permission '{name}' not found")
    return [found[name] for name in names]


def _ensure_branch_exists(db: Session, branch_id: str | None) -> None:
    if branch_id is not None and db.get(Branch, branch_id) is None:
        raise NotFoundError("Branch not found")


# --- Roles -------------------------------------------------------------------


def create_role(db: Session, data: RoleCreateSchema) -> Role:
    """Create a custom role.

    The permission set comes from ``data.permissions`` when it is non-empty,
    otherwise it is copied from ``data.copy_from_role_id`` if given.
    """
    if get_role_by_name(db, data.name):
        raise ConflictError("Role with this name already exists")
    _ensure_branch_exists(db, data.branch_id)

    if data.permissions:
        permissions = _resolve_permissions(db, data.permissions)
    elif data.copy_from_role_id:
        source = get_role(db, data.copy_from_role_id)
        if not source:
            raise NotFoundError("Role to copy permissions from not found")
        permissions = _permissions_of(db, source.id)
    else:
        permissions = []

    role = Role(
        name=data.name,
        description=data.description,
        branch_id=data.branch_id,
        is_system=False,
    )
    db.add(role)
    db.flush()  # To get role.id

    for permission in permissions:
        db.add(RolePermission(role_id=role.id, permission_id=permission.id))

    db.commit()
    db.refresh(role)
    logger.info(f"Created role {role.name} with {len(permissions)} permissions")
    return role


def update_role(db: Session, role_id: uuid.UUID, data: RoleUpdateSchema) -> Role:
    """Update a role's name, description or active flag.

    System roles may change description and active flag but keep their name.
    """
    role = get_role(db, role_id)
    if not role:
        raise NotFoundError("Role not found")

    if data.name is not None and data.name != role.name:
        if role.is_system:
            raise PermissionDeniedError("System roles cannot be renamed")
        existing = get_role_by_name(db, data.name)
        if existing and existing.id != role_id:
            raise ConflictError("Role with this name already exists")
        role.name = data.name

    if data.description is not None:
        role.description = data.description

    if data.is_active is not None:
        role.is_active = data.is_active

    db.commit()
    db.refresh(role)
    return role


def delete_role(db: Session, role_id: uuid.UUID) -> dict[str, Any]:
    """Delete a custom role and return the deleted record.

    A role still assigned to any user cannot be deleted. Permission links
    are removed with the role.
    """
    role = get_role(db, role_id)
    if not role:
        raise NotFoundError("Role not found")
    if role.is_system:
        raise PermissionDeniedError("System roles cannot be deleted")

    assigned = db.query(UserRole).filter(UserRole.role_id == role_id).count()
    if assigned:
        raise BadRequestError("Cannot delete role that is assigned to users")

    deleted = _role_to_dict(role)
    db.delete(role)
    db.commit()
    logger.info(f"Deleted role {deleted['name']}")
    return deleted


def get_role_permissions(db: Session, role_id: uuid.UUID) -> list[Permission]:
    """Get the permissions attached to a role, ordered by name."""
    if not get_role(db, role_id):
        raise NotFoundError("Role not found")
    return _permissions_of(db, role_id)


def update_role_permissions(
    db: Session, role_id: uuid.UUID, permission_names: list[str]
) -> None:
    """Replace the complete permission set of a role.

    Old links are removed and the new ones inserted in a single transaction,
    so a failure leaves the previous set intact.
    """
    role = get_role(db, role_id)
    if not role:
        raise NotFoundError("Role not found")

    permission_names = _unique(permission_names)
    if role.is_system and not permission_names:
        raise PermissionDeniedError(
            "System roles must keep at least one permission"
        )

    permissions = _resolve_permissions(db, permission_names)

    try:
        role.role_permissions.clear()
        db.flush()
        for permission in permissions:
            role.role_permissions.append(
                RolePermission(role_id=role.id, permission_id=permission.id)
            )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(f"Replaced permissions of role {role.name} ({len(permissions)} total)")


# --- User roles --------------------------------------------------------------


def assign_role_to_user(
    db: Session,
    user_id: uuid.UUID,
    role_id: uuid.UUID,
    assigned_by: User | None = None,
    branch_id: str | None = None,
) -> UserRole:
    """Assign a role to a user, globally or for one branch.

    Assigning a role the user already has for the same branch returns the
    existing assignment.
    """
    if not get_role(db, role_id):
        raise NotFoundError("Role not found")
    if not db.query(User).filter(User.id == user_id).first():
        raise NotFoundError("User not found")
    _ensure_branch_exists(db, branch_id)

    if branch_id is None:
        branch_filter = UserRole.branch_id.is_(None)
    else:
        branch_filter = UserRole.branch_id == branch_id
    existing = (
        db.query(UserRole)
        .filter(UserRole.user_id == user_id, UserRole.role_id == role_id, branch_filter)
        .first()
    )
    if existing:
        return existing

    user_role = UserRole(
        user_id=user_id,
        role_id=role_id,
        branch_id=branch_id,
        assigned_by_id=assigned_by.id if assigned_by else None,
    )
    db.add(user_role)
    db.commit()
    db.refresh(user_role)
    return user_role


def remove_role_from_user(
    db: Session,
    user_id: uuid.UUID,
    role_id: uuid.UUID,
    branch_id: str | None = None,
) -> bool:
    """Remove a role from a user. Returns True if removed, False if not assigned.

    Without ``branch_id`` every assignment of the role is removed, otherwise
    only the one for that branch.
    """
    query = db.query(UserRole).filter(
        UserRole.user_id == user_id, UserRole.role_id == role_id
    )
    if branch_id is not None:
        query = query.filter(UserRole.branch_id == branch_id)
    removed = query.delete(synchronize_session="fetch")
    db.commit()
    return removed > 0


def get_user_roles(db: Session, user_id: uuid.UUID) -> list[Role]:
    """Get the roles currently assigned to a user."""
    user_roles = (
        db.query(UserRole)
        .options(joinedload(UserRole.role))
        .filter(UserRole.user_id == user_id)
        .all()
    )
    roles = {ur.role.id: ur.role for ur in user_roles}
    return sorted(roles.values(), key=lambda role: role.name)


# --- Permission checks -------------------------------------------------------


def _claims_grant_super_admin(claims: dict[str, Any] | None) -> bool:
    if not claims:
        return False
    if claims.get("role") in SUPER_ADMIN_ALIASES:
        return True
    roles = claims.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    return any(role in SUPER_ADMIN_ALIASES for role in roles)


def is_super_admin(
    db: Session, user: User, claims: dict[str, Any] | None = None
) -> bool:
    """Check whether the user is a super admin.

    ``claims`` are the identity provider claims of the caller's session.
    Either a matching claim or an active super admin role is enough.
    """
    if _claims_grant_super_admin(claims):
        return True

    return (
        db.query(UserRole)
        .join(Role, Role.id == UserRole.role_id)
        .filter(
            UserRole.user_id == user.id,
            Role.is_active == True,  # noqa: E712
            Role.name.in_(sorted(SUPER_ADMIN_ALIASES)),
        )
        .first()
        is not None
    )


def get_user_permissions(
    db: Session, user: User, branch_id: str | None = None
) -> set[str]:
    """Get the flattened permission names granted by the user's active roles.

    With ``branch_id`` only global assignments and those for that branch count.
    """
    query = (
        db.query(Permission.name)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .join(Role, Role.id == RolePermission.role_id)
        .join(UserRole, UserRole.role_id == Role.id)
        .filter(
            UserRole.user_id == user.id,
            Role.is_active == True,  # noqa: E712
            Permission.is_active == True,  # noqa: E712
        )
    )
    rows = _for_branch(query, UserRole.branch_id, branch_id).distinct()
    return {name for (name,) in rows}


def user_has_permission(
    db: Session,
    user: User,
    permission_name: str,
    branch_id: str | None = None,
    claims: dict[str, Any] | None = None,
) -> bool:
    """Check if a user has a specific permission."""
    return has_any_permission(db, user, [permission_name], branch_id, claims)


def has_any_permission(
    db: Session,
    user: User,
    permission_names: list[str],
    branch_id: str | None = None,
    claims: dict[str, Any] | None = None,
) -> bool:
    """Check if a user has at least one of the given permissions."""
    if not user.is_active:
        return False

    # Super admin has all permissions
    if is_super_admin(db, user, claims):
        return True

    granted = get_user_permissions(db, user, branch_id)
    return any(name in granted for name in permission_names)


def has_all_permissions(
    db: Session,
    user: User,
    permission_names: list[str],
    branch_id: str | None = None,
    claims: dict[str, Any] | None = None,
) -> bool:
    """Check if a user has every one of the given permissions."""
    if not user.is_active:
        return False

    if is_super_admin(db, user, claims):
        return True

    granted = get_user_permissions(db, user, branch_id)
    return all(name in granted for name in permission_names)


def has_role(
    db: Session, user: User, role_name: str, branch_id: str | None = None
) -> bool:
    """Check if a user holds the named role, globally or for ``branch_id``."""
    query = (
        db.query(UserRole)
        .join(Role, Role.id == UserRole.role_id)
        .filter(UserRole.user_id == user.id, Role.name == role_name)
    )
    return _for_branch(query, UserRole.branch_id, branch_id).first() is not None

# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Bootstrap of the permission catalog and the default system roles.

Seeding only runs against an empty table: a non-empty catalog is left as it
is, so calling these functions repeatedly is harmless. ``seed_rbac_data`` is
run once from the application lifespan; the catalog read paths in
``rbac_service`` call the individual seeders as a fallback.
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schoolerp.models import Permission, Role, RolePermission
from schoolerp.rbac.permissions import (
    ALL_PERMISSIONS,
    categorize_permission,
    describe_permission,
)
from schoolerp.rbac.roles import (
    ROLE_DESCRIPTIONS,
    DefaultRole,
    default_permissions_for,
)

logger = logging.getLogger(__name__)


def seed_permissions(db: Session) -> int:
    """Populate the permission catalog if it is empty.

    @param db: SQLAlchemy Session object
    @return: number of permissions inserted
    """
    if db.query(Permission).count() > 0:
        return 0

    for tag in ALL_PERMISSIONS:
        db.add(
            Permission(
                name=tag,
                description=describe_permission(tag),
                category=categorize_permission(tag),
            )
        )
    try:
        db.commit()
    except IntegrityError:
        # Another worker seeded the catalog first
        db.rollback()
        logger.info("Permission catalog was seeded concurrently, skipping")
        return 0
    logger.info(f"Seeded {len(ALL_PERMISSIONS)} permissions")
    return len(ALL_PERMISSIONS)


def _add_default_role(
    db: Session, default_role: DefaultRole, permission_ids: dict[str, Any]
) -> None:
    role = Role(
        name=default_role.value,
        description=ROLE_DESCRIPTIONS[default_role],
        is_system=True,
    )
    db.add(role)
    db.flush()  # Flush to get the role ID

    for perm_name in default_permissions_for(default_role):
        permission_id = permission_ids.get(perm_name)
        if permission_id is None:
            logger.warning(
                f"Default permission {perm_name} for role {role.name} is not in the catalog"
            )
            continue
        db.add(RolePermission(role_id=role.id, permission_id=permission_id))


def seed_roles(db: Session) -> int:
    """Create the default system roles with their permission sets if no role exists.

    @param db: SQLAlchemy Session object
    @return: number of roles inserted
    """
    if db.query(Role).count() > 0:
        return 0

    seed_permissions(db)
    permission_ids = {name: pid for pid, name in db.query(Permission.id, Permission.name)}

    try:
        for default_role in DefaultRole:
            _add_default_role(db, default_role, permission_ids)
        db.commit()
    except IntegrityError:
        # Another worker seeded the roles first
        db.rollback()
        logger.info("Default roles were seeded concurrently, skipping")
        return 0
    logger.info(f"Seeded {len(DefaultRole)} default roles")
    return len(DefaultRole)


def seed_rbac_data(db: Session) -> None:
    """Seeds the database with the permission catalog and default roles."""
    seed_permissions(db)
    seed_roles(db)

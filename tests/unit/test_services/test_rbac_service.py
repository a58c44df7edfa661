# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for rbac_service."""

import uuid

import pytest

from schoolerp.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from schoolerp.models import Branch, Permission, Role, RolePermission, User, UserRole
from schoolerp.rbac.permissions import ALL_PERMISSIONS
from schoolerp.rbac.roles import DefaultRole
from schoolerp.schemas.rbac import RoleCreateSchema, RoleUpdateSchema
from schoolerp.security import get_password_hash
from schoolerp.services import rbac_seed_service, rbac_service


def create_user(db_session, username: str = "member", claims=None) -> User:
    """Helper to create a persisted user."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        hashed_password=get_password_hash("Secret123!"),
        is_active=True,
        identity_claims=claims,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def system_role(db_session, role: DefaultRole) -> Role:
    return rbac_service.get_role_by_name(db_session, role.value)


@pytest.fixture
def seeded(db_session):
    rbac_seed_service.seed_rbac_data(db_session)
    return db_session


def test_get_all_permissions_seeds_empty_catalog(db_session):
    permissions = rbac_service.get_all_permissions(db_session)

    names = [p.name for p in permissions]
    assert names == sorted(ALL_PERMISSIONS)


def test_get_all_roles_seeds_and_counts(db_session):
    roles = rbac_service.get_all_roles(db_session)

    assert {r["name"] for r in roles} == {role.value for role in DefaultRole}
    super_admin = next(r for r in roles if r["name"] == DefaultRole.SUPER_ADMIN.value)
    assert super_admin["permission_count"] == len(ALL_PERMISSIONS)
    assert super_admin["user_count"] == 0


def test_get_all_roles_lists_system_roles_first(seeded):
    rbac_service.create_role(seeded, RoleCreateSchema(name="Aardvark Keeper"))

    roles = rbac_service.get_all_roles(seeded)

    assert roles[-1]["name"] == "Aardvark Keeper"
    assert roles[-1]["is_system"] is False


def test_get_all_roles_can_hide_inactive(seeded):
    role = rbac_service.create_role(seeded, RoleCreateSchema(name="Retired"))
    rbac_service.update_role(seeded, role.id, RoleUpdateSchema(is_active=False))

    names = {r["name"] for r in rbac_service.get_all_roles(seeded, include_inactive=False)}

    assert "Retired" not in names


def test_get_role_by_id_includes_permissions_and_users(seeded):
    teacher = system_role(seeded, DefaultRole.TEACHER)
    user = create_user(seeded)
    rbac_service.assign_role_to_user(seeded, user.id, teacher.id)

    result = rbac_service.get_role_by_id(seeded, teacher.id)

    assert result["name"] == DefaultRole.TEACHER.value
    assert "mark_attendance" in [p.name for p in result["permissions"]]
    assert result["user_count"] == 1


def test_get_role_by_id_not_found(db_session):
    with pytest.raises(NotFoundError):
        rbac_service.get_role_by_id(db_session, uuid.uuid4())


def test_create_role_with_permissions(seeded):
    role = rbac_service.create_role(
        seeded,
        RoleCreateSchema(
            name="Librarian",
            description="Runs the library",
            permissions=["view_students", "view_reports", "view_students"],
        ),
    )

    assert role.is_system is False
    names = [p.name for p in rbac_service.get_role_permissions(seeded, role.id)]
    assert names == ["view_reports", "view_students"]


def test_create_role_rejects_duplicate_name(seeded):
    with pytest.raises(ConflictError):
        rbac_service.create_role(seeded, RoleCreateSchema(name=DefaultRole.ADMIN.value))


def test_create_role_rejects_unknown_permission_without_writing(seeded):
    before = seeded.query(Role).count()

    with pytest.raises(BadRequestError, match="not_a_permission"):
        rbac_service.create_role(
            seeded,
            RoleCreateSchema(name="Broken", permissions=["view_students", "not_a_permission"]),
        )

    assert seeded.query(Role).count() == before


def test_create_role_copies_permissions_from_source(seeded):
    source = system_role(seeded, DefaultRole.ACCOUNTANT)

    role = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Junior Accountant", copy_from_role_id=source.id)
    )

    copied = {p.name for p in rbac_service.get_role_permissions(seeded, role.id)}
    original = {p.name for p in rbac_service.get_role_permissions(seeded, source.id)}
    assert copied == original
    assert copied


def test_create_role_explicit_permissions_win_over_copy(seeded):
    source = system_role(seeded, DefaultRole.ACCOUNTANT)

    role = rbac_service.create_role(
        seeded,
        RoleCreateSchema(
            name="Cashier",
            permissions=["collect_fees"],
            copy_from_role_id=source.id,
        ),
    )

    names = [p.name for p in rbac_service.get_role_permissions(seeded, role.id)]
    assert names == ["collect_fees"]


def test_create_role_copy_from_missing_role(seeded):
    with pytest.raises(NotFoundError):
        rbac_service.create_role(
            seeded, RoleCreateSchema(name="Orphan", copy_from_role_id=uuid.uuid4())
        )


def test_update_role_renames_custom_role(seeded):
    role = rbac_service.create_role(seeded, RoleCreateSchema(name="Counsellor"))

    updated = rbac_service.update_role(
        seeded, role.id, RoleUpdateSchema(name="Student Counsellor", description="Guidance")
    )

    assert updated.name == "Student Counsellor"
    assert updated.description == "Guidance"


def test_update_role_cannot_rename_system_role(seeded):
    admin = system_role(seeded, DefaultRole.ADMIN)

    with pytest.raises(PermissionDeniedError):
        rbac_service.update_role(seeded, admin.id, RoleUpdateSchema(name="Boss"))

    assert system_role(seeded, DefaultRole.ADMIN) is not None


def test_update_role_allows_description_on_system_role(seeded):
    admin = system_role(seeded, DefaultRole.ADMIN)

    updated = rbac_service.update_role(
        seeded, admin.id, RoleUpdateSchema(name=admin.name, description="School admin")
    )

    assert updated.description == "School admin"


def test_update_role_name_conflict(seeded):
    role = rbac_service.create_role(seeded, RoleCreateSchema(name="Nurse"))

    with pytest.raises(ConflictError):
        rbac_service.update_role(
            seeded, role.id, RoleUpdateSchema(name=DefaultRole.STAFF.value)
        )


def test_delete_system_role_forbidden(seeded):
    staff = system_role(seeded, DefaultRole.STAFF)

    with pytest.raises(PermissionDeniedError):
        rbac_service.delete_role(seeded, staff.id)

    assert rbac_service.get_role(seeded, staff.id) is not None


def test_delete_role_blocked_while_assigned(seeded):
    role = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Coach", permissions=["view_students"])
    )
    user = create_user(seeded)
    rbac_service.assign_role_to_user(seeded, user.id, role.id)
    role_id = role.id

    with pytest.raises(BadRequestError, match="assigned to users"):
        rbac_service.delete_role(seeded, role_id)
    assert seeded.query(UserRole).filter_by(role_id=role_id).count() == 1

    rbac_service.remove_role_from_user(seeded, user.id, role_id)
    deleted = rbac_service.delete_role(seeded, role_id)

    assert deleted["name"] == "Coach"
    assert rbac_service.get_role(seeded, role_id) is None
    assert seeded.query(RolePermission).filter_by(role_id=role_id).count() == 0


def test_delete_role_not_found(db_session):
    with pytest.raises(NotFoundError):
        rbac_service.delete_role(db_session, uuid.uuid4())


def test_update_role_permissions_replaces_set(seeded):
    role = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Clerk", permissions=["view_students", "view_fees"])
    )

    rbac_service.update_role_permissions(seeded, role.id, ["view_reports", "collect_fees"])

    names = [p.name for p in rbac_service.get_role_permissions(seeded, role.id)]
    assert names == ["collect_fees", "view_reports"]


def test_update_role_permissions_system_role_needs_one(seeded):
    teacher = system_role(seeded, DefaultRole.TEACHER)
    before = {p.name for p in rbac_service.get_role_permissions(seeded, teacher.id)}

    with pytest.raises(PermissionDeniedError):
        rbac_service.update_role_permissions(seeded, teacher.id, [])

    after = {p.name for p in rbac_service.get_role_permissions(seeded, teacher.id)}
    assert after == before


def test_update_role_permissions_custom_role_may_be_empty(seeded):
    role = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Visitor", permissions=["view_dashboard"])
    )

    rbac_service.update_role_permissions(seeded, role.id, [])

    assert rbac_service.get_role_permissions(seeded, role.id) == []


def test_update_role_permissions_unknown_name_keeps_old_set(seeded):
    role = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Porter", permissions=["view_dashboard"])
    )

    with pytest.raises(BadRequestError):
        rbac_service.update_role_permissions(seeded, role.id, ["view_reports", "bogus"])

    names = [p.name for p in rbac_service.get_role_permissions(seeded, role.id)]
    assert names == ["view_dashboard"]


def test_update_role_permissions_not_found(seeded):
    with pytest.raises(NotFoundError):
        rbac_service.update_role_permissions(seeded, uuid.uuid4(), ["view_dashboard"])


def test_assign_role_is_idempotent(seeded):
    user = create_user(seeded)
    teacher = system_role(seeded, DefaultRole.TEACHER)

    first = rbac_service.assign_role_to_user(seeded, user.id, teacher.id)
    second = rbac_service.assign_role_to_user(seeded, user.id, teacher.id)

    assert first.id == second.id
    assert seeded.query(UserRole).filter_by(user_id=user.id).count() == 1


def test_assign_role_records_assigner(seeded):
    assigner = create_user(seeded, "assigner")
    user = create_user(seeded)
    staff = system_role(seeded, DefaultRole.STAFF)

    user_role = rbac_service.assign_role_to_user(
        seeded, user.id, staff.id, assigned_by=assigner
    )

    assert user_role.assigned_by_id == assigner.id


def test_assign_missing_role_or_user(seeded):
    user = create_user(seeded)
    staff = system_role(seeded, DefaultRole.STAFF)

    with pytest.raises(NotFoundError, match="Role"):
        rbac_service.assign_role_to_user(seeded, user.id, uuid.uuid4())
    with pytest.raises(NotFoundError, match="User"):
        rbac_service.assign_role_to_user(seeded, uuid.uuid4(), staff.id)


def test_remove_role_from_user(seeded):
    user = create_user(seeded)
    staff = system_role(seeded, DefaultRole.STAFF)
    rbac_service.assign_role_to_user(seeded, user.id, staff.id)

    assert rbac_service.remove_role_from_user(seeded, user.id, staff.id) is True
    assert rbac_service.remove_role_from_user(seeded, user.id, staff.id) is False
    assert rbac_service.get_user_roles(seeded, user.id) == []


def test_get_user_roles_sorted_by_name(seeded):
    user = create_user(seeded)
    for role in (DefaultRole.TEACHER, DefaultRole.ACCOUNTANT):
        rbac_service.assign_role_to_user(seeded, user.id, system_role(seeded, role).id)

    names = [r.name for r in rbac_service.get_user_roles(seeded, user.id)]

    assert names == [DefaultRole.ACCOUNTANT.value, DefaultRole.TEACHER.value]


def test_user_permissions_union_of_active_roles(seeded):
    user = create_user(seeded)
    clerk = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Clerk", permissions=["view_fees"])
    )
    inactive = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Dormant", permissions=["delete_payment"])
    )
    rbac_service.update_role(seeded, inactive.id, RoleUpdateSchema(is_active=False))
    rbac_service.assign_role_to_user(seeded, user.id, clerk.id)
    rbac_service.assign_role_to_user(seeded, user.id, inactive.id)

    assert rbac_service.get_user_permissions(seeded, user) == {"view_fees"}
    assert rbac_service.user_has_permission(seeded, user, "view_fees") is True
    assert rbac_service.user_has_permission(seeded, user, "delete_payment") is False


def test_super_admin_via_role_has_every_permission(seeded):
    user = create_user(seeded)
    rbac_service.assign_role_to_user(
        seeded, user.id, system_role(seeded, DefaultRole.SUPER_ADMIN).id
    )

    assert rbac_service.is_super_admin(seeded, user) is True
    assert rbac_service.user_has_permission(seeded, user, "manage_branches") is True


@pytest.mark.parametrize(
    "claims",
    [
        {"role": "super_admin"},
        {"role": "SuperAdmin"},
        {"roles": ["Teacher", "Super Admin"]},
        {"roles": "super_admin"},
    ],
)
def test_super_admin_via_identity_claims(db_session, claims):
    user = create_user(db_session)

    assert rbac_service.is_super_admin(db_session, user, claims) is True
    assert (
        rbac_service.user_has_permission(db_session, user, "manage_roles", claims=claims)
        is True
    )


@pytest.mark.parametrize(
    "claims",
    [
        {"role": "teacher"},
        {"roles": "teacher"},
        {"roles": "super_admins"},
        {"roles": []},
    ],
)
def test_regular_user_is_not_super_admin(db_session, claims):
    user = create_user(db_session)

    assert rbac_service.is_super_admin(db_session, user, claims) is False
    assert (
        rbac_service.user_has_permission(db_session, user, "manage_roles", claims=claims)
        is False
    )


def test_claims_on_user_record_alone_do_not_grant_super_admin(db_session):
    user = create_user(db_session, claims={"role": "super_admin"})

    assert rbac_service.is_super_admin(db_session, user) is False


def test_inactive_user_has_no_permissions(db_session):
    user = create_user(db_session)
    user.is_active = False
    db_session.commit()

    assert (
        rbac_service.user_has_permission(
            db_session, user, "view_dashboard", claims={"role": "super_admin"}
        )
        is False
    )


def test_permission_catalog_rows_are_unique(seeded):
    assert seeded.query(Permission).count() == len(set(ALL_PERMISSIONS))


def test_catalog_reads_seed_only_once(db_session):
    rbac_service.get_all_permissions(db_session)
    rbac_service.get_all_roles(db_session)
    counts = (
        db_session.query(Permission).count(),
        db_session.query(Role).count(),
        db_session.query(RolePermission).count(),
    )

    rbac_service.get_all_permissions(db_session)
    rbac_service.get_all_roles(db_session)

    assert counts == (
        db_session.query(Permission).count(),
        db_session.query(Role).count(),
        db_session.query(RolePermission).count(),
    )


# --- Branch scoping ----------------------------------------------------------


def other_branch(db_session) -> Branch:
    branch = Branch(name="South Campus", code="SC")
    db_session.add(branch)
    db_session.commit()
    db_session.refresh(branch)
    return branch


def test_get_all_roles_for_branch_includes_global_roles(seeded, branch):
    south = other_branch(seeded)
    rbac_service.create_role(seeded, RoleCreateSchema(name="North Clerk", branch_id=branch.id))
    rbac_service.create_role(seeded, RoleCreateSchema(name="South Clerk", branch_id=south.id))
    rbac_service.create_role(seeded, RoleCreateSchema(name="Auditor"))

    names = {r["name"] for r in rbac_service.get_all_roles(seeded, branch_id=branch.id)}

    assert "North Clerk" in names
    assert "Auditor" in names
    assert "South Clerk" not in names
    assert DefaultRole.TEACHER.value in names


def test_get_all_roles_without_system_roles(seeded, branch):
    rbac_service.create_role(seeded, RoleCreateSchema(name="North Clerk", branch_id=branch.id))

    roles = rbac_service.get_all_roles(seeded, branch_id=branch.id, include_system=False)

    assert [r["name"] for r in roles] == ["North Clerk"]
    assert roles[0]["branch_id"] == branch.id


def test_create_role_for_unknown_branch(seeded):
    with pytest.raises(NotFoundError, match="Branch"):
        rbac_service.create_role(
            seeded, RoleCreateSchema(name="Ghost Clerk", branch_id="missing")
        )


def test_assign_role_per_branch(seeded, branch):
    south = other_branch(seeded)
    user = create_user(seeded)
    staff = system_role(seeded, DefaultRole.STAFF)

    north_link = rbac_service.assign_role_to_user(seeded, user.id, staff.id, branch_id=branch.id)
    south_link = rbac_service.assign_role_to_user(seeded, user.id, staff.id, branch_id=south.id)
    again = rbac_service.assign_role_to_user(seeded, user.id, staff.id, branch_id=branch.id)

    assert north_link.id != south_link.id
    assert again.id == north_link.id
    assert seeded.query(UserRole).filter_by(user_id=user.id).count() == 2
    assert [r.name for r in rbac_service.get_user_roles(seeded, user.id)] == [staff.name]


def test_assign_role_for_unknown_branch(seeded):
    user = create_user(seeded)
    staff = system_role(seeded, DefaultRole.STAFF)

    with pytest.raises(NotFoundError, match="Branch"):
        rbac_service.assign_role_to_user(seeded, user.id, staff.id, branch_id="missing")


def test_remove_role_for_one_branch_or_all(seeded, branch):
    south = other_branch(seeded)
    user = create_user(seeded)
    staff = system_role(seeded, DefaultRole.STAFF)
    rbac_service.assign_role_to_user(seeded, user.id, staff.id, branch_id=branch.id)
    rbac_service.assign_role_to_user(seeded, user.id, staff.id, branch_id=south.id)
    rbac_service.assign_role_to_user(seeded, user.id, staff.id)

    assert rbac_service.remove_role_from_user(seeded, user.id, staff.id, branch.id) is True
    assert seeded.query(UserRole).filter_by(user_id=user.id).count() == 2

    assert rbac_service.remove_role_from_user(seeded, user.id, staff.id) is True
    assert seeded.query(UserRole).filter_by(user_id=user.id).count() == 0


def test_user_permissions_scoped_to_branch(seeded, branch):
    south = other_branch(seeded)
    user = create_user(seeded)
    cashier = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Cashier", permissions=["collect_fees"])
    )
    viewer = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Viewer", permissions=["view_students"])
    )
    rbac_service.assign_role_to_user(seeded, user.id, cashier.id, branch_id=branch.id)
    rbac_service.assign_role_to_user(seeded, user.id, viewer.id)

    assert rbac_service.get_user_permissions(seeded, user) == {"collect_fees", "view_students"}
    assert rbac_service.get_user_permissions(seeded, user, branch.id) == {
        "collect_fees",
        "view_students",
    }
    assert rbac_service.get_user_permissions(seeded, user, south.id) == {"view_students"}
    assert rbac_service.user_has_permission(seeded, user, "collect_fees", south.id) is False
    assert rbac_service.user_has_permission(seeded, user, "collect_fees", branch.id) is True


def test_has_any_and_all_permissions(seeded):
    user = create_user(seeded)
    clerk = rbac_service.create_role(
        seeded, RoleCreateSchema(name="Clerk", permissions=["view_fees", "view_students"])
    )
    rbac_service.assign_role_to_user(seeded, user.id, clerk.id)

    assert rbac_service.has_any_permission(seeded, user, ["delete_payment", "view_fees"]) is True
    assert rbac_service.has_any_permission(seeded, user, ["delete_payment"]) is False
    assert rbac_service.has_all_permissions(seeded, user, ["view_fees", "view_students"]) is True
    assert rbac_service.has_all_permissions(seeded, user, ["view_fees", "delete_payment"]) is False


def test_has_any_and_all_permissions_for_super_admin_claims(seeded):
    user = create_user(seeded)
    claims = {"roles": ["super_admin"]}

    assert rbac_service.has_any_permission(seeded, user, ["delete_payment"], claims=claims) is True
    assert (
        rbac_service.has_all_permissions(
            seeded, user, ["delete_payment", "manage_roles"], claims=claims
        )
        is True
    )


def test_has_role_respects_branch(seeded, branch):
    south = other_branch(seeded)
    user = create_user(seeded)
    teacher = system_role(seeded, DefaultRole.TEACHER)
    staff = system_role(seeded, DefaultRole.STAFF)
    rbac_service.assign_role_to_user(seeded, user.id, teacher.id, branch_id=branch.id)
    rbac_service.assign_role_to_user(seeded, user.id, staff.id)

    assert rbac_service.has_role(seeded, user, teacher.name) is True
    assert rbac_service.has_role(seeded, user, teacher.name, branch.id) is True
    assert rbac_service.has_role(seeded, user, teacher.name, south.id) is False
    assert rbac_service.has_role(seeded, user, staff.name, south.id) is True
    assert rbac_service.has_role(seeded, user, DefaultRole.ACCOUNTANT.value) is False

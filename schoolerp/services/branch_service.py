# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Branch management and per-user branch scoping."""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from schoolerp.config import settings
from schoolerp.exceptions import BadRequestError, InternalServiceError, NotFoundError
from schoolerp.models import (
    HEADQUARTERS_BRANCH_ID,
    Branch,
    Employee,
    EmployeeBranchAccess,
    SchoolClass,
    Student,
    Teacher,
    User,
)
from schoolerp.schemas.branch import BranchCreate, BranchOrderItem, BranchUpdate

from . import rbac_service

logger = logging.getLogger(__name__)

HEADQUARTERS_NAME = "Headquarters"
HEADQUARTERS_CODE = "HQ"

# Entities that pin a branch, with singular/plural labels for error messages
BRANCH_DEPENDENTS = [
    (Student, "student", "students"),
    (Teacher, "teacher", "teachers"),
    (Employee, "employee", "employees"),
    (SchoolClass, "class", "classes"),
    (User, "user", "users"),
]


def _apply_query_timeout(db: Session) -> None:
    """Bound branch queries so a hanging connection surfaces as an error."""
    if db.get_bind().dialect.name == "postgresql":
        timeout_ms = settings.branch_query_timeout_seconds * 1000
        db.execute(text(f"SET LOCAL statement_timeout = {int(timeout_ms)}"))


def get_all_branches(db: Session) -> list[Branch]:
    """Get all branches ordered by display order, then name."""
    try:
        _apply_query_timeout(db)
        return db.query(Branch).order_by(Branch.order, Branch.name).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching all branches: {e}")
        db.rollback()
        raise InternalServiceError("Failed to fetch branches. Please try again.") from e


def get_branch_by_id(db: Session, branch_id: str | None) -> Branch | None:
    """Get a branch by ID.

    An empty ID means "no branch selected" and, like an unknown ID, yields
    None rather than an error.
    """
    if not branch_id:
        return None

    try:
        _apply_query_timeout(db)
        return db.query(Branch).filter(Branch.id == branch_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching branch {branch_id}: {e}")
        db.rollback()
        raise InternalServiceError(
            f"Failed to fetch branch with ID: {branch_id}. Please try again."
        ) from e


def get_branch_by_code(db: Session, code: str) -> Branch:
    """Get a branch by its code, failing if it does not exist."""
    branch = db.query(Branch).filter(Branch.code == code).first()
    if not branch:
        raise NotFoundError(f"Branch with code '{code}' not found")
    return branch


def _ensure_code_available(db: Session, code: str, branch_id: str | None = None) -> None:
    existing = db.query(Branch).filter(Branch.code == code).first()
    if existing and existing.id != branch_id:
        raise BadRequestError(
            f"Branch code '{code}' is already in use. Please choose a different code."
        )


def create_branch(db: Session, data: BranchCreate) -> Branch:
    """Create a branch with a unique code.

    The head office ("Headquarters" / "HQ") always gets the fixed
    ``HEADQUARTERS_BRANCH_ID``.
    """
    _ensure_code_available(db, data.code)

    values = data.model_dump(exclude_none=True)
    if data.name == HEADQUARTERS_NAME and data.code == HEADQUARTERS_CODE:
        if db.get(Branch, HEADQUARTERS_BRANCH_ID) is not None:
            raise BadRequestError("A headquarters branch already exists.")
        values["id"] = HEADQUARTERS_BRANCH_ID

    branch = Branch(**values)
    db.add(branch)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error creating branch {data.code}: {e}")
        raise BadRequestError(
            "Branch could not be created because it conflicts with an existing branch."
        ) from e
    db.refresh(branch)
    logger.info(f"Created branch {branch.name} ({branch.code})")
    return branch


def update_branch(db: Session, branch_id: str, data: BranchUpdate) -> Branch:
    """Update a branch; the code must stay unique."""
    branch = db.query(Branch).filter(Branch.id == branch_id).first()
    if not branch:
        raise NotFoundError("Branch not found")

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("code"):
        _ensure_code_available(db, update_data["code"], branch_id)

    for field, value in update_data.items():
        if value is None and field in ("name", "code", "order"):
            continue
        setattr(branch, field, value)

    db.commit()
    db.refresh(branch)
    return branch


def update_branch_order(db: Session, items: list[BranchOrderItem]) -> list[Branch]:
    """Set the display order of several branches at once."""
    ids = [item.id for item in items]
    branches = {b.id: b for b in db.query(Branch).filter(Branch.id.in_(ids))}

    for item in items:
        branch = branches.get(item.id)
        if not branch:
            raise NotFoundError(f"Branch {item.id} not found")
        branch.order = item.order

    db.commit()
    return [branches[branch_id] for branch_id in ids]


def _describe_dependents(db: Session, branch_id: str) -> list[str]:
    blockers = []
    for model, singular, plural in BRANCH_DEPENDENTS:
        count = db.query(model).filter(model.branch_id == branch_id).count()
        if count > 0:
            blockers.append(f"{count} {singular if count == 1 else plural}")
    return blockers


def delete_branch(db: Session, branch_id: str) -> dict[str, Any]:
    """Delete a branch that nothing references anymore and return the deleted record.

    Raises BadRequestError naming the blocking entities when students,
    teachers, employees, classes or users still belong to the branch.
    """
    try:
        branch = (
            db.query(Branch).filter(Branch.id == branch_id).with_for_update().first()
        )
        if not branch:
            raise NotFoundError("Branch not found")

        blockers = _describe_dependents(db, branch_id)
        if blockers:
            logger.warning(f"Refusing to delete branch {branch_id}: {', '.join(blockers)}")
            db.rollback()
            raise BadRequestError(
                f"Cannot delete this branch because it has {', '.join(blockers)} "
                "associated with it. Please reassign or delete these entities first."
            )

        deleted = {
            column.key: getattr(branch, column.key) for column in Branch.__table__.columns
        }
        db.delete(branch)
        db.commit()
        logger.info(f"Deleted branch {deleted['name']} ({deleted['code']})")
        return deleted
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(
            "Cannot delete this branch because it has related records. Please "
            "remove all students, teachers, employees, and classes from this "
            "branch first."
        ) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting branch {branch_id}: {e}")
        raise InternalServiceError(
            "An error occurred while deleting the branch."
        ) from e


def get_user_branches(
    db: Session, user: User, claims: dict[str, Any] | None = None
) -> list[Branch]:
    """Resolve the branches a user may act on.

    In priority order: explicit multi-branch grants of the user's employee
    record, the primary branch of the user's employee or teacher record,
    every branch for super admins, and otherwise nothing. ``claims`` are the
    identity claims of the caller's session.
    """
    employee = db.query(Employee).filter(Employee.user_id == user.id).first()
    if employee:
        granted = (
            db.query(Branch)
            .join(EmployeeBranchAccess, EmployeeBranchAccess.branch_id == Branch.id)
            .filter(EmployeeBranchAccess.employee_id == employee.id)
            .order_by(Branch.order, Branch.name)
            .all()
        )
        if granted:
            return granted

    primary_branch_id = employee.branch_id if employee else None
    if not primary_branch_id:
        teacher = db.query(Teacher).filter(Teacher.user_id == user.id).first()
        primary_branch_id = teacher.branch_id if teacher else None

    if primary_branch_id:
        branch = get_branch_by_id(db, primary_branch_id)
        return [branch] if branch else []

    if rbac_service.is_super_admin(db, user, claims):
        return get_all_branches(db)

    return []

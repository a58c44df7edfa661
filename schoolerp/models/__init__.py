# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from schoolerp.models.base import Base, TimestampMixin
from schoolerp.models.branch import HEADQUARTERS_BRANCH_ID, Branch
from schoolerp.models.employee import Employee, EmployeeBranchAccess
from schoolerp.models.permission import Permission
from schoolerp.models.role import Role
from schoolerp.models.role_permission import RolePermission
from schoolerp.models.school_class import SchoolClass
from schoolerp.models.session import Session
from schoolerp.models.student import Student
from schoolerp.models.teacher import Teacher
from schoolerp.models.user import User
from schoolerp.models.user_role import UserRole

__all__ = [
    "HEADQUARTERS_BRANCH_ID",
    "Base",
    "Branch",
    "Employee",
    "EmployeeBranchAccess",
    "Permission",
    "Role",
    "RolePermission",
    "SchoolClass",
    "Session",
    "Student",
    "Teacher",
    "TimestampMixin",
    "User",
    "UserRole",
]

# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Default roles and their permission sets."""

from enum import Enum

from .permissions import ALL_PERMISSIONS
from .permissions import PermissionTag as P


class DefaultRole(str, Enum):
    """Built-in roles seeded as system roles."""

    SUPER_ADMIN = "Super Admin"
    ADMIN = "Admin"
    PRINCIPAL = "Principal"
    TEACHER = "Teacher"
    ACCOUNTANT = "Accountant"
    RECEPTIONIST = "Receptionist"
    TRANSPORT_MANAGER = "Transport Manager"
    STAFF = "Staff"


# Role names and identity-provider claims that mean "super admin"
SUPER_ADMIN_ALIASES = frozenset({"Super Admin", "super_admin", "SuperAdmin"})

ROLE_DESCRIPTIONS: dict[DefaultRole, str] = {
    DefaultRole.SUPER_ADMIN: "Full access to every branch and module.",
    DefaultRole.ADMIN: "Administers students, staff, finance and settings.",
    DefaultRole.PRINCIPAL: "Oversees academics, attendance and staff of a branch.",
    DefaultRole.TEACHER: "Manages own classes, attendance and examinations.",
    DefaultRole.ACCOUNTANT: "Handles fee collection, finance and salaries.",
    DefaultRole.RECEPTIONIST: "Front desk: admissions, enquiries and collections.",
    DefaultRole.TRANSPORT_MANAGER: "Manages transport routes, stops and assignments.",
    DefaultRole.STAFF: "General staff with self-service access.",
}

ROLE_PERMISSIONS: dict[DefaultRole, list[str]] = {
    DefaultRole.SUPER_ADMIN: ALL_PERMISSIONS,
    DefaultRole.ADMIN: [
        P.VIEW_DASHBOARD,
        P.VIEW_STUDENTS,
        P.CREATE_STUDENT,
        P.EDIT_STUDENT,
        P.DELETE_STUDENT,
        P.MANAGE_ADMISSIONS,
        P.MANAGE_TRANSFER_CERTIFICATES,
        P.VIEW_MONEY_COLLECTION,
        P.CREATE_MONEY_COLLECTION,
        P.EDIT_MONEY_COLLECTION,
        P.DELETE_MONEY_COLLECTION,
        P.VIEW_TEACHERS,
        P.CREATE_TEACHER,
        P.EDIT_TEACHER,
        P.DELETE_TEACHER,
        P.VIEW_EMPLOYEES,
        P.CREATE_EMPLOYEE,
        P.EDIT_EMPLOYEE,
        P.DELETE_EMPLOYEE,
        P.VIEW_DEPARTMENTS,
        P.CREATE_DEPARTMENT,
        P.EDIT_DEPARTMENT,
        P.DELETE_DEPARTMENT,
        P.VIEW_DESIGNATIONS,
        P.CREATE_DESIGNATION,
        P.EDIT_DESIGNATION,
        P.DELETE_DESIGNATION,
        P.VIEW_CLASSES,
        P.CREATE_CLASS,
        P.EDIT_CLASS,
        P.DELETE_CLASS,
        P.MANAGE_CLASS_STUDENTS,
        P.VIEW_ATTENDANCE,
        P.MARK_ATTENDANCE,
        P.VIEW_ATTENDANCE_REPORTS,
        P.VIEW_LEAVES,
        P.MANAGE_LEAVE_APPLICATIONS,
        P.MANAGE_LEAVE_POLICIES,
        P.VIEW_SALARY,
        P.MANAGE_SALARY_STRUCTURES,
        P.MANAGE_TEACHER_SALARIES,
        P.MANAGE_EMPLOYEE_SALARIES,
        P.MANAGE_SALARY_INCREMENTS,
        P.PROCESS_SALARY_PAYMENTS,
        P.VIEW_TRANSPORT,
        P.MANAGE_TRANSPORT_ROUTES,
        P.MANAGE_TRANSPORT_STOPS,
        P.MANAGE_TRANSPORT_ASSIGNMENTS,
        P.VIEW_FEES,
        P.MANAGE_FEES,
        P.VIEW_REPORTS,
        P.VIEW_SETTINGS,
        P.MANAGE_ROLES,
        P.VIEW_FINANCE_MODULE,
        P.MANAGE_FEE_HEADS,
        P.MANAGE_FEE_TERMS,
        P.MANAGE_CLASSWISE_FEES,
        P.COLLECT_FEES,
        P.VIEW_FINANCE_REPORTS,
        P.VIEW_QUESTION_PAPERS,
        P.CREATE_QUESTION_PAPER,
        P.MANAGE_QUESTION_PAPERS,
        P.VIEW_EXAMINATIONS,
        P.MANAGE_EXAM_TYPES,
        P.MANAGE_EXAM_CONFIGURATIONS,
        P.MANAGE_EXAM_SCHEDULES,
        P.MANAGE_SEATING_PLANS,
        P.ENTER_MARKS,
        P.MANAGE_ASSESSMENTS,
        P.MANAGE_GRADE_SCALES,
        P.VIEW_EXAM_REPORTS,
        P.MANAGE_BRANCHES,
        P.MANAGE_ACADEMIC_SESSIONS,
        P.MANAGE_SUBJECTS,
    ],
    DefaultRole.PRINCIPAL: [
        P.VIEW_DASHBOARD,
        P.VIEW_STUDENTS,
        P.CREATE_STUDENT,
        P.EDIT_STUDENT,
        P.MANAGE_ADMISSIONS,
        P.MANAGE_TRANSFER_CERTIFICATES,
        P.VIEW_MONEY_COLLECTION,
        P.CREATE_MONEY_COLLECTION,
        P.EDIT_MONEY_COLLECTION,
        P.VIEW_TEACHERS,
        P.VIEW_EMPLOYEES,
        P.VIEW_DEPARTMENTS,
        P.VIEW_DESIGNATIONS,
        P.VIEW_CLASSES,
        P.CREATE_CLASS,
        P.EDIT_CLASS,
        P.MANAGE_CLASS_STUDENTS,
        P.VIEW_ATTENDANCE,
        P.MARK_ATTENDANCE,
        P.VIEW_ATTENDANCE_REPORTS,
        P.VIEW_LEAVES,
        P.MANAGE_LEAVE_APPLICATIONS,
        P.MANAGE_LEAVE_POLICIES,
        P.VIEW_SALARY,
        P.VIEW_TRANSPORT,
        P.VIEW_FEES,
        P.VIEW_QUESTION_PAPERS,
        P.CREATE_QUESTION_PAPER,
        P.MANAGE_QUESTION_PAPERS,
        P.VIEW_EXAMINATIONS,
        P.MANAGE_EXAM_TYPES,
        P.MANAGE_EXAM_CONFIGURATIONS,
        P.MANAGE_EXAM_SCHEDULES,
        P.MANAGE_SEATING_PLANS,
        P.ENTER_MARKS,
        P.MANAGE_ASSESSMENTS,
        P.MANAGE_GRADE_SCALES,
        P.VIEW_EXAM_REPORTS,
        P.VIEW_REPORTS,
        P.VIEW_SETTINGS,
        P.MANAGE_ACADEMIC_SESSIONS,
        P.MANAGE_SUBJECTS,
        P.VIEW_COURTESY_CALLS,
        P.CREATE_COURTESY_CALL_FEEDBACK,
        P.VIEW_ALL_COURTESY_CALL_FEEDBACK,
        P.EDIT_COURTESY_CALL_FEEDBACK,
        P.DELETE_COURTESY_CALL_FEEDBACK,
    ],
    DefaultRole.TEACHER: [
        P.VIEW_DASHBOARD,
        P.VIEW_STUDENTS,
        P.VIEW_CLASSES,
        P.VIEW_ATTENDANCE,
        P.MARK_ATTENDANCE,
        P.VIEW_LEAVES,
        P.MANAGE_LEAVE_APPLICATIONS,
        P.VIEW_QUESTION_PAPERS,
        P.CREATE_QUESTION_PAPER,
        P.VIEW_EXAMINATIONS,
        P.ENTER_MARKS,
        P.VIEW_EXAM_REPORTS,
        P.VIEW_COURTESY_CALLS,
        P.CREATE_COURTESY_CALL_FEEDBACK,
        P.VIEW_OWN_COURTESY_CALL_FEEDBACK,
        P.EDIT_COURTESY_CALL_FEEDBACK,
    ],
    DefaultRole.ACCOUNTANT: [
        P.VIEW_DASHBOARD,
        P.VIEW_STUDENTS,
        P.VIEW_MONEY_COLLECTION,
        P.CREATE_MONEY_COLLECTION,
        P.EDIT_MONEY_COLLECTION,
        P.DELETE_MONEY_COLLECTION,
        P.VIEW_SALARY,
        P.MANAGE_SALARY_STRUCTURES,
        P.MANAGE_TEACHER_SALARIES,
        P.MANAGE_EMPLOYEE_SALARIES,
        P.MANAGE_SALARY_INCREMENTS,
        P.PROCESS_SALARY_PAYMENTS,
        P.VIEW_FEES,
        P.MANAGE_FEES,
        P.VIEW_REPORTS,
        P.VIEW_FINANCE_MODULE,
        P.MANAGE_FEE_HEADS,
        P.MANAGE_FEE_TERMS,
        P.MANAGE_CLASSWISE_FEES,
        P.COLLECT_FEES,
        P.VIEW_FINANCE_REPORTS,
    ],
    DefaultRole.RECEPTIONIST: [
        P.VIEW_DASHBOARD,
        P.VIEW_STUDENTS,
        P.VIEW_TEACHERS,
        P.VIEW_MONEY_COLLECTION,
        P.CREATE_MONEY_COLLECTION,
        P.MANAGE_ADMISSIONS,
        P.VIEW_ATTENDANCE,
        P.VIEW_TRANSPORT,
    ],
    DefaultRole.TRANSPORT_MANAGER: [
        P.VIEW_DASHBOARD,
        P.VIEW_STUDENTS,
        P.VIEW_TRANSPORT,
        P.MANAGE_TRANSPORT_ROUTES,
        P.MANAGE_TRANSPORT_STOPS,
        P.MANAGE_TRANSPORT_ASSIGNMENTS,
    ],
    DefaultRole.STAFF: [
        P.VIEW_DASHBOARD,
        P.VIEW_STUDENTS,
        P.VIEW_LEAVES,
        P.MANAGE_LEAVE_APPLICATIONS,
        P.VIEW_ATTENDANCE,
        P.MARK_SELF_ATTENDANCE,
    ],
}


def default_permissions_for(role: DefaultRole) -> list[str]:
    """Return the default permission tags of a built-in role as plain strings."""
    return list(dict.fromkeys(P(tag).value for tag in ROLE_PERMISSIONS[role]))

# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Employee model and multi-branch access grants."""

from __future__ import annotations

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schoolerp.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from schoolerp.models.branch import Branch
    from schoolerp.models.user import User


class Employee(Base, TimestampMixin):
    """Non-teaching staff member with a primary branch."""

    __tablename__ = "employees"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    branch_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("branches.id"),
        nullable=True,
    )
    user_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    branch: Mapped[Branch | None] = relationship("Branch")
    user: Mapped[User | None] = relationship("User")
    branch_access: Mapped[list[EmployeeBranchAccess]] = relationship(
        "EmployeeBranchAccess",
        back_populates="employee",
        cascade="all, delete-orphan",
    )


class EmployeeBranchAccess(Base, TimestampMixin):
    """Grants an employee access to a branch beyond the primary one."""

    __tablename__ = "employee_branch_access"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    employee_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    branch_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("branches.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "branch_id", name="_employee_branch_uc"),
    )

    employee: Mapped[Employee] = relationship(
        "Employee", back_populates="branch_access"
    )
    branch: Mapped[Branch] = relationship("Branch")

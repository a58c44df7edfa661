# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Teacher model."""

from __future__ import annotations

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schoolerp.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from schoolerp.models.branch import Branch
    from schoolerp.models.user import User


class Teacher(Base, TimestampMixin):
    """Teaching staff member assigned to a single branch."""

    __tablename__ = "teachers"

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

# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Class (grade/section) model."""

import uuid as uuid_lib

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from schoolerp.models.base import Base, TimestampMixin


class SchoolClass(Base, TimestampMixin):
    """A class taught at one branch."""

    __tablename__ = "classes"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    section: Mapped[str | None] = mapped_column(String(20), nullable=True)
    branch_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("branches.id"),
        nullable=True,
    )

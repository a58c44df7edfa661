# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Branch model: one physical school location."""

import uuid as uuid_lib

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from schoolerp.models.base import Base, TimestampMixin

# Fixed id of the head office branch ("Headquarters" / "HQ")
HEADQUARTERS_BRANCH_ID = "headquarters"


def _new_branch_id() -> str:
    return str(uuid_lib.uuid4())


class Branch(Base, TimestampMixin):
    """A school location that partitions students, staff and classes."""

    __tablename__ = "branches"

    # String ids so the head office can use a well-known readable id
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=_new_branch_id,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

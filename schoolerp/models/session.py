# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Login session model.

A session is the opaque token handed out in the ``session`` cookie. It
carries a snapshot of the identity provider claims the user had when the
session was opened; authorization reads those claims from the session, so a
claim change only takes effect on the next login.
"""

from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schoolerp.models.base import Base

if TYPE_CHECKING:
    from schoolerp.models.user import User


class Session(Base):
    """An authenticated login of one user."""

    __tablename__ = "sessions"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    user_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    # Copied from users.identity_claims at login
    identity_claims: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True
    )
    opened_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    user: Mapped[User] = relationship("User", back_populates="sessions")

    @property
    def is_expired(self) -> bool:
        return self.expires_at < datetime.utcnow()

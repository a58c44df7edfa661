# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Authentication schemas."""

import datetime
import uuid

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    """Login credentials."""

    username: str
    password: str


class UserResponse(BaseModel):
    """Authenticated user with effective permissions."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    full_name: str | None
    is_active: bool
    branch_id: str | None
    created_at: datetime.datetime
    permissions: list[str] = []


class AuthResponse(BaseModel):
    """Response returned after a successful login."""

    user: UserResponse

# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Branch schemas."""

import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class BranchBase(BaseModel):
    """Base branch schema."""

    name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., min_length=1, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    order: int | None = Field(None, ge=0)


class BranchCreate(BranchBase):
    """Schema for creating a branch."""

    pass


class BranchUpdate(BaseModel):
    """Schema for updating a branch."""

    name: str | None = Field(None, min_length=1, max_length=200)
    code: str | None = Field(None, min_length=1, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    order: int | None = Field(None, ge=0)


class BranchOrderItem(BaseModel):
    """New display position of one branch."""

    id: str
    order: int = Field(..., ge=0)


class BranchResponse(BaseModel):
    """Schema for branch response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str
    address: str | None
    city: str | None
    state: str | None
    country: str | None
    phone: str | None
    email: str | None
    order: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

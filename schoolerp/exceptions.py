# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Service-level exceptions shared by the RBAC and branch services.

Each exception carries an RPC-style error code and the HTTP status it is
reported with. The API layer never builds these responses itself; a single
handler registered in ``schoolerp.main`` turns any ``ServiceError`` into a
JSON error body.
"""

from fastapi import status


class ServiceError(Exception):
    """Base exception for service errors."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""

    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Entity with the same unique key already exists."""

    code = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT


class BadRequestError(ServiceError):
    """Request cannot be applied to the current state."""

    code = "BAD_REQUEST"
    status_code = status.HTTP_400_BAD_REQUEST


class PermissionDeniedError(ServiceError):
    """Operation is not allowed on this entity."""

    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN


class InternalServiceError(ServiceError):
    """Unexpected database or infrastructure failure."""

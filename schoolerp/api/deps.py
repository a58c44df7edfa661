# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

import logging

from fastapi import Cookie, Depends, HTTPException, status
from sqlalchemy.orm import Session

from schoolerp.database import get_db
from schoolerp.models import User
from schoolerp.models.session import Session as SessionModel
from schoolerp.services import auth_service, rbac_service

logger = logging.getLogger(__name__)


def get_current_session(
    db: Session = Depends(get_db),
    session: str | None = Cookie(default=None),
) -> SessionModel:
    """Get the valid login session named by the session cookie."""
    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    session_obj = auth_service.get_session(db, session)
    if not session_obj:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
        )
    return session_obj


def get_current_user(
    db: Session = Depends(get_db),
    session_obj: SessionModel = Depends(get_current_session),
) -> User:
    """Get current authenticated user from session cookie."""
    user = auth_service.get_user_by_id(db, session_obj.user_id)
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )

    return user


def require_permission(permission_name: str):
    """Dependency factory for permission-based authorization.

    Super admins, by role or by the claims of their session, pass every check.
    """

    def dependency(
        db: Session = Depends(get_db),
        session_obj: SessionModel = Depends(get_current_session),
        current_user: User = Depends(get_current_user),
    ) -> User:
        if not rbac_service.user_has_permission(
            db, current_user, permission_name, claims=session_obj.identity_claims
        ):
            logger.warning(
                f"User {current_user.username} denied permission {permission_name}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied: {permission_name}",
            )
        return current_user

    return dependency

# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Branch API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from schoolerp.api.deps import get_current_session, get_current_user, require_permission
from schoolerp.database import get_db
from schoolerp.models import User
from schoolerp.models.session import Session as SessionModel
from schoolerp.rbac.permissions import PermissionTag
from schoolerp.schemas.branch import (
    BranchCreate,
    BranchOrderItem,
    BranchResponse,
    BranchUpdate,
)
from schoolerp.services import branch_service

router = APIRouter()

manage_branches = require_permission(PermissionTag.MANAGE_BRANCHES.value)


@router.get("", response_model=list[BranchResponse])
def list_branches(db: Session = Depends(get_db)) -> list[BranchResponse]:
    """List all branches ordered by display order."""
    branches = branch_service.get_all_branches(db)
    return [BranchResponse.model_validate(b) for b in branches]


@router.get("/by-id", response_model=BranchResponse | None)
def get_branch_by_id(
    id: str | None = None,
    db: Session = Depends(get_db),
) -> BranchResponse | None:
    """Get a branch by ID. Returns null for an empty or unknown ID."""
    branch = branch_service.get_branch_by_id(db, id)
    return BranchResponse.model_validate(branch) if branch else None


@router.get("/code/{code}", response_model=BranchResponse)
def get_branch_by_code(code: str, db: Session = Depends(get_db)) -> BranchResponse:
    """Get a branch by its code."""
    return BranchResponse.model_validate(branch_service.get_branch_by_code(db, code))


@router.get("/mine", response_model=list[BranchResponse])
def list_my_branches(
    db: Session = Depends(get_db),
    session_obj: SessionModel = Depends(get_current_session),
    current_user: User = Depends(get_current_user),
) -> list[BranchResponse]:
    """List the branches the current user may act on."""
    branches = branch_service.get_user_branches(db, current_user, session_obj.identity_claims)
    return [BranchResponse.model_validate(b) for b in branches]


@router.post("", response_model=BranchResponse, status_code=status.HTTP_201_CREATED)
def create_branch(
    data: BranchCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_branches),
) -> BranchResponse:
    """Create a new branch."""
    return BranchResponse.model_validate(branch_service.create_branch(db, data))


@router.put("/order", response_model=list[BranchResponse])
def update_branch_order(
    items: list[BranchOrderItem],
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_branches),
) -> list[BranchResponse]:
    """Set the display order of several branches."""
    branches = branch_service.update_branch_order(db, items)
    return [BranchResponse.model_validate(b) for b in branches]


@router.put("/{branch_id}", response_model=BranchResponse)
def update_branch(
    branch_id: str,
    data: BranchUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_branches),
) -> BranchResponse:
    """Update a branch."""
    return BranchResponse.model_validate(
        branch_service.update_branch(db, branch_id, data)
    )


@router.delete("/{branch_id}", response_model=BranchResponse)
def delete_branch(
    branch_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(manage_branches),
) -> BranchResponse:
    """Delete a branch that has no students, staff, classes or users."""
    branch = branch_service.delete_branch(db, branch_id)
    return BranchResponse.model_validate(branch)

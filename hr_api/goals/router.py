"""Goals router: CRUD plus progress updates."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user
from hr_api.auth.models import User
from hr_api.common.constants import GoalCategory, GoalStatus
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.goals.schemas import GoalCreate, GoalProgressUpdate, GoalResponse, GoalUpdate
from hr_api.goals.service import GoalService

router = APIRouter(prefix="", tags=["goals"])


# ── POST / ───────────────────────────────────────────────────────────

@router.post("", response_model=GoalResponse, status_code=201)
async def create_goal(
    body: GoalCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return GoalResponse.model_validate(await GoalService.create_goal(db, body))


# ── GET / ────────────────────────────────────────────────────────────

@router.get("", response_model=PaginatedResponse[GoalResponse])
async def list_goals(
    employee_id: Optional[uuid.UUID] = Query(None),
    status: Optional[GoalStatus] = Query(None),
    category: Optional[GoalCategory] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await GoalService.list_goals(
        db, pagination, employee_id=employee_id, status=status, category=category,
    )


# ── GET /{id} ────────────────────────────────────────────────────────

@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(
    goal_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return GoalResponse.model_validate(await GoalService.get_goal(db, goal_id))


# ── PATCH /{id} ──────────────────────────────────────────────────────

@router.patch("/{goal_id}", response_model=GoalResponse)
async def update_goal(
    goal_id: uuid.UUID,
    body: GoalUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return GoalResponse.model_validate(await GoalService.update_goal(db, goal_id, body))


# ── PATCH /{id}/progress ─────────────────────────────────────────────

@router.patch("/{goal_id}/progress", response_model=GoalResponse)
async def update_goal_progress(
    goal_id: uuid.UUID,
    body: GoalProgressUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return GoalResponse.model_validate(await GoalService.update_progress(db, goal_id, body))


# ── DELETE /{id} ─────────────────────────────────────────────────────

@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await GoalService.delete_goal(db, goal_id)
    return {"message": "Goal deleted successfully"}

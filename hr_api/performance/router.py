"""Performance router: review cycles and performance reviews.

Submitting is open to any authenticated user. Completing a review, or
setting ``status`` through PATCH, requires manager or above.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user, require_manager_for_status, require_role
from hr_api.auth.models import User
from hr_api.common.constants import CycleStatus, ReviewStatus, UserRole
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.performance.schemas import (
    CycleCreate,
    CycleResponse,
    CycleUpdate,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from hr_api.performance.service import PerformanceService

router = APIRouter(prefix="", tags=["performance"])


# ═════════════════════════════════════════════════════════════════════
# Cycles
# ═════════════════════════════════════════════════════════════════════

@router.post("/cycles", response_model=CycleResponse, status_code=201)
async def create_cycle(
    body: CycleCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    cycle = await PerformanceService.create_cycle(db, body)
    return CycleResponse.model_validate(cycle)


@router.get("/cycles", response_model=PaginatedResponse[CycleResponse])
async def list_cycles(
    company_id: Optional[uuid.UUID] = Query(None),
    status: Optional[CycleStatus] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await PerformanceService.list_cycles(
        db, pagination, company_id=company_id, status=status,
    )


@router.get("/cycles/{cycle_id}", response_model=CycleResponse)
async def get_cycle(
    cycle_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return CycleResponse.model_validate(await PerformanceService.get_cycle(db, cycle_id))


@router.patch("/cycles/{cycle_id}", response_model=CycleResponse)
async def update_cycle(
    cycle_id: uuid.UUID,
    body: CycleUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    cycle = await PerformanceService.update_cycle(db, cycle_id, body)
    return CycleResponse.model_validate(cycle)


@router.delete("/cycles/{cycle_id}")
async def delete_cycle(
    cycle_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await PerformanceService.delete_cycle(db, cycle_id)
    return {"message": "Performance cycle deleted successfully"}


# ═════════════════════════════════════════════════════════════════════
# Reviews
# ═════════════════════════════════════════════════════════════════════

@router.post("/reviews", response_model=ReviewResponse, status_code=201)
async def create_review(
    body: ReviewCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    review = await PerformanceService.create_review(db, body)
    return ReviewResponse.model_validate(review)


@router.get("/reviews", response_model=PaginatedResponse[ReviewResponse])
async def list_reviews(
    employee_id: Optional[uuid.UUID] = Query(None),
    reviewer_id: Optional[uuid.UUID] = Query(None),
    cycle_id: Optional[uuid.UUID] = Query(None),
    status: Optional[ReviewStatus] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await PerformanceService.list_reviews(
        db,
        pagination,
        employee_id=employee_id,
        reviewer_id=reviewer_id,
        cycle_id=cycle_id,
        status=status,
    )


@router.get("/reviews/{review_id}", response_model=ReviewResponse)
async def get_review(
    review_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ReviewResponse.model_validate(await PerformanceService.get_review(db, review_id))


@router.patch("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: uuid.UUID,
    body: ReviewUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_manager_for_status(user, body.model_fields_set)
    review = await PerformanceService.update_review(db, review_id, body)
    return ReviewResponse.model_validate(review)


# ── PATCH /reviews/{id}/submit ───────────────────────────────────────

@router.patch("/reviews/{review_id}/submit", response_model=ReviewResponse)
async def submit_review(
    review_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    review = await PerformanceService.submit_review(db, review_id, actor_id=user.id)
    return ReviewResponse.model_validate(review)


# ── PATCH /reviews/{id}/complete ─────────────────────────────────────

@router.patch("/reviews/{review_id}/complete", response_model=ReviewResponse)
async def complete_review(
    review_id: uuid.UUID,
    user: User = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    review = await PerformanceService.complete_review(db, review_id, actor_id=user.id)
    return ReviewResponse.model_validate(review)


@router.delete("/reviews/{review_id}")
async def delete_review(
    review_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await PerformanceService.delete_review(db, review_id)
    return {"message": "Performance review deleted successfully"}

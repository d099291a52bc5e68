"""Benefits router: benefit plan CRUD and enrollments.

All endpoints require authentication.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user
from hr_api.auth.models import User
from hr_api.benefits.schemas import (
    BenefitCreate,
    BenefitResponse,
    BenefitUpdate,
    EnrollmentCreate,
    EnrollmentResponse,
)
from hr_api.benefits.service import BenefitService
from hr_api.common.constants import BenefitType
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db

router = APIRouter(prefix="", tags=["benefits"])


# ── POST / ───────────────────────────────────────────────────────────

@router.post("", response_model=BenefitResponse, status_code=201)
async def create_benefit(
    body: BenefitCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    benefit = await BenefitService.create_benefit(db, body)
    return BenefitResponse.model_validate(benefit)


# ── GET / ────────────────────────────────────────────────────────────

@router.get("", response_model=PaginatedResponse[BenefitResponse])
async def list_benefits(
    company_id: Optional[uuid.UUID] = Query(None),
    type: Optional[BenefitType] = Query(None),
    is_active: Optional[bool] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await BenefitService.list_benefits(
        db, pagination, company_id=company_id, type=type, is_active=is_active,
    )


# ── GET /{id} ────────────────────────────────────────────────────────

@router.get("/{benefit_id}", response_model=BenefitResponse)
async def get_benefit(
    benefit_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return BenefitResponse.model_validate(await BenefitService.get_benefit(db, benefit_id))


# ── PATCH /{id} ──────────────────────────────────────────────────────

@router.patch("/{benefit_id}", response_model=BenefitResponse)
async def update_benefit(
    benefit_id: uuid.UUID,
    body: BenefitUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    benefit = await BenefitService.update_benefit(db, benefit_id, body)
    return BenefitResponse.model_validate(benefit)


# ── DELETE /{id} ─────────────────────────────────────────────────────

@router.delete("/{benefit_id}")
async def delete_benefit(
    benefit_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await BenefitService.delete_benefit(db, benefit_id)
    return {"message": "Benefit deleted successfully"}


# ── Enrollments ──────────────────────────────────────────────────────

@router.get("/{benefit_id}/enrollments", response_model=list[EnrollmentResponse])
async def list_enrollments(
    benefit_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    enrollments = await BenefitService.list_enrollments(db, benefit_id)
    return [EnrollmentResponse.model_validate(e) for e in enrollments]


@router.post(
    "/{benefit_id}/enrollments", response_model=EnrollmentResponse, status_code=201,
)
async def enroll_employee(
    benefit_id: uuid.UUID,
    body: EnrollmentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    enrollment = await BenefitService.enroll(db, benefit_id, body.employee_id)
    return EnrollmentResponse.model_validate(enrollment)


@router.delete("/{benefit_id}/enrollments/{employee_id}")
async def unenroll_employee(
    benefit_id: uuid.UUID,
    employee_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await BenefitService.unenroll(db, benefit_id, employee_id)
    return {"message": "Enrollment removed successfully"}

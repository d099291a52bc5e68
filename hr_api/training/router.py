"""Training router: course CRUD and enrollments."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user
from hr_api.auth.models import User
from hr_api.common.constants import TrainingType
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.training.schemas import (
    TrainingCreate,
    TrainingDetail,
    TrainingEnrollmentCreate,
    TrainingEnrollmentResponse,
    TrainingEnrollmentUpdate,
    TrainingResponse,
    TrainingUpdate,
)
from hr_api.training.service import TrainingService

router = APIRouter(prefix="", tags=["training"])


# ── POST / ───────────────────────────────────────────────────────────

@router.post("", response_model=TrainingResponse, status_code=201)
async def create_training(
    body: TrainingCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    training = await TrainingService.create_training(db, body)
    return TrainingResponse.model_validate(training)


# ── GET / ────────────────────────────────────────────────────────────

@router.get("", response_model=PaginatedResponse[TrainingResponse])
async def list_trainings(
    type: Optional[TrainingType] = Query(None),
    is_required: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Search in title"),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await TrainingService.list_trainings(
        db, pagination, type=type, is_required=is_required, search=search,
    )


# ── GET /{id} ────────────────────────────────────────────────────────

@router.get("/{training_id}", response_model=TrainingDetail)
async def get_training(
    training_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return TrainingDetail.model_validate(await TrainingService.get_training(db, training_id))


# ── PATCH /{id} ──────────────────────────────────────────────────────

@router.patch("/{training_id}", response_model=TrainingResponse)
async def update_training(
    training_id: uuid.UUID,
    body: TrainingUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    training = await TrainingService.update_training(db, training_id, body)
    return TrainingResponse.model_validate(training)


# ── DELETE /{id} ─────────────────────────────────────────────────────

@router.delete("/{training_id}")
async def delete_training(
    training_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await TrainingService.delete_training(db, training_id)
    return {"message": "Training deleted successfully"}


# ── Enrollments ──────────────────────────────────────────────────────

@router.post(
    "/{training_id}/enrollments",
    response_model=TrainingEnrollmentResponse,
    status_code=201,
)
async def enroll_employee(
    training_id: uuid.UUID,
    body: TrainingEnrollmentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    enrollment = await TrainingService.enroll(db, training_id, body.employee_id)
    return TrainingEnrollmentResponse.model_validate(enrollment)


@router.patch(
    "/{training_id}/enrollments/{employee_id}",
    response_model=TrainingEnrollmentResponse,
)
async def update_enrollment(
    training_id: uuid.UUID,
    employee_id: uuid.UUID,
    body: TrainingEnrollmentUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    enrollment = await TrainingService.update_enrollment(db, training_id, employee_id, body)
    return TrainingEnrollmentResponse.model_validate(enrollment)


@router.delete("/{training_id}/enrollments/{employee_id}")
async def unenroll_employee(
    training_id: uuid.UUID,
    employee_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await TrainingService.unenroll(db, training_id, employee_id)
    return {"message": "Enrollment removed successfully"}

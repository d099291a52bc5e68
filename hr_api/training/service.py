"""Training service layer: courses and enrollments."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.audit import utcnow
from hr_api.common.constants import TrainingStatus, TrainingType
from hr_api.common.exceptions import ConflictError, NotFoundException
from hr_api.common.filters import apply_filters, apply_search
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, exists, get_or_404
from hr_api.core_hr.models import Employee
from hr_api.training.models import EmployeeTraining, Training
from hr_api.training.schemas import (
    TrainingCreate,
    TrainingEnrollmentUpdate,
    TrainingResponse,
    TrainingUpdate,
)

logger = logging.getLogger(__name__)

_DETAIL_OPTIONS = (
    selectinload(Training.enrollments).selectinload(EmployeeTraining.employee),
)
_ENROLLMENT_OPTIONS = (selectinload(EmployeeTraining.employee),)


class TrainingService:
    """Business logic for trainings and their enrollments."""

    @staticmethod
    async def list_trainings(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        type: Optional[TrainingType] = None,
        is_required: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        query = select(Training).order_by(Training.created_at.desc())
        query = apply_filters(query, Training, {"type": type, "is_required": is_required})
        query = apply_search(query, Training, search, ["title"])
        return await paginate(db, query, pagination, model=Training, schema=TrainingResponse)

    @staticmethod
    async def get_training(db: AsyncSession, training_id: uuid.UUID) -> Training:
        return await get_or_404(db, Training, training_id, options=_DETAIL_OPTIONS)

    @staticmethod
    async def _check_title(
        db: AsyncSession,
        title: str,
        training_id: Optional[uuid.UUID] = None,
    ) -> None:
        conditions = [Training.title == title]
        if training_id is not None:
            conditions.append(Training.id != training_id)
        if await exists(db, Training, *conditions):
            raise ConflictError.duplicate("title", title)

    @staticmethod
    async def create_training(db: AsyncSession, data: TrainingCreate) -> Training:
        await TrainingService._check_title(db, data.title)

        training = Training(**data.model_dump())
        db.add(training)
        await db.flush()
        logger.info("Created training %s (%s)", training.id, training.title)
        return await TrainingService.get_training(db, training.id)

    @staticmethod
    async def update_training(
        db: AsyncSession,
        training_id: uuid.UUID,
        data: TrainingUpdate,
    ) -> Training:
        training = await TrainingService.get_training(db, training_id)
        changes = data.model_dump(exclude_unset=True)

        new_title = changes.get("title")
        if new_title and new_title != training.title:
            await TrainingService._check_title(db, new_title, training_id)

        apply_changes(training, changes)
        await db.flush()
        return await TrainingService.get_training(db, training_id)

    @staticmethod
    async def delete_training(db: AsyncSession, training_id: uuid.UUID) -> None:
        training = await TrainingService.get_training(db, training_id)
        if training.enrollment_count:
            raise ConflictError("Cannot delete a training that has enrollments.")
        await db.delete(training)
        await db.flush()
        logger.info("Deleted training %s", training_id)

    # ── Enrollments ─────────────────────────────────────────────────

    @staticmethod
    async def _get_enrollment(
        db: AsyncSession,
        training_id: uuid.UUID,
        employee_id: uuid.UUID,
    ) -> EmployeeTraining:
        result = await db.execute(
            select(EmployeeTraining)
            .where(
                EmployeeTraining.training_id == training_id,
                EmployeeTraining.employee_id == employee_id,
            )
            .options(*_ENROLLMENT_OPTIONS)
            .execution_options(populate_existing=True)
        )
        enrollment = result.scalars().first()
        if enrollment is None:
            raise NotFoundException("Enrollment", f"{training_id}/{employee_id}")
        return enrollment

    @staticmethod
    async def enroll(
        db: AsyncSession,
        training_id: uuid.UUID,
        employee_id: uuid.UUID,
    ) -> EmployeeTraining:
        await ensure_exists(db, Training, training_id)
        await ensure_exists(db, Employee, employee_id)
        if await exists(
            db,
            EmployeeTraining,
            EmployeeTraining.training_id == training_id,
            EmployeeTraining.employee_id == employee_id,
        ):
            raise ConflictError("Employee is already enrolled in this training.")

        enrollment = EmployeeTraining(training_id=training_id, employee_id=employee_id)
        db.add(enrollment)
        await db.flush()
        logger.info("Enrolled employee %s in training %s", employee_id, training_id)
        return await TrainingService._get_enrollment(db, training_id, employee_id)

    @staticmethod
    async def update_enrollment(
        db: AsyncSession,
        training_id: uuid.UUID,
        employee_id: uuid.UUID,
        data: TrainingEnrollmentUpdate,
    ) -> EmployeeTraining:
        enrollment = await TrainingService._get_enrollment(db, training_id, employee_id)
        enrollment.status = data.status
        if data.score is not None:
            enrollment.score = data.score
        if data.status == TrainingStatus.COMPLETED and enrollment.completed_at is None:
            enrollment.completed_at = utcnow()

        await db.flush()
        return await TrainingService._get_enrollment(db, training_id, employee_id)

    @staticmethod
    async def unenroll(
        db: AsyncSession,
        training_id: uuid.UUID,
        employee_id: uuid.UUID,
    ) -> None:
        enrollment = await TrainingService._get_enrollment(db, training_id, employee_id)
        await db.delete(enrollment)
        await db.flush()
        logger.info("Removed employee %s from training %s", employee_id, training_id)

"""Benefits service layer: benefit plans and enrollments."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.benefits.models import Benefit, EmployeeBenefit
from hr_api.benefits.schemas import BenefitCreate, BenefitResponse, BenefitUpdate
from hr_api.common.constants import BenefitType
from hr_api.common.exceptions import ConflictError, NotFoundException
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, exists, get_or_404
from hr_api.core_hr.models import Company, Employee

logger = logging.getLogger(__name__)


class BenefitService:
    """Business logic for benefit plans."""

    @staticmethod
    async def list_benefits(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        company_id: Optional[uuid.UUID] = None,
        type: Optional[BenefitType] = None,
        is_active: Optional[bool] = None,
    ) -> PaginatedResponse:
        query = select(Benefit).order_by(Benefit.created_at.desc())
        query = apply_filters(
            query, Benefit, {"company_id": company_id, "type": type, "is_active": is_active},
        )
        return await paginate(db, query, pagination, model=Benefit, schema=BenefitResponse)

    @staticmethod
    async def get_benefit(db: AsyncSession, benefit_id: uuid.UUID) -> Benefit:
        return await get_or_404(db, Benefit, benefit_id)

    @staticmethod
    async def _check_name(
        db: AsyncSession,
        company_id: uuid.UUID,
        name: str,
        benefit_id: Optional[uuid.UUID] = None,
    ) -> None:
        conditions = [Benefit.company_id == company_id, Benefit.name == name]
        if benefit_id is not None:
            conditions.append(Benefit.id != benefit_id)
        if await exists(db, Benefit, *conditions):
            raise ConflictError.duplicate("name", name)

    @staticmethod
    async def create_benefit(db: AsyncSession, data: BenefitCreate) -> Benefit:
        await ensure_exists(db, Company, data.company_id)
        await BenefitService._check_name(db, data.company_id, data.name)

        benefit = Benefit(**data.model_dump())
        db.add(benefit)
        await db.flush()
        logger.info("Created benefit %s (%s)", benefit.id, benefit.name)
        return await BenefitService.get_benefit(db, benefit.id)

    @staticmethod
    async def update_benefit(
        db: AsyncSession,
        benefit_id: uuid.UUID,
        data: BenefitUpdate,
    ) -> Benefit:
        benefit = await BenefitService.get_benefit(db, benefit_id)
        changes = data.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name and new_name != benefit.name:
            await BenefitService._check_name(db, benefit.company_id, new_name, benefit_id)

        apply_changes(benefit, changes)
        await db.flush()
        return await BenefitService.get_benefit(db, benefit_id)

    @staticmethod
    async def delete_benefit(db: AsyncSession, benefit_id: uuid.UUID) -> None:
        benefit = await BenefitService.get_benefit(db, benefit_id)
        if benefit.enrollment_count:
            raise ConflictError("Cannot delete a benefit that has employee enrollments.")
        await db.delete(benefit)
        await db.flush()
        logger.info("Deleted benefit %s", benefit_id)

    # ── Enrollments ─────────────────────────────────────────────────

    @staticmethod
    async def list_enrollments(
        db: AsyncSession,
        benefit_id: uuid.UUID,
    ) -> list[EmployeeBenefit]:
        await ensure_exists(db, Benefit, benefit_id)
        result = await db.execute(
            select(EmployeeBenefit)
            .where(EmployeeBenefit.benefit_id == benefit_id)
            .options(selectinload(EmployeeBenefit.employee))
            .order_by(EmployeeBenefit.enrolled_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def enroll(
        db: AsyncSession,
        benefit_id: uuid.UUID,
        employee_id: uuid.UUID,
    ) -> EmployeeBenefit:
        await ensure_exists(db, Benefit, benefit_id)
        await ensure_exists(db, Employee, employee_id)
        if await exists(
            db,
            EmployeeBenefit,
            EmployeeBenefit.benefit_id == benefit_id,
            EmployeeBenefit.employee_id == employee_id,
        ):
            raise ConflictError("Employee is already enrolled in this benefit.")

        enrollment = EmployeeBenefit(benefit_id=benefit_id, employee_id=employee_id)
        db.add(enrollment)
        await db.flush()
        logger.info("Enrolled employee %s in benefit %s", employee_id, benefit_id)
        return await get_or_404(
            db, EmployeeBenefit, enrollment.id, "Enrollment",
            options=(selectinload(EmployeeBenefit.employee),),
        )

    @staticmethod
    async def unenroll(
        db: AsyncSession,
        benefit_id: uuid.UUID,
        employee_id: uuid.UUID,
    ) -> None:
        result = await db.execute(
            select(EmployeeBenefit).where(
                EmployeeBenefit.benefit_id == benefit_id,
                EmployeeBenefit.employee_id == employee_id,
            )
        )
        enrollment = result.scalars().first()
        if enrollment is None:
            raise NotFoundException("Enrollment", f"{benefit_id}/{employee_id}")
        await db.delete(enrollment)
        await db.flush()

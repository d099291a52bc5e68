"""Skills service layer: skill catalogue and employee skill records."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.constants import SkillLevel
from hr_api.common.exceptions import ConflictError, ValidationException
from hr_api.common.filters import apply_filters, apply_search
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, exists, get_or_404
from hr_api.core_hr.models import Employee
from hr_api.skills.models import EmployeeSkill, Skill
from hr_api.skills.schemas import (
    EmployeeSkillCreate,
    EmployeeSkillResponse,
    EmployeeSkillUpdate,
    SkillCreate,
    SkillResponse,
    SkillUpdate,
)

logger = logging.getLogger(__name__)

_EMPLOYEE_SKILL_OPTIONS = (
    selectinload(EmployeeSkill.skill),
    selectinload(EmployeeSkill.employee),
)


def _check_certification_dates(certified_at: Optional[date], expires_at: Optional[date]) -> None:
    if certified_at and expires_at and expires_at < certified_at:
        raise ValidationException(
            {"expires_at": ["Certification cannot expire before it was obtained."]}
        )


# ═════════════════════════════════════════════════════════════════════
# Skills
# ═════════════════════════════════════════════════════════════════════


class SkillService:
    """Business logic for the skill catalogue."""

    @staticmethod
    async def list_skills(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        query = select(Skill).order_by(Skill.name.asc())
        query = apply_filters(query, Skill, {"category__ilike": category})
        query = apply_search(query, Skill, search, ["name"])
        return await paginate(db, query, pagination, model=Skill, schema=SkillResponse)

    @staticmethod
    async def list_categories(db: AsyncSession) -> list[str]:
        """Distinct, sorted, non-null skill categories."""
        result = await db.execute(
            select(Skill.category)
            .where(Skill.category.is_not(None))
            .distinct()
            .order_by(Skill.category.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_skill(db: AsyncSession, skill_id: uuid.UUID) -> Skill:
        return await get_or_404(db, Skill, skill_id)

    @staticmethod
    async def _check_name(
        db: AsyncSession,
        name: str,
        skill_id: Optional[uuid.UUID] = None,
    ) -> None:
        conditions = [Skill.name == name]
        if skill_id is not None:
            conditions.append(Skill.id != skill_id)
        if await exists(db, Skill, *conditions):
            raise ConflictError.duplicate("name", name)

    @staticmethod
    async def create_skill(db: AsyncSession, data: SkillCreate) -> Skill:
        await SkillService._check_name(db, data.name)

        skill = Skill(**data.model_dump())
        db.add(skill)
        await db.flush()
        logger.info("Created skill %s (%s)", skill.id, skill.name)
        return await SkillService.get_skill(db, skill.id)

    @staticmethod
    async def update_skill(
        db: AsyncSession,
        skill_id: uuid.UUID,
        data: SkillUpdate,
    ) -> Skill:
        skill = await SkillService.get_skill(db, skill_id)
        changes = data.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name and new_name != skill.name:
            await SkillService._check_name(db, new_name, skill_id)

        apply_changes(skill, changes)
        await db.flush()
        return await SkillService.get_skill(db, skill_id)

    @staticmethod
    async def delete_skill(db: AsyncSession, skill_id: uuid.UUID) -> None:
        skill = await SkillService.get_skill(db, skill_id)
        await db.delete(skill)
        await db.flush()
        logger.info("Deleted skill %s", skill_id)


# ═════════════════════════════════════════════════════════════════════
# Employee skills
# ═════════════════════════════════════════════════════════════════════


class EmployeeSkillService:
    """Business logic for per-employee skill records."""

    @staticmethod
    async def list_employee_skills(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        employee_id: Optional[uuid.UUID] = None,
        skill_id: Optional[uuid.UUID] = None,
        level: Optional[SkillLevel] = None,
    ) -> PaginatedResponse:
        query = (
            select(EmployeeSkill)
            .options(*_EMPLOYEE_SKILL_OPTIONS)
            .order_by(EmployeeSkill.updated_at.desc())
        )
        filters: dict[str, Any] = {
            "employee_id": employee_id,
            "skill_id": skill_id,
            "level": level,
        }
        query = apply_filters(query, EmployeeSkill, filters)
        return await paginate(
            db, query, pagination, model=EmployeeSkill, schema=EmployeeSkillResponse,
        )

    @staticmethod
    async def list_for_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> list[EmployeeSkill]:
        await ensure_exists(db, Employee, employee_id)
        result = await db.execute(
            select(EmployeeSkill)
            .where(EmployeeSkill.employee_id == employee_id)
            .options(*_EMPLOYEE_SKILL_OPTIONS)
            .order_by(EmployeeSkill.updated_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_employee_skill(db: AsyncSession, record_id: uuid.UUID) -> EmployeeSkill:
        return await get_or_404(
            db, EmployeeSkill, record_id, "Employee skill", options=_EMPLOYEE_SKILL_OPTIONS,
        )

    @staticmethod
    async def create_employee_skill(
        db: AsyncSession,
        data: EmployeeSkillCreate,
    ) -> EmployeeSkill:
        await ensure_exists(db, Employee, data.employee_id)
        await ensure_exists(db, Skill, data.skill_id)
        _check_certification_dates(data.certified_at, data.expires_at)
        if await exists(
            db,
            EmployeeSkill,
            EmployeeSkill.employee_id == data.employee_id,
            EmployeeSkill.skill_id == data.skill_id,
        ):
            raise ConflictError("Employee already has this skill recorded.")

        record = EmployeeSkill(**data.model_dump())
        db.add(record)
        await db.flush()
        logger.info("Added skill %s to employee %s", record.skill_id, record.employee_id)
        return await EmployeeSkillService.get_employee_skill(db, record.id)

    @staticmethod
    async def update_employee_skill(
        db: AsyncSession,
        record_id: uuid.UUID,
        data: EmployeeSkillUpdate,
    ) -> EmployeeSkill:
        record = await EmployeeSkillService.get_employee_skill(db, record_id)
        changes = data.model_dump(exclude_unset=True)
        _check_certification_dates(
            changes.get("certified_at", record.certified_at),
            changes.get("expires_at", record.expires_at),
        )

        apply_changes(record, changes)
        await db.flush()
        return await EmployeeSkillService.get_employee_skill(db, record_id)

    @staticmethod
    async def delete_employee_skill(db: AsyncSession, record_id: uuid.UUID) -> None:
        record = await EmployeeSkillService.get_employee_skill(db, record_id)
        await db.delete(record)
        await db.flush()
        logger.info("Deleted employee skill %s", record_id)

"""Skills routers.

Two routers live here and are mounted separately:

* ``skills_router``          → /api/v1/skills
* ``employee_skills_router`` → /api/v1/employee-skills
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user
from hr_api.auth.models import User
from hr_api.common.constants import SkillLevel
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.skills.schemas import (
    EmployeeSkillCreate,
    EmployeeSkillResponse,
    EmployeeSkillUpdate,
    SkillCreate,
    SkillResponse,
    SkillUpdate,
)
from hr_api.skills.service import EmployeeSkillService, SkillService

skills_router = APIRouter(prefix="", tags=["skills"])
employee_skills_router = APIRouter(prefix="", tags=["employee-skills"])


# ═════════════════════════════════════════════════════════════════════
# Skills
# ═════════════════════════════════════════════════════════════════════

@skills_router.post("", response_model=SkillResponse, status_code=201)
async def create_skill(
    body: SkillCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return SkillResponse.model_validate(await SkillService.create_skill(db, body))


@skills_router.get("", response_model=PaginatedResponse[SkillResponse])
async def list_skills(
    category: Optional[str] = Query(None, description="Case-insensitive contains"),
    search: Optional[str] = Query(None, description="Search in skill name"),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await SkillService.list_skills(db, pagination, category=category, search=search)


@skills_router.get("/categories", response_model=list[str])
async def list_skill_categories(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await SkillService.list_categories(db)


@skills_router.get("/{skill_id}", response_model=SkillResponse)
async def get_skill(
    skill_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return SkillResponse.model_validate(await SkillService.get_skill(db, skill_id))


@skills_router.patch("/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: uuid.UUID,
    body: SkillUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return SkillResponse.model_validate(await SkillService.update_skill(db, skill_id, body))


@skills_router.delete("/{skill_id}")
async def delete_skill(
    skill_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await SkillService.delete_skill(db, skill_id)
    return {"message": "Skill deleted successfully"}


# ═════════════════════════════════════════════════════════════════════
# Employee skills
# ═════════════════════════════════════════════════════════════════════

@employee_skills_router.post("", response_model=EmployeeSkillResponse, status_code=201)
async def create_employee_skill(
    body: EmployeeSkillCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await EmployeeSkillService.create_employee_skill(db, body)
    return EmployeeSkillResponse.model_validate(record)


@employee_skills_router.get("", response_model=PaginatedResponse[EmployeeSkillResponse])
async def list_employee_skills(
    employee_id: Optional[uuid.UUID] = Query(None),
    skill_id: Optional[uuid.UUID] = Query(None),
    level: Optional[SkillLevel] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeSkillService.list_employee_skills(
        db, pagination, employee_id=employee_id, skill_id=skill_id, level=level,
    )


@employee_skills_router.get(
    "/employee/{employee_id}", response_model=list[EmployeeSkillResponse],
)
async def list_skills_for_employee(
    employee_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    records = await EmployeeSkillService.list_for_employee(db, employee_id)
    return [EmployeeSkillResponse.model_validate(r) for r in records]


@employee_skills_router.get("/{record_id}", response_model=EmployeeSkillResponse)
async def get_employee_skill(
    record_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await EmployeeSkillService.get_employee_skill(db, record_id)
    return EmployeeSkillResponse.model_validate(record)


@employee_skills_router.patch("/{record_id}", response_model=EmployeeSkillResponse)
async def update_employee_skill(
    record_id: uuid.UUID,
    body: EmployeeSkillUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await EmployeeSkillService.update_employee_skill(db, record_id, body)
    return EmployeeSkillResponse.model_validate(record)


@employee_skills_router.delete("/{record_id}")
async def delete_employee_skill(
    record_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await EmployeeSkillService.delete_employee_skill(db, record_id)
    return {"message": "Employee skill deleted successfully"}

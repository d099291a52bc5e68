"""Skills Pydantic v2 schemas."""

import uuid
from datetime import date, datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import SkillLevel
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


# ═════════════════════════════════════════════════════════════════════
# Skill
# ═════════════════════════════════════════════════════════════════════


class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)


class SkillUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)


class SkillBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    category: Optional[str] = None


class SkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    employee_count: int = 0
    created_at: datetime
    updated_at: datetime


# ═════════════════════════════════════════════════════════════════════
# Employee skill
# ═════════════════════════════════════════════════════════════════════


class EmployeeSkillCreate(BaseModel):
    employee_id: uuid.UUID
    skill_id: uuid.UUID
    level: SkillLevel
    years_of_experience: Optional[int] = Field(None, ge=0, le=60)
    certified: bool = False
    certified_at: Optional[date] = None
    expires_at: Optional[date] = None
    notes: Optional[str] = None


class EmployeeSkillUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"level", "certified"})

    level: Optional[SkillLevel] = None
    years_of_experience: Optional[int] = Field(None, ge=0, le=60)
    certified: Optional[bool] = None
    certified_at: Optional[date] = None
    expires_at: Optional[date] = None
    notes: Optional[str] = None


class EmployeeSkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    skill_id: uuid.UUID
    level: SkillLevel
    years_of_experience: Optional[int] = None
    certified: bool
    certified_at: Optional[date] = None
    expires_at: Optional[date] = None
    notes: Optional[str] = None
    skill: Optional[SkillBrief] = None
    employee: Optional[EmployeeSummary] = None
    created_at: datetime
    updated_at: datetime

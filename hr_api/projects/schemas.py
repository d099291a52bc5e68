"""Projects Pydantic v2 schemas."""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import DEFAULT_CURRENCY, Priority, ProjectStatus
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


# ═════════════════════════════════════════════════════════════════════
# Team
# ═════════════════════════════════════════════════════════════════════


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    lead_id: Optional[uuid.UUID] = None


class TeamBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    lead_id: Optional[uuid.UUID] = None
    lead: Optional[EmployeeSummary] = None
    project_count: int = 0
    created_at: datetime
    updated_at: datetime


class ProjectTeamCreate(BaseModel):
    team_id: uuid.UUID
    role: Optional[str] = Field(None, max_length=100)


class ProjectTeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    team_id: uuid.UUID
    role: Optional[str] = None
    assigned_at: datetime
    team: Optional[TeamBrief] = None


# ═════════════════════════════════════════════════════════════════════
# Budget items
# ═════════════════════════════════════════════════════════════════════


class BudgetItemCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)
    category: Optional[str] = Field(None, max_length=100)
    amount: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)


class BudgetItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    description: str
    category: Optional[str] = None
    amount: Decimal
    created_at: datetime


# ═════════════════════════════════════════════════════════════════════
# Project
# ═════════════════════════════════════════════════════════════════════


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    manager_id: Optional[uuid.UUID] = None


class ProjectUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "status", "priority", "currency"})

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[Priority] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    manager_id: Optional[uuid.UUID] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    priority: Priority
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[Decimal] = None
    currency: str
    manager_id: Optional[uuid.UUID] = None
    manager: Optional[EmployeeSummary] = None
    budget_spent: Decimal = Decimal("0")
    created_at: datetime
    updated_at: datetime


class ProjectDetail(ProjectResponse):
    teams: list[ProjectTeamResponse] = []
    budget_items: list[BudgetItemResponse] = []

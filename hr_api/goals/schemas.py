"""Goals Pydantic v2 schemas."""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import GoalCategory, GoalStatus
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


class GoalCreate(BaseModel):
    employee_id: uuid.UUID
    performance_review_id: Optional[uuid.UUID] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: GoalCategory
    target_value: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    measurement_unit: Optional[str] = Field(None, max_length=50)
    weight: Optional[float] = Field(None, ge=0, le=1)
    due_date: Optional[date] = None
    status: GoalStatus = GoalStatus.NOT_STARTED
    completion_percentage: int = Field(0, ge=0, le=100)
    notes: Optional[str] = None


class GoalUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "title",
            "category",
            "status",
            "completion_percentage",
        }
    )

    performance_review_id: Optional[uuid.UUID] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[GoalCategory] = None
    target_value: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    measurement_unit: Optional[str] = Field(None, max_length=50)
    weight: Optional[float] = Field(None, ge=0, le=1)
    due_date: Optional[date] = None
    status: Optional[GoalStatus] = None
    completion_percentage: Optional[int] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class GoalProgressUpdate(BaseModel):
    """Range is enforced by the service so out-of-range values give 400."""

    progress: int
    current_value: Optional[Decimal] = None
    notes: Optional[str] = None


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    performance_review_id: Optional[uuid.UUID] = None
    title: str
    description: Optional[str] = None
    category: GoalCategory
    target_value: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    measurement_unit: Optional[str] = None
    weight: Optional[float] = None
    due_date: Optional[date] = None
    status: GoalStatus
    completion_percentage: int
    notes: Optional[str] = None
    employee: Optional[EmployeeSummary] = None
    created_at: datetime
    updated_at: datetime

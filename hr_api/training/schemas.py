"""Training Pydantic v2 schemas."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import DEFAULT_CURRENCY, TrainingStatus, TrainingType
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


class TrainingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: TrainingType
    provider: Optional[str] = Field(None, max_length=200)
    duration: Optional[int] = Field(None, ge=0, description="Duration in hours")
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    is_required: bool = False


class TrainingUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"title", "type", "currency", "is_required"})

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[TrainingType] = None
    provider: Optional[str] = Field(None, max_length=200)
    duration: Optional[int] = Field(None, ge=0)
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    is_required: Optional[bool] = None


class TrainingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: Optional[str] = None
    type: TrainingType
    provider: Optional[str] = None
    duration: Optional[int] = None
    cost: Optional[Decimal] = None
    currency: str
    is_required: bool
    enrollment_count: int = 0
    created_at: datetime
    updated_at: datetime


# ── Enrollments ─────────────────────────────────────────────────────


class TrainingEnrollmentCreate(BaseModel):
    employee_id: uuid.UUID


class TrainingEnrollmentUpdate(BaseModel):
    status: TrainingStatus
    score: Optional[float] = Field(None, ge=0, le=100)


class TrainingEnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    training_id: uuid.UUID
    status: TrainingStatus
    enrolled_at: datetime
    completed_at: Optional[datetime] = None
    score: Optional[float] = None
    employee: Optional[EmployeeSummary] = None


class TrainingDetail(TrainingResponse):
    enrollments: list[TrainingEnrollmentResponse] = []

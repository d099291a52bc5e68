"""Benefits Pydantic v2 schemas."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import DEFAULT_CURRENCY, BenefitType, EnrollmentStatus
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


class BenefitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: BenefitType
    provider: Optional[str] = Field(None, max_length=200)
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    is_active: bool = True
    company_id: uuid.UUID


class BenefitUpdate(PatchModel):
    """All fields optional; the owning company cannot change."""

    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "type", "currency", "is_active"})

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[BenefitType] = None
    provider: Optional[str] = Field(None, max_length=200)
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    is_active: Optional[bool] = None


class BenefitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    type: BenefitType
    provider: Optional[str] = None
    cost: Optional[Decimal] = None
    currency: str
    is_active: bool
    company_id: uuid.UUID
    enrollment_count: int = 0
    created_at: datetime
    updated_at: datetime


class EnrollmentCreate(BaseModel):
    employee_id: uuid.UUID


class EnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    benefit_id: uuid.UUID
    status: EnrollmentStatus
    enrolled_at: datetime
    employee: Optional[EmployeeSummary] = None

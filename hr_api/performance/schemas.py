"""Performance Pydantic v2 schemas: cycles and reviews."""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import (
    CycleStatus,
    CycleType,
    PromotionRecommendation,
    ReviewStatus,
    ReviewType,
)
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


# ═════════════════════════════════════════════════════════════════════
# Performance cycle
# ═════════════════════════════════════════════════════════════════════


class CycleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    cycle_type: CycleType
    company_id: uuid.UUID
    start_date: date
    end_date: date
    review_start_date: Optional[date] = None
    review_end_date: Optional[date] = None
    status: CycleStatus = CycleStatus.PLANNED


class CycleUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "name",
            "cycle_type",
            "start_date",
            "end_date",
            "status",
        }
    )

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    cycle_type: Optional[CycleType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    review_start_date: Optional[date] = None
    review_end_date: Optional[date] = None
    status: Optional[CycleStatus] = None


class CycleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    cycle_type: CycleType
    company_id: uuid.UUID
    start_date: date
    end_date: date
    review_start_date: Optional[date] = None
    review_end_date: Optional[date] = None
    status: CycleStatus
    review_count: int = 0
    created_at: datetime
    updated_at: datetime


class CycleBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    status: CycleStatus


# ═════════════════════════════════════════════════════════════════════
# Performance review
# ═════════════════════════════════════════════════════════════════════


class ReviewCreate(BaseModel):
    employee_id: uuid.UUID
    reviewer_id: uuid.UUID
    cycle_id: Optional[uuid.UUID] = None
    period: str = Field(..., min_length=1, max_length=50)
    type: ReviewType
    status: ReviewStatus = ReviewStatus.DRAFT
    overall_rating: Optional[float] = Field(None, ge=0, le=5)
    final_rating: Optional[float] = Field(None, ge=0, le=5)
    self_assessment: Optional[dict[str, Any]] = None
    manager_assessment: Optional[dict[str, Any]] = None
    goals: Optional[dict[str, Any]] = None
    feedback: Optional[str] = None
    development_plan: Optional[str] = None
    promotion_recommendation: PromotionRecommendation = PromotionRecommendation.NONE
    salary_increase_recommendation: Optional[Decimal] = Field(None, ge=0, le=100)
    review_date: Optional[date] = None
    due_date: date


class ReviewUpdate(PatchModel):
    """Employee and reviewer are fixed once the review exists."""

    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "period",
            "type",
            "status",
            "promotion_recommendation",
            "due_date",
        }
    )

    cycle_id: Optional[uuid.UUID] = None
    period: Optional[str] = Field(None, min_length=1, max_length=50)
    type: Optional[ReviewType] = None
    status: Optional[ReviewStatus] = None
    overall_rating: Optional[float] = Field(None, ge=0, le=5)
    final_rating: Optional[float] = Field(None, ge=0, le=5)
    self_assessment: Optional[dict[str, Any]] = None
    manager_assessment: Optional[dict[str, Any]] = None
    goals: Optional[dict[str, Any]] = None
    feedback: Optional[str] = None
    development_plan: Optional[str] = None
    promotion_recommendation: Optional[PromotionRecommendation] = None
    salary_increase_recommendation: Optional[Decimal] = Field(None, ge=0, le=100)
    review_date: Optional[date] = None
    due_date: Optional[date] = None


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    reviewer_id: uuid.UUID
    cycle_id: Optional[uuid.UUID] = None
    period: str
    type: ReviewType
    status: ReviewStatus
    overall_rating: Optional[float] = None
    final_rating: Optional[float] = None
    self_assessment: Optional[dict[str, Any]] = None
    manager_assessment: Optional[dict[str, Any]] = None
    goals: Optional[dict[str, Any]] = None
    feedback: Optional[str] = None
    development_plan: Optional[str] = None
    promotion_recommendation: PromotionRecommendation
    salary_increase_recommendation: Optional[Decimal] = None
    review_date: Optional[date] = None
    due_date: date
    submitted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    employee: Optional[EmployeeSummary] = None
    reviewer: Optional[EmployeeSummary] = None
    cycle: Optional[CycleBrief] = None
    created_at: datetime
    updated_at: datetime

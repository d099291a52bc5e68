"""Performance ORM models: PerformanceCycle, PerformanceReview."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hr_api.common.audit import TimestampMixin
from hr_api.common.constants import (
    CycleStatus,
    CycleType,
    PromotionRecommendation,
    ReviewStatus,
    ReviewType,
)
from hr_api.core_hr.models import Company, Employee
from hr_api.database import Base


# ═════════════════════════════════════════════════════════════════════
# PerformanceCycle
# ═════════════════════════════════════════════════════════════════════


class PerformanceCycle(Base, TimestampMixin):
    """A company-wide review period (annual, quarterly, ...)."""

    __tablename__ = "performance_cycles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    cycle_type: Mapped[CycleType] = mapped_column(
        sa.Enum(CycleType, name="cycle_type"), nullable=False,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    review_start_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    review_end_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    status: Mapped[CycleStatus] = mapped_column(
        sa.Enum(CycleStatus, name="cycle_status"),
        default=CycleStatus.PLANNED,
        server_default=CycleStatus.PLANNED.name,
        nullable=False,
    )

    company: Mapped[Company] = relationship()

    def __repr__(self) -> str:
        return f"<PerformanceCycle {self.name!r} {self.start_date}..{self.end_date}>"


# ═════════════════════════════════════════════════════════════════════
# PerformanceReview
# ═════════════════════════════════════════════════════════════════════


class PerformanceReview(Base, TimestampMixin):
    """One reviewer's assessment of one employee, optionally inside a cycle."""

    __tablename__ = "performance_reviews"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False, index=True,
    )
    reviewer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False, index=True,
    )
    cycle_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("performance_cycles.id"), index=True,
    )
    period: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    type: Mapped[ReviewType] = mapped_column(
        sa.Enum(ReviewType, name="review_type"), nullable=False,
    )
    status: Mapped[ReviewStatus] = mapped_column(
        sa.Enum(ReviewStatus, name="review_status"),
        default=ReviewStatus.DRAFT,
        server_default=ReviewStatus.DRAFT.name,
        nullable=False,
    )
    overall_rating: Mapped[Optional[float]] = mapped_column(sa.Float)
    final_rating: Mapped[Optional[float]] = mapped_column(sa.Float)
    self_assessment: Mapped[Optional[dict]] = mapped_column(JSONB)
    manager_assessment: Mapped[Optional[dict]] = mapped_column(JSONB)
    goals: Mapped[Optional[dict]] = mapped_column(JSONB)
    feedback: Mapped[Optional[str]] = mapped_column(sa.Text)
    development_plan: Mapped[Optional[str]] = mapped_column(sa.Text)
    promotion_recommendation: Mapped[PromotionRecommendation] = mapped_column(
        sa.Enum(PromotionRecommendation, name="promotion_recommendation"),
        default=PromotionRecommendation.NONE,
        server_default=PromotionRecommendation.NONE.name,
        nullable=False,
    )
    salary_increase_recommendation: Mapped[Optional[Decimal]] = mapped_column(
        sa.Numeric(5, 2),
    )
    review_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    due_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    completed_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))

    employee: Mapped[Employee] = relationship(foreign_keys=[employee_id])
    reviewer: Mapped[Employee] = relationship(foreign_keys=[reviewer_id])
    cycle: Mapped[Optional[PerformanceCycle]] = relationship()

    def __repr__(self) -> str:
        return f"<PerformanceReview {self.period} {self.status.value}>"


PerformanceCycle.review_count = column_property(
    sa.select(sa.func.count(PerformanceReview.id))
    .where(PerformanceReview.cycle_id == PerformanceCycle.id)
    .correlate_except(PerformanceReview)
    .scalar_subquery(),
)

"""Goals ORM model."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.common.audit import TimestampMixin
from hr_api.common.constants import GoalCategory, GoalStatus
from hr_api.core_hr.models import Employee
from hr_api.database import Base
from hr_api.performance.models import PerformanceReview


class Goal(Base, TimestampMixin):
    """An employee objective, optionally attached to a performance review."""

    __tablename__ = "goals"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    performance_review_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("performance_reviews.id", ondelete="SET NULL"),
        index=True,
    )
    title: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    category: Mapped[GoalCategory] = mapped_column(
        sa.Enum(GoalCategory, name="goal_category"), nullable=False,
    )
    target_value: Mapped[Optional[Decimal]] = mapped_column(sa.Numeric(12, 2))
    current_value: Mapped[Optional[Decimal]] = mapped_column(sa.Numeric(12, 2))
    measurement_unit: Mapped[Optional[str]] = mapped_column(sa.String(50))
    weight: Mapped[Optional[float]] = mapped_column(sa.Float)
    due_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    status: Mapped[GoalStatus] = mapped_column(
        sa.Enum(GoalStatus, name="goal_status"),
        default=GoalStatus.NOT_STARTED,
        server_default=GoalStatus.NOT_STARTED.name,
        nullable=False,
        index=True,
    )
    completion_percentage: Mapped[int] = mapped_column(
        sa.Integer, default=0, server_default="0", nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(sa.Text)

    employee: Mapped[Employee] = relationship()
    performance_review: Mapped[Optional[PerformanceReview]] = relationship()

    def __repr__(self) -> str:
        return f"<Goal {self.title!r} {self.completion_percentage}%>"

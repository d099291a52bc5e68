"""Training ORM models: Training, EmployeeTraining."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hr_api.common.audit import TimestampMixin, utcnow
from hr_api.common.constants import DEFAULT_CURRENCY, TrainingStatus, TrainingType
from hr_api.core_hr.models import Employee
from hr_api.database import Base


class Training(Base, TimestampMixin):
    __tablename__ = "trainings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(sa.String(200), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    type: Mapped[TrainingType] = mapped_column(
        sa.Enum(TrainingType, name="training_type"), nullable=False,
    )
    provider: Mapped[Optional[str]] = mapped_column(sa.String(200))
    duration: Mapped[Optional[int]] = mapped_column(sa.Integer)  # hours
    cost: Mapped[Optional[Decimal]] = mapped_column(sa.Numeric(12, 2))
    currency: Mapped[str] = mapped_column(
        sa.String(3), default=DEFAULT_CURRENCY, server_default=DEFAULT_CURRENCY,
    )
    is_required: Mapped[bool] = mapped_column(
        sa.Boolean, default=False, server_default=sa.false(), nullable=False,
    )

    enrollments: Mapped[list[EmployeeTraining]] = relationship(
        back_populates="training", passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Training {self.title!r} ({self.type.value})>"


class EmployeeTraining(Base):
    """Enrollment of one employee in one training."""

    __tablename__ = "employee_trainings"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "training_id", name="uq_employee_training"),
    )

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
    training_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("trainings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[TrainingStatus] = mapped_column(
        sa.Enum(TrainingStatus, name="training_status"),
        default=TrainingStatus.ENROLLED,
        server_default=TrainingStatus.ENROLLED.name,
        nullable=False,
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False,
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    score: Mapped[Optional[float]] = mapped_column(sa.Float)

    employee: Mapped[Employee] = relationship()
    training: Mapped[Training] = relationship(back_populates="enrollments")


Training.enrollment_count = column_property(
    sa.select(sa.func.count(EmployeeTraining.id))
    .where(EmployeeTraining.training_id == Training.id)
    .correlate_except(EmployeeTraining)
    .scalar_subquery(),
)

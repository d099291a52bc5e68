"""Benefits ORM models: Benefit, EmployeeBenefit."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hr_api.common.audit import TimestampMixin, utcnow
from hr_api.common.constants import DEFAULT_CURRENCY, BenefitType, EnrollmentStatus
from hr_api.core_hr.models import Company, Employee
from hr_api.database import Base


class Benefit(Base, TimestampMixin):
    """Benefit plan offered by a company."""

    __tablename__ = "benefits"
    __table_args__ = (
        sa.UniqueConstraint("company_id", "name", name="uq_benefit_company_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    type: Mapped[BenefitType] = mapped_column(
        sa.Enum(BenefitType, name="benefit_type"), nullable=False,
    )
    provider: Mapped[Optional[str]] = mapped_column(sa.String(200))
    cost: Mapped[Optional[Decimal]] = mapped_column(sa.Numeric(12, 2))
    currency: Mapped[str] = mapped_column(
        sa.String(3), default=DEFAULT_CURRENCY, server_default=DEFAULT_CURRENCY,
    )
    is_active: Mapped[bool] = mapped_column(
        sa.Boolean, default=True, server_default=sa.true(), nullable=False,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    company: Mapped[Company] = relationship()
    enrollments: Mapped[list[EmployeeBenefit]] = relationship(
        back_populates="benefit", passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Benefit {self.name!r} ({self.type.value})>"


class EmployeeBenefit(Base):
    """An employee's enrollment in a benefit plan."""

    __tablename__ = "employee_benefits"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "benefit_id", name="uq_employee_benefit"),
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
    benefit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("benefits.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    status: Mapped[EnrollmentStatus] = mapped_column(
        sa.Enum(EnrollmentStatus, name="enrollment_status"),
        default=EnrollmentStatus.ACTIVE,
        server_default=EnrollmentStatus.ACTIVE.name,
        nullable=False,
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, server_default=sa.func.now(),
    )

    employee: Mapped[Employee] = relationship()
    benefit: Mapped[Benefit] = relationship(back_populates="enrollments")


Benefit.enrollment_count = column_property(
    sa.select(sa.func.count(EmployeeBenefit.id))
    .where(EmployeeBenefit.benefit_id == Benefit.id)
    .correlate_except(EmployeeBenefit)
    .scalar_subquery(),
)

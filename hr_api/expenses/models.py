"""Expenses ORM models: ExpenseCategory, Expense."""

from __future__ import annotations

import datetime as dt
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hr_api.common.audit import TimestampMixin, utcnow
from hr_api.common.constants import DEFAULT_CURRENCY, ExpenseStatus
from hr_api.core_hr.models import Employee
from hr_api.database import Base


class ExpenseCategory(Base, TimestampMixin):
    """Bucket for expenses with an optional per-expense ceiling."""

    __tablename__ = "expense_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    max_amount: Mapped[Optional[Decimal]] = mapped_column(sa.Numeric(12, 2))
    currency: Mapped[str] = mapped_column(
        sa.String(3), default=DEFAULT_CURRENCY, server_default=DEFAULT_CURRENCY,
    )
    is_active: Mapped[bool] = mapped_column(
        sa.Boolean, default=True, server_default=sa.true(), nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ExpenseCategory {self.name!r}>"


class Expense(Base, TimestampMixin):
    __tablename__ = "expenses"

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
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("expense_categories.id"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(sa.Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(
        sa.String(3), default=DEFAULT_CURRENCY, server_default=DEFAULT_CURRENCY,
    )
    description: Mapped[str] = mapped_column(sa.Text, nullable=False)
    date: Mapped[dt.date] = mapped_column(sa.Date, nullable=False)
    receipt: Mapped[Optional[str]] = mapped_column(sa.String(500))
    status: Mapped[ExpenseStatus] = mapped_column(
        sa.Enum(ExpenseStatus, name="expense_status"),
        default=ExpenseStatus.PENDING,
        server_default=ExpenseStatus.PENDING.name,
        nullable=False,
        index=True,
    )
    comments: Mapped[Optional[str]] = mapped_column(sa.Text)
    submitted_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False,
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    approved_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"),
    )
    rejected_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    reimbursed_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))

    employee: Mapped[Employee] = relationship()
    category: Mapped[ExpenseCategory] = relationship()

    def __repr__(self) -> str:
        return f"<Expense {self.amount} {self.currency} {self.status.value}>"


ExpenseCategory.expense_count = column_property(
    sa.select(sa.func.count(Expense.id))
    .where(Expense.category_id == ExpenseCategory.id)
    .correlate_except(Expense)
    .scalar_subquery(),
)

"""Time-tracking ORM model: TimeRecord."""

from __future__ import annotations

import datetime as dt
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.common.audit import TimestampMixin
from hr_api.common.constants import TimeRecordStatus
from hr_api.core_hr.models import Employee
from hr_api.database import Base


class TimeRecord(Base, TimestampMixin):
    """One working day of one employee: clock times, break and total hours."""

    __tablename__ = "time_records"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "date", name="uq_time_record_employee_date"),
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
    date: Mapped[dt.date] = mapped_column(sa.Date, nullable=False, index=True)
    clock_in: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    clock_out: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    break_start: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    break_end: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    total_hours: Mapped[Optional[Decimal]] = mapped_column(sa.Numeric(5, 2))
    status: Mapped[TimeRecordStatus] = mapped_column(
        sa.Enum(TimeRecordStatus, name="time_record_status"),
        default=TimeRecordStatus.PENDING,
        server_default=TimeRecordStatus.PENDING.name,
        nullable=False,
        index=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(sa.Text)
    location: Mapped[Optional[dict]] = mapped_column(JSONB)
    approved_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"),
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))

    employee: Mapped[Employee] = relationship()

    def __repr__(self) -> str:
        return f"<TimeRecord {self.employee_id} {self.date} {self.status.value}>"

"""Time-tracking Pydantic v2 schemas."""

import datetime as dt
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import TimeRecordStatus
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


class TimeRecordCreate(BaseModel):
    employee_id: uuid.UUID
    date: dt.date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    total_hours: Optional[Decimal] = Field(None, ge=0, le=24, decimal_places=2)
    status: TimeRecordStatus = TimeRecordStatus.PENDING
    notes: Optional[str] = None
    location: Optional[dict[str, Any]] = None


class TimeRecordUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"date", "status"})

    date: Optional[dt.date] = None
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    total_hours: Optional[Decimal] = Field(None, ge=0, le=24, decimal_places=2)
    status: Optional[TimeRecordStatus] = None
    notes: Optional[str] = None
    location: Optional[dict[str, Any]] = None


class TimeRecordReject(BaseModel):
    reason: Optional[str] = None


class TimeRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    date: dt.date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    total_hours: Optional[Decimal] = None
    status: TimeRecordStatus
    notes: Optional[str] = None
    location: Optional[dict[str, Any]] = None
    approved_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    employee: Optional[EmployeeSummary] = None
    created_at: datetime
    updated_at: datetime

"""Time-tracking service layer: daily records, hour totals and approvals."""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.audit import create_audit_entry, utcnow
from hr_api.common.constants import (
    REVIEWABLE_TIME_RECORD_STATUSES,
    TIME_RECORD_DECISION_STATUSES,
    TimeRecordStatus,
)
from hr_api.common.exceptions import (
    BadRequestException,
    ConflictError,
    ValidationException,
)
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, exists, get_or_404
from hr_api.core_hr.models import Employee
from hr_api.time_tracking.models import TimeRecord
from hr_api.time_tracking.schemas import (
    TimeRecordCreate,
    TimeRecordResponse,
    TimeRecordUpdate,
)

logger = logging.getLogger(__name__)

_OPTIONS = (selectinload(TimeRecord.employee),)
_TIME_FIELDS = ("clock_in", "clock_out", "break_start", "break_end")
_HUNDREDTHS = Decimal("0.01")


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps (as returned by some drivers) as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def calculate_total_hours(
    clock_in: Optional[datetime],
    clock_out: Optional[datetime],
    break_start: Optional[datetime] = None,
    break_end: Optional[datetime] = None,
) -> Optional[Decimal]:
    """
    Worked hours between clock-in and clock-out minus the break.

    Returns ``None`` when either clock time is missing. The break is only
    deducted when both of its ends are known. Raises
    ``ValidationException`` for inverted intervals.
    """
    if clock_in is None or clock_out is None:
        return None

    clock_in, clock_out = _as_utc(clock_in), _as_utc(clock_out)
    if clock_out < clock_in:
        raise ValidationException({"clock_out": ["Clock-out cannot precede clock-in."]})

    worked = clock_out - clock_in
    if break_start is not None and break_end is not None:
        pause = _as_utc(break_end) - _as_utc(break_start)
        if pause.total_seconds() < 0:
            raise ValidationException({"break_end": ["Break end cannot precede break start."]})
        if pause > worked:
            raise ValidationException({"break_end": ["Break cannot be longer than the shift."]})
        worked -= pause

    hours = Decimal(worked.total_seconds()) / Decimal(3600)
    return hours.quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP)


class TimeTrackingService:
    """Business logic for time records."""

    @staticmethod
    async def list_records(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        employee_id: Optional[uuid.UUID] = None,
        status: Optional[TimeRecordStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> PaginatedResponse:
        query = select(TimeRecord).options(*_OPTIONS).order_by(TimeRecord.date.desc())
        query = apply_filters(
            query,
            TimeRecord,
            {
                "employee_id": employee_id,
                "status": status,
                "date__from": start_date,
                "date__to": end_date,
            },
        )
        return await paginate(
            db, query, pagination, model=TimeRecord, schema=TimeRecordResponse,
        )

    @staticmethod
    async def get_record(db: AsyncSession, record_id: uuid.UUID) -> TimeRecord:
        return await get_or_404(db, TimeRecord, record_id, "Time record", options=_OPTIONS)

    @staticmethod
    async def _check_unique_day(
        db: AsyncSession,
        employee_id: uuid.UUID,
        day: date,
        record_id: Optional[uuid.UUID] = None,
    ) -> None:
        conditions = [TimeRecord.employee_id == employee_id, TimeRecord.date == day]
        if record_id is not None:
            conditions.append(TimeRecord.id != record_id)
        if await exists(db, TimeRecord, *conditions):
            raise ConflictError(
                f"A time record already exists for this employee on {day.isoformat()}."
            )

    @staticmethod
    async def create_record(db: AsyncSession, data: TimeRecordCreate) -> TimeRecord:
        await ensure_exists(db, Employee, data.employee_id)
        await TimeTrackingService._check_unique_day(db, data.employee_id, data.date)

        values = data.model_dump()
        computed = calculate_total_hours(*(values[f] for f in _TIME_FIELDS))
        if values["total_hours"] is None:
            values["total_hours"] = computed

        record = TimeRecord(**values)
        db.add(record)
        await db.flush()
        logger.info(
            "Created time record %s for employee %s on %s",
            record.id, record.employee_id, record.date,
        )
        return await TimeTrackingService.get_record(db, record.id)

    @staticmethod
    async def update_record(
        db: AsyncSession,
        record_id: uuid.UUID,
        data: TimeRecordUpdate,
    ) -> TimeRecord:
        record = await TimeTrackingService.get_record(db, record_id)
        changes = data.model_dump(exclude_unset=True)

        if record.status == TimeRecordStatus.APPROVED and changes.get("status") is None:
            raise BadRequestException(
                "Cannot update an approved time record without changing its status."
            )
        if changes.get("status") in TIME_RECORD_DECISION_STATUSES:
            raise BadRequestException(
                f"Use the approve or reject endpoint to set status '{changes['status'].value}'."
            )
        if changes.get("date") is not None and changes["date"] != record.date:
            await TimeTrackingService._check_unique_day(
                db, record.employee_id, changes["date"], record.id,
            )

        merged = [changes.get(f, getattr(record, f)) for f in _TIME_FIELDS]
        computed = calculate_total_hours(*merged)
        if changes.get("total_hours") is None and computed is not None:
            changes["total_hours"] = computed

        apply_changes(record, changes)
        await db.flush()
        return await TimeTrackingService.get_record(db, record_id)

    @staticmethod
    async def approve_record(
        db: AsyncSession,
        record_id: uuid.UUID,
        *,
        approver_id: uuid.UUID,
    ) -> TimeRecord:
        record = await TimeTrackingService.get_record(db, record_id)
        if record.status not in REVIEWABLE_TIME_RECORD_STATUSES:
            raise BadRequestException(
                f"Cannot approve a time record with status '{record.status.value}'."
            )

        old_status = record.status
        record.status = TimeRecordStatus.APPROVED
        record.approved_by = approver_id
        record.approved_at = utcnow()
        await db.flush()

        await create_audit_entry(
            db,
            action="approve",
            entity_type="time_record",
            entity_id=record.id,
            actor_id=approver_id,
            old_values={"status": old_status.value},
            new_values={"status": record.status.value},
        )
        logger.info("Approved time record %s", record_id)
        return await TimeTrackingService.get_record(db, record_id)

    @staticmethod
    async def reject_record(
        db: AsyncSession,
        record_id: uuid.UUID,
        *,
        reason: Optional[str] = None,
        actor_id: Optional[uuid.UUID] = None,
    ) -> TimeRecord:
        record = await TimeTrackingService.get_record(db, record_id)
        if record.status not in REVIEWABLE_TIME_RECORD_STATUSES:
            raise BadRequestException(
                f"Cannot reject a time record with status '{record.status.value}'."
            )

        old_status = record.status
        record.status = TimeRecordStatus.REJECTED
        if reason is not None:
            record.notes = reason
        await db.flush()

        await create_audit_entry(
            db,
            action="reject",
            entity_type="time_record",
            entity_id=record.id,
            actor_id=actor_id,
            old_values={"status": old_status.value},
            new_values={"status": record.status.value, "reason": reason},
        )
        logger.info("Rejected time record %s", record_id)
        return await TimeTrackingService.get_record(db, record_id)

    @staticmethod
    async def delete_record(db: AsyncSession, record_id: uuid.UUID) -> None:
        record = await TimeTrackingService.get_record(db, record_id)
        if record.status == TimeRecordStatus.APPROVED:
            raise BadRequestException("Cannot delete an approved time record.")
        await db.delete(record)
        await db.flush()
        logger.info("Deleted time record %s", record_id)

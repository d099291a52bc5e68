"""Time-tracking router: daily records and manager approvals."""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user, require_manager_for_status, require_role
from hr_api.auth.models import User
from hr_api.common.constants import TimeRecordStatus, UserRole
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.time_tracking.schemas import (
    TimeRecordCreate,
    TimeRecordReject,
    TimeRecordResponse,
    TimeRecordUpdate,
)
from hr_api.time_tracking.service import TimeTrackingService

router = APIRouter(prefix="", tags=["time-tracking"])


# ── POST / ───────────────────────────────────────────────────────────

@router.post("", response_model=TimeRecordResponse, status_code=201)
async def create_time_record(
    body: TimeRecordCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await TimeTrackingService.create_record(db, body)
    return TimeRecordResponse.model_validate(record)


# ── GET / ────────────────────────────────────────────────────────────

@router.get("", response_model=PaginatedResponse[TimeRecordResponse])
async def list_time_records(
    employee_id: Optional[uuid.UUID] = Query(None),
    status: Optional[TimeRecordStatus] = Query(None),
    start_date: Optional[date] = Query(None, description="Inclusive lower bound on date"),
    end_date: Optional[date] = Query(None, description="Inclusive upper bound on date"),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await TimeTrackingService.list_records(
        db,
        pagination,
        employee_id=employee_id,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )


# ── GET /{id} ────────────────────────────────────────────────────────

@router.get("/{record_id}", response_model=TimeRecordResponse)
async def get_time_record(
    record_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await TimeTrackingService.get_record(db, record_id)
    return TimeRecordResponse.model_validate(record)


# ── PATCH /{id} ──────────────────────────────────────────────────────

@router.patch("/{record_id}", response_model=TimeRecordResponse)
async def update_time_record(
    record_id: uuid.UUID,
    body: TimeRecordUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_manager_for_status(user, body.model_fields_set)
    record = await TimeTrackingService.update_record(db, record_id, body)
    return TimeRecordResponse.model_validate(record)


# ── PATCH /{id}/approve ──────────────────────────────────────────────

@router.patch("/{record_id}/approve", response_model=TimeRecordResponse)
async def approve_time_record(
    record_id: uuid.UUID,
    user: User = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    record = await TimeTrackingService.approve_record(db, record_id, approver_id=user.id)
    return TimeRecordResponse.model_validate(record)


# ── PATCH /{id}/reject ───────────────────────────────────────────────

@router.patch("/{record_id}/reject", response_model=TimeRecordResponse)
async def reject_time_record(
    record_id: uuid.UUID,
    body: Optional[TimeRecordReject] = None,
    user: User = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    record = await TimeTrackingService.reject_record(
        db, record_id, reason=body.reason if body else None, actor_id=user.id,
    )
    return TimeRecordResponse.model_validate(record)


# ── DELETE /{id} ─────────────────────────────────────────────────────

@router.delete("/{record_id}")
async def delete_time_record(
    record_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await TimeTrackingService.delete_record(db, record_id)
    return {"message": "Time record deleted successfully"}

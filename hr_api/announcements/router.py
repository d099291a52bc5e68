"""Announcements router."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.announcements.schemas import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
)
from hr_api.announcements.service import AnnouncementService
from hr_api.auth.dependencies import get_current_user
from hr_api.auth.models import User
from hr_api.common.constants import AnnouncementStatus, AnnouncementType
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db

router = APIRouter(prefix="", tags=["announcements"])


@router.post("", response_model=AnnouncementResponse, status_code=201)
async def create_announcement(
    body: AnnouncementCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    announcement = await AnnouncementService.create_announcement(
        db, body, created_by=user.id,
    )
    return AnnouncementResponse.model_validate(announcement)


@router.get("", response_model=PaginatedResponse[AnnouncementResponse])
async def list_announcements(
    company_id: Optional[uuid.UUID] = Query(None),
    status: Optional[AnnouncementStatus] = Query(None),
    type: Optional[AnnouncementType] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AnnouncementService.list_announcements(
        db, pagination, company_id=company_id, status=status, type=type,
    )


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(
    announcement_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    announcement = await AnnouncementService.get_announcement(db, announcement_id)
    return AnnouncementResponse.model_validate(announcement)


@router.patch("/{announcement_id}", response_model=AnnouncementResponse)
async def update_announcement(
    announcement_id: uuid.UUID,
    body: AnnouncementUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    announcement = await AnnouncementService.update_announcement(db, announcement_id, body)
    return AnnouncementResponse.model_validate(announcement)


@router.delete("/{announcement_id}")
async def delete_announcement(
    announcement_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await AnnouncementService.delete_announcement(db, announcement_id)
    return {"message": "Announcement deleted successfully"}

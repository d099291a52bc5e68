"""Announcements service layer."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.announcements.models import Announcement
from hr_api.announcements.schemas import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
)
from hr_api.common.audit import utcnow
from hr_api.common.constants import AnnouncementStatus, AnnouncementType
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, get_or_404
from hr_api.core_hr.models import Company

logger = logging.getLogger(__name__)

_OPTIONS = (selectinload(Announcement.company),)


def _stamp_publication(values: dict[str, Any], current_published_at=None) -> None:
    """Fill ``published_at`` when an announcement goes live without one."""
    if (
        values.get("status") == AnnouncementStatus.PUBLISHED
        and values.get("published_at") is None
        and current_published_at is None
    ):
        values["published_at"] = utcnow()


class AnnouncementService:

    @staticmethod
    async def list_announcements(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        company_id: Optional[uuid.UUID] = None,
        status: Optional[AnnouncementStatus] = None,
        type: Optional[AnnouncementType] = None,
    ) -> PaginatedResponse:
        query = (
            select(Announcement)
            .options(*_OPTIONS)
            .order_by(Announcement.created_at.desc())
        )
        query = apply_filters(
            query,
            Announcement,
            {"company_id": company_id, "status": status, "type": type},
        )
        return await paginate(
            db, query, pagination, model=Announcement, schema=AnnouncementResponse,
        )

    @staticmethod
    async def get_announcement(db: AsyncSession, announcement_id: uuid.UUID) -> Announcement:
        return await get_or_404(db, Announcement, announcement_id, options=_OPTIONS)

    @staticmethod
    async def create_announcement(
        db: AsyncSession,
        data: AnnouncementCreate,
        *,
        created_by: Optional[uuid.UUID] = None,
    ) -> Announcement:
        await ensure_exists(db, Company, data.company_id)

        values = data.model_dump()
        _stamp_publication(values)
        announcement = Announcement(**values, created_by=created_by)
        db.add(announcement)
        await db.flush()
        logger.info("Created announcement %s (%s)", announcement.id, announcement.title)
        return await AnnouncementService.get_announcement(db, announcement.id)

    @staticmethod
    async def update_announcement(
        db: AsyncSession,
        announcement_id: uuid.UUID,
        data: AnnouncementUpdate,
    ) -> Announcement:
        announcement = await AnnouncementService.get_announcement(db, announcement_id)
        changes = data.model_dump(exclude_unset=True)
        _stamp_publication(changes, announcement.published_at)

        apply_changes(announcement, changes)
        await db.flush()
        return await AnnouncementService.get_announcement(db, announcement_id)

    @staticmethod
    async def delete_announcement(db: AsyncSession, announcement_id: uuid.UUID) -> None:
        announcement = await AnnouncementService.get_announcement(db, announcement_id)
        await db.delete(announcement)
        await db.flush()
        logger.info("Deleted announcement %s", announcement_id)

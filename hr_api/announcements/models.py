"""Announcements ORM model."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.common.audit import TimestampMixin
from hr_api.common.constants import AnnouncementStatus, AnnouncementType, Priority
from hr_api.core_hr.models import Company
from hr_api.database import Base


class Announcement(Base, TimestampMixin):
    __tablename__ = "announcements"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    content: Mapped[str] = mapped_column(sa.Text, nullable=False)
    type: Mapped[AnnouncementType] = mapped_column(
        sa.Enum(AnnouncementType, name="announcement_type"),
        default=AnnouncementType.GENERAL,
        server_default=AnnouncementType.GENERAL.name,
        nullable=False,
    )
    priority: Mapped[Priority] = mapped_column(
        sa.Enum(Priority, name="priority"),
        default=Priority.MEDIUM,
        server_default=Priority.MEDIUM.name,
        nullable=False,
    )
    status: Mapped[AnnouncementStatus] = mapped_column(
        sa.Enum(AnnouncementStatus, name="announcement_status"),
        default=AnnouncementStatus.DRAFT,
        server_default=AnnouncementStatus.DRAFT.name,
        nullable=False,
        index=True,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"),
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    expires_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))

    company: Mapped[Company] = relationship()

    def __repr__(self) -> str:
        return f"<Announcement {self.title!r} ({self.status.value})>"

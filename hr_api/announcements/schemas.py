"""Announcements Pydantic v2 schemas."""

import uuid
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import AnnouncementStatus, AnnouncementType, Priority
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import CompanyBrief


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    type: AnnouncementType = AnnouncementType.GENERAL
    priority: Priority = Priority.MEDIUM
    status: AnnouncementStatus = AnnouncementStatus.DRAFT
    company_id: uuid.UUID
    published_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class AnnouncementUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "title",
            "content",
            "type",
            "priority",
            "status",
        }
    )

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    type: Optional[AnnouncementType] = None
    priority: Optional[Priority] = None
    status: Optional[AnnouncementStatus] = None
    published_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    content: str
    type: AnnouncementType
    priority: Priority
    status: AnnouncementStatus
    company_id: uuid.UUID
    created_by: Optional[uuid.UUID] = None
    published_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    company: Optional[CompanyBrief] = None
    created_at: datetime
    updated_at: datetime

"""Policies Pydantic v2 schemas."""

import uuid
from datetime import date, datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import CompanyBrief


class PolicyCreate(BaseModel):
    """``created_by`` is taken from the authenticated user, not the payload."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    company_id: uuid.UUID
    version: str = Field("1.0", min_length=1, max_length=20)
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None
    is_active: bool = True


class PolicyUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "title",
            "content",
            "category",
            "version",
            "is_active",
        }
    )

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    version: Optional[str] = Field(None, min_length=1, max_length=20)
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None
    is_active: Optional[bool] = None


class PolicyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    content: str
    category: str
    company_id: uuid.UUID
    version: str
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None
    is_active: bool
    created_by: Optional[uuid.UUID] = None
    company: Optional[CompanyBrief] = None
    created_at: datetime
    updated_at: datetime

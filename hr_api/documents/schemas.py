"""Documents Pydantic v2 schemas."""

import uuid
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


class DocumentCreate(BaseModel):
    employee_id: uuid.UUID
    document_type: str = Field(..., min_length=1, max_length=100)
    file_name: str = Field(..., min_length=1, max_length=255)
    file_path: str = Field(..., min_length=1, max_length=1000)
    file_size: int = Field(..., ge=0)
    mime_type: str = Field(..., min_length=1, max_length=100)
    expires_at: Optional[datetime] = None


class DocumentUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "document_type",
            "file_name",
            "file_path",
            "file_size",
            "mime_type",
        }
    )

    document_type: Optional[str] = Field(None, min_length=1, max_length=100)
    file_name: Optional[str] = Field(None, min_length=1, max_length=255)
    file_path: Optional[str] = Field(None, min_length=1, max_length=1000)
    file_size: Optional[int] = Field(None, ge=0)
    mime_type: Optional[str] = Field(None, min_length=1, max_length=100)
    expires_at: Optional[datetime] = None


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    document_type: str
    file_name: str
    file_path: str
    file_size: int
    mime_type: str
    expires_at: Optional[datetime] = None
    is_verified: bool
    verified_at: Optional[datetime] = None
    verified_by: Optional[uuid.UUID] = None
    employee: Optional[EmployeeSummary] = None
    created_at: datetime
    updated_at: datetime

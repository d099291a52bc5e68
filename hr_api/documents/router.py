"""Documents router: employee document metadata and verification."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user, require_role
from hr_api.auth.models import User
from hr_api.common.constants import UserRole
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.documents.schemas import DocumentCreate, DocumentResponse, DocumentUpdate
from hr_api.documents.service import DocumentService

router = APIRouter(prefix="", tags=["documents"])


@router.post("", response_model=DocumentResponse, status_code=201)
async def create_document(
    body: DocumentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return DocumentResponse.model_validate(await DocumentService.create_document(db, body))


@router.get("", response_model=PaginatedResponse[DocumentResponse])
async def list_documents(
    employee_id: Optional[uuid.UUID] = Query(None),
    document_type: Optional[str] = Query(None),
    is_verified: Optional[bool] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await DocumentService.list_documents(
        db,
        pagination,
        employee_id=employee_id,
        document_type=document_type,
        is_verified=is_verified,
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return DocumentResponse.model_validate(await DocumentService.get_document(db, document_id))


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: uuid.UUID,
    body: DocumentUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    document = await DocumentService.update_document(db, document_id, body)
    return DocumentResponse.model_validate(document)


# ── PATCH /{id}/verify ───────────────────────────────────────────────

@router.patch("/{document_id}/verify", response_model=DocumentResponse)
async def verify_document(
    document_id: uuid.UUID,
    user: User = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    document = await DocumentService.verify_document(db, document_id, user.id)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}")
async def delete_document(
    document_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await DocumentService.delete_document(db, document_id)
    return {"message": "Document deleted successfully"}

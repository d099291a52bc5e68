"""Documents service layer."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.audit import create_audit_entry, utcnow
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, get_or_404
from hr_api.core_hr.models import Employee
from hr_api.documents.models import Document
from hr_api.documents.schemas import DocumentCreate, DocumentResponse, DocumentUpdate

logger = logging.getLogger(__name__)

_OPTIONS = (selectinload(Document.employee),)


class DocumentService:

    @staticmethod
    async def list_documents(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        employee_id: Optional[uuid.UUID] = None,
        document_type: Optional[str] = None,
        is_verified: Optional[bool] = None,
    ) -> PaginatedResponse:
        query = select(Document).options(*_OPTIONS).order_by(Document.created_at.desc())
        query = apply_filters(
            query,
            Document,
            {
                "employee_id": employee_id,
                "document_type": document_type,
                "is_verified": is_verified,
            },
        )
        return await paginate(db, query, pagination, model=Document, schema=DocumentResponse)

    @staticmethod
    async def get_document(db: AsyncSession, document_id: uuid.UUID) -> Document:
        return await get_or_404(db, Document, document_id, options=_OPTIONS)

    @staticmethod
    async def create_document(db: AsyncSession, data: DocumentCreate) -> Document:
        await ensure_exists(db, Employee, data.employee_id)

        document = Document(**data.model_dump())
        db.add(document)
        await db.flush()
        logger.info("Created document %s for employee %s", document.id, document.employee_id)
        return await DocumentService.get_document(db, document.id)

    @staticmethod
    async def update_document(
        db: AsyncSession,
        document_id: uuid.UUID,
        data: DocumentUpdate,
    ) -> Document:
        document = await DocumentService.get_document(db, document_id)
        apply_changes(document, data.model_dump(exclude_unset=True))
        await db.flush()
        return await DocumentService.get_document(db, document_id)

    @staticmethod
    async def verify_document(
        db: AsyncSession,
        document_id: uuid.UUID,
        verifier_id: uuid.UUID,
    ) -> Document:
        document = await DocumentService.get_document(db, document_id)
        document.is_verified = True
        document.verified_at = utcnow()
        document.verified_by = verifier_id
        await db.flush()

        await create_audit_entry(
            db,
            action="verify",
            entity_type="document",
            entity_id=document.id,
            actor_id=verifier_id,
            new_values={"is_verified": True},
        )
        logger.info("Verified document %s", document_id)
        return await DocumentService.get_document(db, document_id)

    @staticmethod
    async def delete_document(db: AsyncSession, document_id: uuid.UUID) -> None:
        document = await DocumentService.get_document(db, document_id)
        await db.delete(document)
        await db.flush()
        logger.info("Deleted document %s", document_id)

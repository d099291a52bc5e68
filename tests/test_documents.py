"""Document tests: metadata CRUD and verification."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import select

from hr_api.common.audit import AuditTrail
from hr_api.common.exceptions import NotFoundException
from hr_api.documents.schemas import DocumentCreate, DocumentUpdate
from hr_api.documents.service import DocumentService
from tests.conftest import page_params


async def _document(db, employee_id, **overrides):
    fields = dict(
        employee_id=employee_id,
        document_type="PASSPORT",
        file_name="passport.pdf",
        file_path="/documents/passport.pdf",
        file_size=48213,
        mime_type="application/pdf",
    )
    fields.update(overrides)
    return await DocumentService.create_document(db, DocumentCreate(**fields))


async def test_create_document_unverified(db, test_employee):
    document = await _document(db, test_employee.id)
    assert document.is_verified is False
    assert document.verified_by is None
    assert document.employee.id == test_employee.id


async def test_create_document_unknown_employee(db):
    with pytest.raises(NotFoundException):
        await _document(db, uuid.uuid4())


async def test_update_document_metadata(db, test_employee):
    document = await _document(db, test_employee.id)
    updated = await DocumentService.update_document(
        db, document.id, DocumentUpdate(file_name="passport-2025.pdf"),
    )
    assert updated.file_name == "passport-2025.pdf"
    assert updated.mime_type == "application/pdf"


async def test_verify_document(db, test_employee, admin_user):
    document = await _document(db, test_employee.id)
    verified = await DocumentService.verify_document(db, document.id, admin_user.id)
    assert verified.is_verified is True
    assert verified.verified_by == admin_user.id
    assert verified.verified_at is not None

    entry = (await db.execute(
        select(AuditTrail).where(AuditTrail.entity_id == document.id),
    )).scalars().one()
    assert entry.action == "verify"
    assert entry.actor_id == admin_user.id


async def test_list_filters(db, test_employee, admin_user):
    passport = await _document(db, test_employee.id)
    await _document(db, test_employee.id, document_type="CONTRACT", file_name="contract.pdf")
    await DocumentService.verify_document(db, passport.id, admin_user.id)

    contracts = await DocumentService.list_documents(db, page_params(), document_type="CONTRACT")
    assert [d.file_name for d in contracts.data] == ["contract.pdf"]

    verified = await DocumentService.list_documents(db, page_params(), is_verified=True)
    assert [d.id for d in verified.data] == [passport.id]


async def test_delete_document(db, test_employee):
    document = await _document(db, test_employee.id)
    await DocumentService.delete_document(db, document.id)
    with pytest.raises(NotFoundException):
        await DocumentService.get_document(db, document.id)


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_document_flow(client, auth_headers, employee_headers, test_employee):
    created = await client.post(
        "/api/v1/documents",
        json={
            "employee_id": str(test_employee.id),
            "document_type": "ID_CARD",
            "file_name": "id.png",
            "file_path": "/documents/id.png",
            "file_size": 1024,
            "mime_type": "image/png",
        },
        headers=employee_headers,
    )
    assert created.status_code == 201
    document_id = created.json()["id"]

    forbidden = await client.patch(
        f"/api/v1/documents/{document_id}/verify", headers=employee_headers,
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["title"] == "Forbidden"

    verified = await client.patch(
        f"/api/v1/documents/{document_id}/verify", headers=auth_headers,
    )
    assert verified.status_code == 200
    assert verified.json()["is_verified"] is True

    deleted = await client.delete(f"/api/v1/documents/{document_id}", headers=auth_headers)
    assert deleted.json() == {"message": "Document deleted successfully"}


async def test_http_document_negative_size(client, auth_headers, test_employee):
    resp = await client.post(
        "/api/v1/documents",
        json={
            "employee_id": str(test_employee.id),
            "document_type": "OTHER",
            "file_name": "x.txt",
            "file_path": "/documents/x.txt",
            "file_size": -1,
            "mime_type": "text/plain",
        },
        headers=auth_headers,
    )
    assert resp.status_code == 422
    assert "file_size" in resp.json()["errors"]

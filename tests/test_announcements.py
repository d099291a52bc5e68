"""Announcement tests: drafts, publication stamping and filters."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from hr_api.announcements.schemas import AnnouncementCreate, AnnouncementUpdate
from hr_api.announcements.service import AnnouncementService
from hr_api.common.constants import AnnouncementStatus, AnnouncementType, Priority
from hr_api.common.exceptions import NotFoundException
from tests.conftest import page_params


async def _announcement(db, company_id, **overrides):
    fields = dict(
        title="Office closed Friday",
        content="The office will be closed for maintenance.",
        company_id=company_id,
    )
    fields.update(overrides)
    return await AnnouncementService.create_announcement(db, AnnouncementCreate(**fields))


class TestPublication:

    async def test_draft_has_no_publication_time(self, db, test_company):
        announcement = await _announcement(db, test_company.id)
        assert announcement.status == AnnouncementStatus.DRAFT
        assert announcement.type == AnnouncementType.GENERAL
        assert announcement.priority == Priority.MEDIUM
        assert announcement.published_at is None

    async def test_publish_on_create_stamps_time(self, db, test_company):
        announcement = await _announcement(
            db, test_company.id, status=AnnouncementStatus.PUBLISHED,
        )
        assert announcement.published_at is not None

    async def test_explicit_publication_time_kept(self, db, test_company):
        when = datetime(2025, 5, 1, 8, 0, tzinfo=timezone.utc)
        announcement = await _announcement(
            db, test_company.id, status=AnnouncementStatus.PUBLISHED, published_at=when,
        )
        assert announcement.published_at.replace(tzinfo=timezone.utc) == when

    async def test_publish_later_stamps_once(self, db, test_company):
        announcement = await _announcement(db, test_company.id)
        published = await AnnouncementService.update_announcement(
            db, announcement.id, AnnouncementUpdate(status=AnnouncementStatus.PUBLISHED),
        )
        first_stamp = published.published_at
        assert first_stamp is not None

        archived = await AnnouncementService.update_announcement(
            db, announcement.id, AnnouncementUpdate(status=AnnouncementStatus.ARCHIVED),
        )
        republished = await AnnouncementService.update_announcement(
            db, announcement.id, AnnouncementUpdate(status=AnnouncementStatus.PUBLISHED),
        )
        assert archived.published_at == first_stamp
        assert republished.published_at == first_stamp


async def test_unknown_company(db):
    with pytest.raises(NotFoundException):
        await _announcement(db, uuid.uuid4())


async def test_list_filters(db, test_company):
    await _announcement(db, test_company.id)
    await _announcement(
        db, test_company.id,
        title="Holiday party",
        type=AnnouncementType.EVENT,
        status=AnnouncementStatus.PUBLISHED,
    )

    events = await AnnouncementService.list_announcements(
        db, page_params(), type=AnnouncementType.EVENT,
    )
    assert [a.title for a in events.data] == ["Holiday party"]

    drafts = await AnnouncementService.list_announcements(
        db, page_params(), status=AnnouncementStatus.DRAFT,
    )
    assert [a.title for a in drafts.data] == ["Office closed Friday"]


async def test_delete_announcement(db, test_company):
    announcement = await _announcement(db, test_company.id)
    await AnnouncementService.delete_announcement(db, announcement.id)
    with pytest.raises(NotFoundException):
        await AnnouncementService.get_announcement(db, announcement.id)


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_announcement_flow(client, auth_headers, admin_user, test_company):
    created = await client.post(
        "/api/v1/announcements",
        json={
            "title": "New benefits portal",
            "content": "Enrollment opens Monday.",
            "priority": "HIGH",
            "company_id": str(test_company.id),
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["created_by"] == str(admin_user.id)
    assert body["published_at"] is None

    published = await client.patch(
        f"/api/v1/announcements/{body['id']}",
        json={"status": "PUBLISHED"},
        headers=auth_headers,
    )
    assert published.status_code == 200
    assert published.json()["published_at"] is not None

    deleted = await client.delete(f"/api/v1/announcements/{body['id']}", headers=auth_headers)
    assert deleted.json() == {"message": "Announcement deleted successfully"}


async def test_http_invalid_priority(client, auth_headers, test_company):
    resp = await client.post(
        "/api/v1/announcements",
        json={
            "title": "x",
            "content": "y",
            "priority": "CRITICAL",
            "company_id": str(test_company.id),
        },
        headers=auth_headers,
    )
    assert resp.status_code == 422

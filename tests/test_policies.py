"""Policy tests: company policies, versions and effective dates."""

from __future__ import annotations

import uuid
from datetime import date

import pytest

from hr_api.common.exceptions import NotFoundException, ValidationException
from hr_api.policies.schemas import PolicyCreate, PolicyUpdate
from hr_api.policies.service import PolicyService
from tests.conftest import page_params


async def _policy(db, company_id, **overrides):
    fields = dict(
        title="Remote Work",
        content="Employees may work remotely up to three days a week.",
        category="Workplace",
        company_id=company_id,
        effective_date=date(2025, 1, 1),
    )
    fields.update(overrides)
    return await PolicyService.create_policy(db, PolicyCreate(**fields))


async def test_create_policy_defaults(db, test_company, admin_user):
    policy = await PolicyService.create_policy(
        db,
        PolicyCreate(
            title="Code of Conduct",
            content="Be excellent to each other.",
            category="Ethics",
            company_id=test_company.id,
        ),
        created_by=admin_user.id,
    )
    assert policy.version == "1.0"
    assert policy.is_active is True
    assert policy.created_by == admin_user.id
    assert policy.company.name == test_company.name


async def test_unknown_company(db):
    with pytest.raises(NotFoundException):
        await _policy(db, uuid.uuid4())


async def test_expiry_before_effective(db, test_company):
    with pytest.raises(ValidationException) as exc:
        await _policy(db, test_company.id, expiry_date=date(2024, 12, 31))
    assert "expiry_date" in exc.value.errors


async def test_update_checks_stored_effective_date(db, test_company):
    policy = await _policy(db, test_company.id)
    with pytest.raises(ValidationException):
        await PolicyService.update_policy(
            db, policy.id, PolicyUpdate(expiry_date=date(2024, 6, 1)),
        )


async def test_bump_version(db, test_company):
    policy = await _policy(db, test_company.id)
    updated = await PolicyService.update_policy(
        db, policy.id, PolicyUpdate(version="2.0", content="Up to four days a week."),
    )
    assert updated.version == "2.0"
    assert updated.content == "Up to four days a week."


async def test_list_filters(db, test_company):
    await _policy(db, test_company.id)
    await _policy(db, test_company.id, title="Old Dress Code", category="Dress", is_active=False)

    active = await PolicyService.list_policies(db, page_params(), is_active=True)
    assert [p.title for p in active.data] == ["Remote Work"]

    dress = await PolicyService.list_policies(db, page_params(), category="Dress")
    assert [p.title for p in dress.data] == ["Old Dress Code"]


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_policy_flow(client, auth_headers, admin_user, test_company):
    created = await client.post(
        "/api/v1/policies",
        json={
            "title": "Travel Policy",
            "content": "Economy class for flights under six hours.",
            "category": "Travel",
            "company_id": str(test_company.id),
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["created_by"] == str(admin_user.id)
    assert body["company"]["id"] == str(test_company.id)

    patched = await client.patch(
        f"/api/v1/policies/{body['id']}", json={"is_active": False}, headers=auth_headers,
    )
    assert patched.json()["is_active"] is False

    deleted = await client.delete(f"/api/v1/policies/{body['id']}", headers=auth_headers)
    assert deleted.json() == {"message": "Policy deleted successfully"}

    gone = await client.get(f"/api/v1/policies/{body['id']}", headers=auth_headers)
    assert gone.status_code == 404


async def test_http_policy_missing_content(client, auth_headers, test_company):
    resp = await client.post(
        "/api/v1/policies",
        json={"title": "Empty", "category": "Misc", "company_id": str(test_company.id)},
        headers=auth_headers,
    )
    assert resp.status_code == 422
    assert "content" in resp.json()["errors"]

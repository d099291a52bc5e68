"""Skills tests: catalogue, categories and employee skill records."""

from __future__ import annotations

import uuid
from datetime import date

import pytest

from hr_api.common.constants import SkillLevel
from hr_api.common.exceptions import ConflictError, NotFoundException, ValidationException
from hr_api.skills.schemas import (
    EmployeeSkillCreate,
    EmployeeSkillUpdate,
    SkillCreate,
    SkillUpdate,
)
from hr_api.skills.service import EmployeeSkillService, SkillService
from tests.conftest import make_employee, page_params


async def _skill(db, name="Python", category="Programming", **kw):
    return await SkillService.create_skill(db, SkillCreate(name=name, category=category, **kw))


async def _employee_skill(db, employee_id, skill_id, **overrides):
    fields = dict(employee_id=employee_id, skill_id=skill_id, level=SkillLevel.ADVANCED)
    fields.update(overrides)
    return await EmployeeSkillService.create_employee_skill(db, EmployeeSkillCreate(**fields))


# ── Catalogue ───────────────────────────────────────────────────────


class TestSkillCatalogue:

    async def test_duplicate_name(self, db):
        await _skill(db)
        with pytest.raises(ConflictError):
            await _skill(db)

    async def test_rename_conflict(self, db):
        await _skill(db)
        go = await _skill(db, name="Go")
        with pytest.raises(ConflictError):
            await SkillService.update_skill(db, go.id, SkillUpdate(name="Python"))

    async def test_categories_distinct_and_sorted(self, db):
        await _skill(db)
        await _skill(db, name="Go")
        await _skill(db, name="Negotiation", category="Soft Skills")
        await _skill(db, name="Misc", category=None)

        assert await SkillService.list_categories(db) == ["Programming", "Soft Skills"]

    async def test_list_by_category_is_case_insensitive(self, db):
        await _skill(db)
        await _skill(db, name="Negotiation", category="Soft Skills")

        result = await SkillService.list_skills(db, page_params(), category="soft skills")
        assert [s.name for s in result.data] == ["Negotiation"]

    async def test_list_sorted_by_name(self, db):
        await _skill(db, name="Terraform", category="Infra")
        await _skill(db, name="Ansible", category="Infra")
        result = await SkillService.list_skills(db, page_params())
        assert [s.name for s in result.data] == ["Ansible", "Terraform"]

    async def test_employee_count(self, db, test_employee):
        skill = await _skill(db)
        await _employee_skill(db, test_employee.id, skill.id)
        refreshed = await SkillService.get_skill(db, skill.id)
        assert refreshed.employee_count == 1


# ── Employee skills ─────────────────────────────────────────────────


class TestEmployeeSkills:

    async def test_create_embeds_skill_and_employee(self, db, test_employee):
        skill = await _skill(db)
        record = await _employee_skill(db, test_employee.id, skill.id, years_of_experience=5)
        assert record.skill.name == "Python"
        assert record.employee.id == test_employee.id
        assert record.certified is False

    async def test_same_skill_twice(self, db, test_employee):
        skill = await _skill(db)
        await _employee_skill(db, test_employee.id, skill.id)
        with pytest.raises(ConflictError):
            await _employee_skill(db, test_employee.id, skill.id, level=SkillLevel.EXPERT)

    async def test_unknown_skill(self, db, test_employee):
        with pytest.raises(NotFoundException):
            await _employee_skill(db, test_employee.id, uuid.uuid4())

    async def test_expiry_before_certification(self, db, test_employee):
        skill = await _skill(db)
        with pytest.raises(ValidationException) as exc:
            await _employee_skill(
                db, test_employee.id, skill.id,
                certified=True,
                certified_at=date(2024, 6, 1),
                expires_at=date(2023, 6, 1),
            )
        assert "expires_at" in exc.value.errors

    async def test_update_checks_stored_certification_date(self, db, test_employee):
        skill = await _skill(db)
        record = await _employee_skill(
            db, test_employee.id, skill.id, certified=True, certified_at=date(2024, 6, 1),
        )
        with pytest.raises(ValidationException):
            await EmployeeSkillService.update_employee_skill(
                db, record.id, EmployeeSkillUpdate(expires_at=date(2024, 1, 1)),
            )

    async def test_level_up(self, db, test_employee):
        skill = await _skill(db)
        record = await _employee_skill(db, test_employee.id, skill.id)
        updated = await EmployeeSkillService.update_employee_skill(
            db, record.id, EmployeeSkillUpdate(level=SkillLevel.EXPERT),
        )
        assert updated.level == SkillLevel.EXPERT

    async def test_list_for_employee(self, db, test_employee):
        python = await _skill(db)
        go = await _skill(db, name="Go")
        other = await make_employee(db)
        await _employee_skill(db, test_employee.id, python.id)
        await _employee_skill(db, other.id, go.id)

        records = await EmployeeSkillService.list_for_employee(db, test_employee.id)
        assert [r.skill.name for r in records] == ["Python"]

    async def test_list_for_unknown_employee(self, db):
        with pytest.raises(NotFoundException):
            await EmployeeSkillService.list_for_employee(db, uuid.uuid4())

    async def test_filter_by_level(self, db, test_employee):
        python = await _skill(db)
        go = await _skill(db, name="Go")
        await _employee_skill(db, test_employee.id, python.id, level=SkillLevel.BEGINNER)
        await _employee_skill(db, test_employee.id, go.id, level=SkillLevel.EXPERT)

        result = await EmployeeSkillService.list_employee_skills(
            db, page_params(), level=SkillLevel.EXPERT,
        )
        assert [r.skill.name for r in result.data] == ["Go"]


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_skill_endpoints(client, auth_headers, test_employee):
    created = await client.post(
        "/api/v1/skills",
        json={"name": "PostgreSQL", "category": "Databases"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    skill_id = created.json()["id"]

    categories = await client.get("/api/v1/skills/categories", headers=auth_headers)
    assert categories.json() == ["Databases"]

    record = await client.post(
        "/api/v1/employee-skills",
        json={
            "employee_id": str(test_employee.id),
            "skill_id": skill_id,
            "level": "INTERMEDIATE",
        },
        headers=auth_headers,
    )
    assert record.status_code == 201
    record_id = record.json()["id"]
    assert record.json()["skill"]["name"] == "PostgreSQL"

    mine = await client.get(
        f"/api/v1/employee-skills/employee/{test_employee.id}", headers=auth_headers,
    )
    assert [r["id"] for r in mine.json()] == [record_id]

    deleted = await client.delete(f"/api/v1/employee-skills/{record_id}", headers=auth_headers)
    assert deleted.json() == {"message": "Employee skill deleted successfully"}

    removed = await client.delete(f"/api/v1/skills/{skill_id}", headers=auth_headers)
    assert removed.json() == {"message": "Skill deleted successfully"}


async def test_http_invalid_level(client, auth_headers, test_employee):
    resp = await client.post(
        "/api/v1/employee-skills",
        json={
            "employee_id": str(test_employee.id),
            "skill_id": str(uuid.uuid4()),
            "level": "GURU",
        },
        headers=auth_headers,
    )
    assert resp.status_code == 422
    assert "level" in resp.json()["errors"]

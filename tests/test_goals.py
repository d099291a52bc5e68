"""Goal tests: CRUD, completed-goal freeze and progress updates."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from hr_api.common.constants import GoalCategory, GoalStatus
from hr_api.common.exceptions import BadRequestException, NotFoundException
from hr_api.goals.schemas import GoalCreate, GoalProgressUpdate, GoalUpdate
from hr_api.goals.service import GoalService
from tests.conftest import page_params


async def _goal(db, employee_id, **overrides):
    fields = dict(
        employee_id=employee_id,
        title="Ship the billing rewrite",
        category=GoalCategory.PROJECT,
        due_date=date(2025, 6, 30),
    )
    fields.update(overrides)
    return await GoalService.create_goal(db, GoalCreate(**fields))


async def test_create_goal_defaults(db, test_employee):
    goal = await _goal(db, test_employee.id)
    assert goal.status == GoalStatus.NOT_STARTED
    assert goal.completion_percentage == 0
    assert goal.employee.id == test_employee.id


async def test_create_goal_unknown_employee(db):
    with pytest.raises(NotFoundException):
        await _goal(db, uuid.uuid4())


async def test_create_goal_unknown_review(db, test_employee):
    with pytest.raises(NotFoundException) as exc:
        await _goal(db, test_employee.id, performance_review_id=uuid.uuid4())
    assert exc.value.title == "Performance review Not Found"


class TestProgress:

    async def test_partial_progress_starts_goal(self, db, test_employee):
        goal = await _goal(db, test_employee.id)
        updated = await GoalService.update_progress(
            db, goal.id, GoalProgressUpdate(progress=40, current_value=Decimal("4")),
        )
        assert updated.status == GoalStatus.IN_PROGRESS
        assert updated.completion_percentage == 40
        assert updated.current_value == Decimal("4")

    async def test_full_progress_completes_goal(self, db, test_employee):
        goal = await _goal(db, test_employee.id)
        updated = await GoalService.update_progress(
            db, goal.id, GoalProgressUpdate(progress=100, notes="done"),
        )
        assert updated.status == GoalStatus.COMPLETED
        assert updated.notes == "done"

    async def test_zero_progress_keeps_status(self, db, test_employee):
        goal = await _goal(db, test_employee.id, status=GoalStatus.ON_HOLD)
        updated = await GoalService.update_progress(db, goal.id, GoalProgressUpdate(progress=0))
        assert updated.status == GoalStatus.ON_HOLD

    @pytest.mark.parametrize("progress", [-1, 101])
    async def test_out_of_range(self, db, test_employee, progress):
        goal = await _goal(db, test_employee.id)
        with pytest.raises(BadRequestException):
            await GoalService.update_progress(db, goal.id, GoalProgressUpdate(progress=progress))


class TestCompletedGoal:

    async def test_edit_without_status_rejected(self, db, test_employee):
        goal = await _goal(db, test_employee.id, status=GoalStatus.COMPLETED)
        with pytest.raises(BadRequestException):
            await GoalService.update_goal(db, goal.id, GoalUpdate(title="Renamed"))

    async def test_reopen_allowed(self, db, test_employee):
        goal = await _goal(db, test_employee.id, status=GoalStatus.COMPLETED)
        reopened = await GoalService.update_goal(
            db, goal.id, GoalUpdate(status=GoalStatus.IN_PROGRESS, title="Renamed"),
        )
        assert reopened.status == GoalStatus.IN_PROGRESS
        assert reopened.title == "Renamed"

    def test_null_status_rejected_by_schema(self):
        with pytest.raises(ValidationError) as exc:
            GoalUpdate(status=None, title="Renamed")
        assert exc.value.errors()[0]["loc"] == ("status",)

    def test_nullable_field_may_be_cleared(self):
        assert GoalUpdate(description=None).model_dump(exclude_unset=True) == {"description": None}


async def test_list_goals_filters(db, test_employee):
    await _goal(db, test_employee.id)
    await _goal(db, test_employee.id, title="Learn Rust", category=GoalCategory.DEVELOPMENT)

    result = await GoalService.list_goals(
        db, page_params(), category=GoalCategory.DEVELOPMENT,
    )
    assert [g.title for g in result.data] == ["Learn Rust"]

    mine = await GoalService.list_goals(db, page_params(), employee_id=test_employee.id)
    assert mine.meta.total == 2


async def test_delete_goal(db, test_employee):
    goal = await _goal(db, test_employee.id)
    await GoalService.delete_goal(db, goal.id)
    with pytest.raises(NotFoundException):
        await GoalService.get_goal(db, goal.id)


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_goal_flow(client, auth_headers, test_employee):
    created = await client.post(
        "/api/v1/goals",
        json={
            "employee_id": str(test_employee.id),
            "title": "Reduce p95 latency",
            "category": "PERFORMANCE",
            "target_value": "200",
            "measurement_unit": "ms",
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    goal_id = created.json()["id"]

    progressed = await client.patch(
        f"/api/v1/goals/{goal_id}/progress", json={"progress": 100}, headers=auth_headers,
    )
    assert progressed.status_code == 200
    assert progressed.json()["status"] == "COMPLETED"

    frozen = await client.patch(
        f"/api/v1/goals/{goal_id}", json={"title": "Too late"}, headers=auth_headers,
    )
    assert frozen.status_code == 400
    assert frozen.json()["title"] == "Bad Request"

    deleted = await client.delete(f"/api/v1/goals/{goal_id}", headers=auth_headers)
    assert deleted.json() == {"message": "Goal deleted successfully"}


async def test_http_progress_out_of_range_is_400(client, auth_headers, test_employee):
    created = await client.post(
        "/api/v1/goals",
        json={"employee_id": str(test_employee.id), "title": "X", "category": "CAREER"},
        headers=auth_headers,
    )
    resp = await client.patch(
        f"/api/v1/goals/{created.json()['id']}/progress",
        json={"progress": 150},
        headers=auth_headers,
    )
    assert resp.status_code == 400


async def test_http_goal_weight_validated(client, auth_headers, test_employee):
    resp = await client.post(
        "/api/v1/goals",
        json={
            "employee_id": str(test_employee.id),
            "title": "Heavy",
            "category": "COMPANY",
            "weight": 2,
        },
        headers=auth_headers,
    )
    assert resp.status_code == 422


async def test_http_null_status_on_completed_goal_is_422(client, auth_headers, test_employee):
    created = await client.post(
        "/api/v1/goals",
        json={"employee_id": str(test_employee.id), "title": "Done", "category": "CAREER"},
        headers=auth_headers,
    )
    goal_id = created.json()["id"]
    await client.patch(
        f"/api/v1/goals/{goal_id}/progress", json={"progress": 100}, headers=auth_headers,
    )

    resp = await client.patch(
        f"/api/v1/goals/{goal_id}", json={"status": None, "title": "x"}, headers=auth_headers,
    )
    assert resp.status_code == 422
    assert "status" in resp.json()["errors"]

    unchanged = await client.get(f"/api/v1/goals/{goal_id}", headers=auth_headers)
    assert unchanged.json()["title"] == "Done"
    assert unchanged.json()["status"] == "COMPLETED"


@pytest.mark.parametrize("field", ["title", "category", "completion_percentage"])
async def test_http_null_required_goal_field_is_422(client, auth_headers, test_employee, field):
    created = await client.post(
        "/api/v1/goals",
        json={"employee_id": str(test_employee.id), "title": "Open", "category": "CAREER"},
        headers=auth_headers,
    )
    resp = await client.patch(
        f"/api/v1/goals/{created.json()['id']}", json={field: None}, headers=auth_headers,
    )
    assert resp.status_code == 422
    assert field in resp.json()["errors"]

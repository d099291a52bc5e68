"""Performance tests: cycles, reviews and the submit / complete workflow."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy import select

from hr_api.common.audit import AuditTrail
from hr_api.common.constants import CycleType, ReviewStatus, ReviewType
from hr_api.common.exceptions import (
    BadRequestException,
    ConflictError,
    NotFoundException,
    ValidationException,
)
from hr_api.performance.schemas import CycleCreate, CycleUpdate, ReviewCreate, ReviewUpdate
from hr_api.performance.service import PerformanceService
from tests.conftest import make_auth_headers, make_employee, make_user, page_params


async def _cycle(db, company_id, **overrides):
    fields = dict(
        name="FY2025 Annual",
        cycle_type=CycleType.ANNUAL,
        company_id=company_id,
        start_date=date(2025, 1, 1),
        end_date=date(2025, 12, 31),
    )
    fields.update(overrides)
    return await PerformanceService.create_cycle(db, CycleCreate(**fields))


async def _review(db, employee_id, reviewer_id, **overrides):
    fields = dict(
        employee_id=employee_id,
        reviewer_id=reviewer_id,
        period="2025",
        type=ReviewType.ANNUAL,
        due_date=date(2025, 12, 31),
    )
    fields.update(overrides)
    return await PerformanceService.create_review(db, ReviewCreate(**fields))


@pytest.fixture
async def reviewer(db, test_company):
    return await make_employee(db, first_name="Rita", company_id=test_company.id)


# ── Cycles ──────────────────────────────────────────────────────────


class TestCycles:

    async def test_create_cycle_defaults_to_planned(self, db, test_company):
        cycle = await _cycle(db, test_company.id)
        assert cycle.status.value == "PLANNED"
        assert cycle.review_count == 0

    async def test_end_before_start_rejected(self, db, test_company):
        with pytest.raises(ValidationException) as exc:
            await _cycle(db, test_company.id, end_date=date(2024, 12, 31))
        assert "end_date" in exc.value.errors

    async def test_review_window_checked(self, db, test_company):
        with pytest.raises(ValidationException) as exc:
            await _cycle(
                db,
                test_company.id,
                review_start_date=date(2025, 12, 15),
                review_end_date=date(2025, 12, 1),
            )
        assert "review_end_date" in exc.value.errors

    async def test_update_checks_merged_dates(self, db, test_company):
        cycle = await _cycle(db, test_company.id)
        with pytest.raises(ValidationException):
            await PerformanceService.update_cycle(
                db, cycle.id, CycleUpdate(start_date=date(2026, 6, 1)),
            )

    async def test_unknown_company(self, db):
        with pytest.raises(NotFoundException):
            await _cycle(db, uuid.uuid4())

    async def test_delete_cycle_with_reviews_conflicts(
        self, db, test_company, test_employee, reviewer,
    ):
        cycle = await _cycle(db, test_company.id)
        await _review(db, test_employee.id, reviewer.id, cycle_id=cycle.id)

        refreshed = await PerformanceService.get_cycle(db, cycle.id)
        assert refreshed.review_count == 1
        with pytest.raises(ConflictError):
            await PerformanceService.delete_cycle(db, cycle.id)

    async def test_list_cycles_newest_first(self, db, test_company):
        await _cycle(db, test_company.id, name="FY2024", start_date=date(2024, 1, 1),
                     end_date=date(2024, 12, 31))
        await _cycle(db, test_company.id, name="FY2025")

        result = await PerformanceService.list_cycles(db, page_params(), company_id=test_company.id)
        assert [c.name for c in result.data] == ["FY2025", "FY2024"]


# ── Reviews ─────────────────────────────────────────────────────────


class TestReviewWorkflow:

    async def test_create_review_embeds_people(self, db, test_employee, reviewer):
        review = await _review(db, test_employee.id, reviewer.id)
        assert review.status == ReviewStatus.DRAFT
        assert review.employee.id == test_employee.id
        assert review.reviewer.first_name == "Rita"
        assert review.cycle is None

    async def test_unknown_reviewer(self, db, test_employee):
        with pytest.raises(NotFoundException) as exc:
            await _review(db, test_employee.id, uuid.uuid4())
        assert exc.value.title == "Reviewer Not Found"

    async def test_unknown_cycle(self, db, test_employee, reviewer):
        with pytest.raises(NotFoundException):
            await _review(db, test_employee.id, reviewer.id, cycle_id=uuid.uuid4())

    async def test_submit_then_complete(self, db, test_employee, reviewer, admin_user):
        review = await _review(db, test_employee.id, reviewer.id)

        submitted = await PerformanceService.submit_review(db, review.id, actor_id=admin_user.id)
        assert submitted.status == ReviewStatus.PENDING_APPROVAL
        assert submitted.submitted_at is not None

        completed = await PerformanceService.complete_review(db, review.id, actor_id=admin_user.id)
        assert completed.status == ReviewStatus.COMPLETED
        assert completed.completed_at is not None

        actions = (await db.execute(
            select(AuditTrail.action)
            .where(AuditTrail.entity_id == review.id)
        )).scalars().all()
        assert sorted(actions) == ["complete", "submit"]

    async def test_submit_in_progress_allowed(self, db, test_employee, reviewer):
        review = await _review(db, test_employee.id, reviewer.id, status=ReviewStatus.IN_PROGRESS)
        submitted = await PerformanceService.submit_review(db, review.id)
        assert submitted.status == ReviewStatus.PENDING_APPROVAL

    async def test_submit_twice_rejected(self, db, test_employee, reviewer):
        review = await _review(db, test_employee.id, reviewer.id)
        await PerformanceService.submit_review(db, review.id)
        with pytest.raises(BadRequestException):
            await PerformanceService.submit_review(db, review.id)

    async def test_completed_review_is_frozen(self, db, test_employee, reviewer):
        review = await _review(db, test_employee.id, reviewer.id)
        await PerformanceService.complete_review(db, review.id)

        with pytest.raises(BadRequestException):
            await PerformanceService.complete_review(db, review.id)
        with pytest.raises(BadRequestException):
            await PerformanceService.update_review(db, review.id, ReviewUpdate(feedback="late"))
        with pytest.raises(BadRequestException):
            await PerformanceService.delete_review(db, review.id)

    async def test_update_review_assessments(self, db, test_employee, reviewer):
        review = await _review(db, test_employee.id, reviewer.id)
        updated = await PerformanceService.update_review(
            db,
            review.id,
            ReviewUpdate(overall_rating=4.5, self_assessment={"highlights": ["shipped v2"]}),
        )
        assert updated.overall_rating == 4.5
        assert updated.self_assessment == {"highlights": ["shipped v2"]}

    @pytest.mark.parametrize("status", [ReviewStatus.PENDING_APPROVAL, ReviewStatus.COMPLETED])
    async def test_transition_status_needs_its_endpoint(self, db, test_employee, reviewer, status):
        review = await _review(db, test_employee.id, reviewer.id)
        with pytest.raises(BadRequestException):
            await PerformanceService.update_review(db, review.id, ReviewUpdate(status=status))
        unchanged = await PerformanceService.get_review(db, review.id)
        assert unchanged.status == ReviewStatus.DRAFT
        assert unchanged.submitted_at is None
        assert unchanged.completed_at is None

    async def test_intermediate_status_allowed(self, db, test_employee, reviewer):
        review = await _review(db, test_employee.id, reviewer.id)
        updated = await PerformanceService.update_review(
            db, review.id, ReviewUpdate(status=ReviewStatus.SELF_REVIEW),
        )
        assert updated.status == ReviewStatus.SELF_REVIEW

    async def test_list_reviews_filter_by_status(self, db, test_employee, reviewer):
        first = await _review(db, test_employee.id, reviewer.id)
        await _review(db, test_employee.id, reviewer.id, period="2024", due_date=date(2024, 12, 31))
        await PerformanceService.submit_review(db, first.id)

        pending = await PerformanceService.list_reviews(
            db, page_params(), status=ReviewStatus.PENDING_APPROVAL,
        )
        assert [r.id for r in pending.data] == [first.id]


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_cycle_crud(client, auth_headers, test_company):
    created = await client.post(
        "/api/v1/performance/cycles",
        json={
            "name": "Q1 2025",
            "cycle_type": "QUARTERLY",
            "company_id": str(test_company.id),
            "start_date": "2025-01-01",
            "end_date": "2025-03-31",
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    cycle_id = created.json()["id"]

    patched = await client.patch(
        f"/api/v1/performance/cycles/{cycle_id}", json={"status": "ACTIVE"}, headers=auth_headers,
    )
    assert patched.json()["status"] == "ACTIVE"

    deleted = await client.delete(f"/api/v1/performance/cycles/{cycle_id}", headers=auth_headers)
    assert deleted.json() == {"message": "Performance cycle deleted successfully"}


async def test_http_review_workflow(client, db, auth_headers, test_employee, reviewer):
    created = await client.post(
        "/api/v1/performance/reviews",
        json={
            "employee_id": str(test_employee.id),
            "reviewer_id": str(reviewer.id),
            "period": "H1 2025",
            "type": "MID_YEAR",
            "due_date": "2025-07-15",
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    review_id = created.json()["id"]

    submitted = await client.patch(
        f"/api/v1/performance/reviews/{review_id}/submit", headers=auth_headers,
    )
    assert submitted.status_code == 200
    assert submitted.json()["status"] == "PENDING_APPROVAL"

    staff = await make_user(db)
    staff_headers = await make_auth_headers(db, staff)
    blocked = await client.patch(
        f"/api/v1/performance/reviews/{review_id}/complete", headers=staff_headers,
    )
    assert blocked.status_code == 403

    completed = await client.patch(
        f"/api/v1/performance/reviews/{review_id}/complete", headers=auth_headers,
    )
    assert completed.json()["status"] == "COMPLETED"

    frozen = await client.delete(
        f"/api/v1/performance/reviews/{review_id}", headers=auth_headers,
    )
    assert frozen.status_code == 400


async def test_http_review_rating_out_of_range(client, auth_headers, test_employee, reviewer):
    resp = await client.post(
        "/api/v1/performance/reviews",
        json={
            "employee_id": str(test_employee.id),
            "reviewer_id": str(reviewer.id),
            "period": "2025",
            "type": "ANNUAL",
            "due_date": "2025-12-31",
            "overall_rating": 7,
        },
        headers=auth_headers,
    )
    assert resp.status_code == 422


async def test_http_review_404(client, auth_headers):
    resp = await client.get(f"/api/v1/performance/reviews/{uuid.uuid4()}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["title"] == "Performance review Not Found"


async def _http_review(client, headers, employee_id, reviewer_id) -> str:
    created = await client.post(
        "/api/v1/performance/reviews",
        json={
            "employee_id": str(employee_id),
            "reviewer_id": str(reviewer_id),
            "period": "Q3 2025",
            "type": "QUARTERLY",
            "due_date": "2025-10-15",
        },
        headers=headers,
    )
    return created.json()["id"]


@pytest.mark.parametrize("status", ["COMPLETED", "PENDING_APPROVAL", "SELF_REVIEW"])
async def test_http_employee_cannot_set_review_status(
    client, auth_headers, employee_headers, test_employee, reviewer, status,
):
    review_id = await _http_review(client, auth_headers, test_employee.id, reviewer.id)

    resp = await client.patch(
        f"/api/v1/performance/reviews/{review_id}",
        json={"status": status},
        headers=employee_headers,
    )
    assert resp.status_code == 403

    detail = await client.get(f"/api/v1/performance/reviews/{review_id}", headers=auth_headers)
    assert detail.json()["status"] == "DRAFT"
    assert detail.json()["completed_at"] is None


async def test_http_employee_can_write_self_assessment(
    client, auth_headers, employee_headers, test_employee, reviewer,
):
    review_id = await _http_review(client, auth_headers, test_employee.id, reviewer.id)
    resp = await client.patch(
        f"/api/v1/performance/reviews/{review_id}",
        json={"self_assessment": {"summary": "Met all targets"}},
        headers=employee_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["self_assessment"] == {"summary": "Met all targets"}


async def test_http_manager_completion_through_patch_is_400(
    client, auth_headers, test_employee, reviewer,
):
    review_id = await _http_review(client, auth_headers, test_employee.id, reviewer.id)
    resp = await client.patch(
        f"/api/v1/performance/reviews/{review_id}",
        json={"status": "COMPLETED"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert "complete" in resp.json()["detail"]


@pytest.mark.parametrize("field", ["status", "due_date", "period"])
async def test_http_null_required_review_field_is_422(
    client, auth_headers, test_employee, reviewer, field,
):
    review_id = await _http_review(client, auth_headers, test_employee.id, reviewer.id)
    resp = await client.patch(
        f"/api/v1/performance/reviews/{review_id}", json={field: None}, headers=auth_headers,
    )
    assert resp.status_code == 422
    assert field in resp.json()["errors"]

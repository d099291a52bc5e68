"""Training tests: catalogue, enrollments and completion tracking."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from hr_api.common.constants import TrainingStatus, TrainingType
from hr_api.common.exceptions import ConflictError, NotFoundException
from hr_api.training.schemas import TrainingCreate, TrainingEnrollmentUpdate, TrainingUpdate
from hr_api.training.service import TrainingService
from tests.conftest import make_employee, page_params


async def _training(db, **overrides):
    fields = dict(
        title="Secure Coding 101",
        type=TrainingType.ONLINE,
        duration=6,
        cost=Decimal("199.00"),
    )
    fields.update(overrides)
    return await TrainingService.create_training(db, TrainingCreate(**fields))


async def test_create_training(db):
    training = await _training(db)
    assert training.is_required is False
    assert training.enrollment_count == 0
    assert training.enrollments == []


async def test_duplicate_title(db):
    await _training(db)
    with pytest.raises(ConflictError) as exc:
        await _training(db)
    assert exc.value.errors == {"title": ["'Secure Coding 101' is already in use."]}


async def test_rename_to_taken_title(db):
    await _training(db)
    other = await _training(db, title="Leadership Basics", type=TrainingType.WORKSHOP)
    with pytest.raises(ConflictError):
        await TrainingService.update_training(
            db, other.id, TrainingUpdate(title="Secure Coding 101"),
        )


async def test_list_search_and_filter(db):
    await _training(db)
    await _training(db, title="Fire Safety", type=TrainingType.IN_PERSON, is_required=True)

    required = await TrainingService.list_trainings(db, page_params(), is_required=True)
    assert [t.title for t in required.data] == ["Fire Safety"]

    searched = await TrainingService.list_trainings(db, page_params(), search="secure")
    assert [t.title for t in searched.data] == ["Secure Coding 101"]


class TestEnrollments:

    async def test_enroll_shows_on_detail(self, db, test_employee):
        training = await _training(db)
        enrollment = await TrainingService.enroll(db, training.id, test_employee.id)
        assert enrollment.status == TrainingStatus.ENROLLED
        assert enrollment.enrolled_at is not None

        detail = await TrainingService.get_training(db, training.id)
        assert detail.enrollment_count == 1
        assert [e.employee.id for e in detail.enrollments] == [test_employee.id]

    async def test_enroll_twice(self, db, test_employee):
        training = await _training(db)
        await TrainingService.enroll(db, training.id, test_employee.id)
        with pytest.raises(ConflictError):
            await TrainingService.enroll(db, training.id, test_employee.id)

    async def test_enroll_unknown_training(self, db, test_employee):
        with pytest.raises(NotFoundException):
            await TrainingService.enroll(db, uuid.uuid4(), test_employee.id)

    async def test_completion_stamps_time_once(self, db, test_employee):
        training = await _training(db)
        await TrainingService.enroll(db, training.id, test_employee.id)

        done = await TrainingService.update_enrollment(
            db,
            training.id,
            test_employee.id,
            TrainingEnrollmentUpdate(status=TrainingStatus.COMPLETED, score=92.5),
        )
        assert done.completed_at is not None
        assert done.score == 92.5
        first_completion = done.completed_at

        again = await TrainingService.update_enrollment(
            db, training.id, test_employee.id,
            TrainingEnrollmentUpdate(status=TrainingStatus.COMPLETED),
        )
        assert again.completed_at == first_completion
        assert again.score == 92.5

    async def test_update_missing_enrollment(self, db, test_employee):
        training = await _training(db)
        with pytest.raises(NotFoundException):
            await TrainingService.update_enrollment(
                db, training.id, test_employee.id,
                TrainingEnrollmentUpdate(status=TrainingStatus.IN_PROGRESS),
            )

    async def test_delete_blocked_until_unenrolled(self, db, test_employee):
        training = await _training(db)
        await TrainingService.enroll(db, training.id, test_employee.id)
        with pytest.raises(ConflictError):
            await TrainingService.delete_training(db, training.id)

        await TrainingService.unenroll(db, training.id, test_employee.id)
        await TrainingService.delete_training(db, training.id)


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_training_flow(client, db, auth_headers):
    learner = await make_employee(db, first_name="Lena")

    created = await client.post(
        "/api/v1/training",
        json={"title": "Kubernetes Deep Dive", "type": "CERTIFICATION", "duration": 24},
        headers=auth_headers,
    )
    assert created.status_code == 201
    training_id = created.json()["id"]

    enrolled = await client.post(
        f"/api/v1/training/{training_id}/enrollments",
        json={"employee_id": str(learner.id)},
        headers=auth_headers,
    )
    assert enrolled.status_code == 201

    completed = await client.patch(
        f"/api/v1/training/{training_id}/enrollments/{learner.id}",
        json={"status": "COMPLETED", "score": 88},
        headers=auth_headers,
    )
    assert completed.status_code == 200
    assert completed.json()["completed_at"] is not None

    detail = await client.get(f"/api/v1/training/{training_id}", headers=auth_headers)
    body = detail.json()
    assert body["enrollment_count"] == 1
    assert body["enrollments"][0]["employee"]["first_name"] == "Lena"

    removed = await client.delete(
        f"/api/v1/training/{training_id}/enrollments/{learner.id}", headers=auth_headers,
    )
    assert removed.json() == {"message": "Enrollment removed successfully"}

    deleted = await client.delete(f"/api/v1/training/{training_id}", headers=auth_headers)
    assert deleted.json() == {"message": "Training deleted successfully"}


async def test_http_score_out_of_range(client, auth_headers):
    created = await client.post(
        "/api/v1/training",
        json={"title": "Excel", "type": "ONLINE"},
        headers=auth_headers,
    )
    resp = await client.patch(
        f"/api/v1/training/{created.json()['id']}/enrollments/{uuid.uuid4()}",
        json={"status": "COMPLETED", "score": 120},
        headers=auth_headers,
    )
    assert resp.status_code == 422

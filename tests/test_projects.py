"""Project tests: projects, teams, team assignments and budget tracking."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from hr_api.common.constants import Priority, ProjectStatus
from hr_api.common.exceptions import ConflictError, NotFoundException
from hr_api.projects.schemas import (
    BudgetItemCreate,
    ProjectCreate,
    ProjectTeamCreate,
    ProjectUpdate,
    TeamCreate,
)
from hr_api.projects.service import ProjectService
from tests.conftest import page_params


async def _project(db, **overrides):
    fields = dict(name="Payroll Migration", budget=Decimal("50000.00"))
    fields.update(overrides)
    return await ProjectService.create_project(db, ProjectCreate(**fields))


async def _team(db, name="Platform", **kw):
    return await ProjectService.create_team(db, TeamCreate(name=name, **kw))


# ── Projects ────────────────────────────────────────────────────────


class TestProjects:

    async def test_create_defaults(self, db):
        project = await _project(db)
        assert project.status == ProjectStatus.PLANNING
        assert project.priority == Priority.MEDIUM
        assert project.currency == "USD"
        assert project.budget_spent == Decimal("0")
        assert project.teams == []

    async def test_manager_embedded(self, db, test_employee):
        project = await _project(db, manager_id=test_employee.id)
        assert project.manager.id == test_employee.id

    async def test_unknown_manager(self, db):
        with pytest.raises(NotFoundException) as exc:
            await _project(db, manager_id=uuid.uuid4())
        assert exc.value.title == "Manager Not Found"

    async def test_update_status(self, db):
        project = await _project(db)
        updated = await ProjectService.update_project(
            db, project.id, ProjectUpdate(status=ProjectStatus.IN_PROGRESS, priority=Priority.HIGH),
        )
        assert updated.status == ProjectStatus.IN_PROGRESS
        assert updated.priority == Priority.HIGH

    async def test_list_filters(self, db):
        await _project(db)
        await _project(db, name="Office Move", priority=Priority.URGENT)

        urgent = await ProjectService.list_projects(db, page_params(), priority=Priority.URGENT)
        assert [p.name for p in urgent.data] == ["Office Move"]


# ── Teams and assignments ───────────────────────────────────────────


class TestTeams:

    async def test_duplicate_team_name(self, db):
        await _team(db)
        with pytest.raises(ConflictError):
            await _team(db)

    async def test_unknown_lead(self, db):
        with pytest.raises(NotFoundException) as exc:
            await _team(db, lead_id=uuid.uuid4())
        assert exc.value.title == "Team lead Not Found"

    async def test_assign_and_remove(self, db):
        project = await _project(db)
        team = await _team(db)

        assignment = await ProjectService.assign_team(
            db, project.id, ProjectTeamCreate(team_id=team.id, role="Backend"),
        )
        assert assignment.team.name == "Platform"
        assert assignment.role == "Backend"

        detail = await ProjectService.get_project(db, project.id)
        assert [pt.team_id for pt in detail.teams] == [team.id]

        await ProjectService.remove_team(db, project.id, team.id)
        detail = await ProjectService.get_project(db, project.id)
        assert detail.teams == []

    async def test_assign_twice(self, db):
        project = await _project(db)
        team = await _team(db)
        await ProjectService.assign_team(db, project.id, ProjectTeamCreate(team_id=team.id))
        with pytest.raises(ConflictError):
            await ProjectService.assign_team(db, project.id, ProjectTeamCreate(team_id=team.id))

    async def test_remove_unassigned_team(self, db):
        project = await _project(db)
        team = await _team(db)
        with pytest.raises(NotFoundException):
            await ProjectService.remove_team(db, project.id, team.id)

    async def test_assigned_team_cannot_be_deleted(self, db):
        project = await _project(db)
        team = await _team(db)
        await ProjectService.assign_team(db, project.id, ProjectTeamCreate(team_id=team.id))

        assert (await ProjectService.get_team(db, team.id)).project_count == 1
        with pytest.raises(ConflictError):
            await ProjectService.delete_team(db, team.id)


# ── Budget ──────────────────────────────────────────────────────────


class TestBudget:

    async def test_budget_spent_is_sum_of_items(self, db):
        project = await _project(db)
        await ProjectService.add_budget_item(
            db, project.id, BudgetItemCreate(description="Licences", amount=Decimal("1500.00")),
        )
        await ProjectService.add_budget_item(
            db, project.id,
            BudgetItemCreate(description="Contractor", category="Labour", amount=Decimal("250.50")),
        )

        detail = await ProjectService.get_project(db, project.id)
        assert Decimal(str(detail.budget_spent)) == Decimal("1750.50")
        assert len(detail.budget_items) == 2

    async def test_delete_item_of_other_project(self, db):
        first = await _project(db)
        second = await _project(db, name="Other")
        item = await ProjectService.add_budget_item(
            db, first.id, BudgetItemCreate(description="Hardware", amount=Decimal("10")),
        )
        with pytest.raises(NotFoundException):
            await ProjectService.delete_budget_item(db, second.id, item.id)

    async def test_project_with_items_cannot_be_deleted(self, db):
        project = await _project(db)
        item = await ProjectService.add_budget_item(
            db, project.id, BudgetItemCreate(description="Hardware", amount=Decimal("10")),
        )
        with pytest.raises(ConflictError):
            await ProjectService.delete_project(db, project.id)

        await ProjectService.delete_budget_item(db, project.id, item.id)
        await ProjectService.delete_project(db, project.id)


# ── HTTP ────────────────────────────────────────────────────────────


async def test_http_project_flow(client, auth_headers, test_employee):
    created = await client.post(
        "/api/v1/projects",
        json={
            "name": "Benefits Portal",
            "priority": "HIGH",
            "budget": "20000",
            "manager_id": str(test_employee.id),
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    project_id = created.json()["id"]
    assert created.json()["manager"]["id"] == str(test_employee.id)

    team = await client.post("/api/v1/projects/teams", json={"name": "Web"}, headers=auth_headers)
    assert team.status_code == 201
    team_id = team.json()["id"]

    assigned = await client.post(
        f"/api/v1/projects/{project_id}/teams",
        json={"team_id": team_id, "role": "Frontend"},
        headers=auth_headers,
    )
    assert assigned.status_code == 201
    assert assigned.json()["team"]["name"] == "Web"

    item = await client.post(
        f"/api/v1/projects/{project_id}/budget-items",
        json={"description": "Design agency", "amount": "4000.25"},
        headers=auth_headers,
    )
    assert item.status_code == 201

    detail = await client.get(f"/api/v1/projects/{project_id}", headers=auth_headers)
    body = detail.json()
    assert Decimal(str(body["budget_spent"])) == Decimal("4000.25")
    assert [t["team_id"] for t in body["teams"]] == [team_id]

    blocked = await client.delete(f"/api/v1/projects/teams/{team_id}", headers=auth_headers)
    assert blocked.status_code == 409

    removed = await client.delete(
        f"/api/v1/projects/{project_id}/teams/{team_id}", headers=auth_headers,
    )
    assert removed.json() == {"message": "Team removed from project successfully"}

    deleted_item = await client.delete(
        f"/api/v1/projects/{project_id}/budget-items/{item.json()['id']}",
        headers=auth_headers,
    )
    assert deleted_item.json() == {"message": "Budget item deleted successfully"}

    deleted = await client.delete(f"/api/v1/projects/{project_id}", headers=auth_headers)
    assert deleted.json() == {"message": "Project deleted successfully"}


async def test_http_teams_list(client, auth_headers):
    for name in ("Zeta", "Alpha"):
        await client.post("/api/v1/projects/teams", json={"name": name}, headers=auth_headers)

    resp = await client.get("/api/v1/projects/teams", headers=auth_headers)
    assert resp.status_code == 200
    assert [t["name"] for t in resp.json()["data"]] == ["Alpha", "Zeta"]


async def test_http_negative_budget_item(client, auth_headers):
    project = await client.post("/api/v1/projects", json={"name": "X"}, headers=auth_headers)
    resp = await client.post(
        f"/api/v1/projects/{project.json()['id']}/budget-items",
        json={"description": "Refund", "amount": "-5"},
        headers=auth_headers,
    )
    assert resp.status_code == 422

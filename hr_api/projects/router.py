"""Projects router: projects, teams, team assignments and budget items.

Team routes are declared before ``/{project_id}`` so ``/teams`` is not
parsed as a project id.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user
from hr_api.auth.models import User
from hr_api.common.constants import Priority, ProjectStatus
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.projects.schemas import (
    BudgetItemCreate,
    BudgetItemResponse,
    ProjectCreate,
    ProjectDetail,
    ProjectResponse,
    ProjectTeamCreate,
    ProjectTeamResponse,
    ProjectUpdate,
    TeamCreate,
    TeamResponse,
)
from hr_api.projects.service import ProjectService

router = APIRouter(prefix="", tags=["projects"])


# ═════════════════════════════════════════════════════════════════════
# Teams
# ═════════════════════════════════════════════════════════════════════

@router.post("/teams", response_model=TeamResponse, status_code=201)
async def create_team(
    body: TeamCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return TeamResponse.model_validate(await ProjectService.create_team(db, body))


@router.get("/teams", response_model=PaginatedResponse[TeamResponse])
async def list_teams(
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService.list_teams(db, pagination)


@router.delete("/teams/{team_id}")
async def delete_team(
    team_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ProjectService.delete_team(db, team_id)
    return {"message": "Team deleted successfully"}


# ═════════════════════════════════════════════════════════════════════
# Projects
# ═════════════════════════════════════════════════════════════════════

@router.post("", response_model=ProjectDetail, status_code=201)
async def create_project(
    body: ProjectCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ProjectDetail.model_validate(await ProjectService.create_project(db, body))


@router.get("", response_model=PaginatedResponse[ProjectResponse])
async def list_projects(
    status: Optional[ProjectStatus] = Query(None),
    priority: Optional[Priority] = Query(None),
    manager_id: Optional[uuid.UUID] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService.list_projects(
        db, pagination, status=status, priority=priority, manager_id=manager_id,
    )


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ProjectDetail.model_validate(await ProjectService.get_project(db, project_id))


@router.patch("/{project_id}", response_model=ProjectDetail)
async def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = await ProjectService.update_project(db, project_id, body)
    return ProjectDetail.model_validate(project)


@router.delete("/{project_id}")
async def delete_project(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ProjectService.delete_project(db, project_id)
    return {"message": "Project deleted successfully"}


# ── Team assignments ─────────────────────────────────────────────────

@router.post(
    "/{project_id}/teams", response_model=ProjectTeamResponse, status_code=201,
)
async def assign_team(
    project_id: uuid.UUID,
    body: ProjectTeamCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    assignment = await ProjectService.assign_team(db, project_id, body)
    return ProjectTeamResponse.model_validate(assignment)


@router.delete("/{project_id}/teams/{team_id}")
async def remove_team(
    project_id: uuid.UUID,
    team_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ProjectService.remove_team(db, project_id, team_id)
    return {"message": "Team removed from project successfully"}


# ── Budget items ─────────────────────────────────────────────────────

@router.post(
    "/{project_id}/budget-items", response_model=BudgetItemResponse, status_code=201,
)
async def add_budget_item(
    project_id: uuid.UUID,
    body: BudgetItemCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item = await ProjectService.add_budget_item(db, project_id, body)
    return BudgetItemResponse.model_validate(item)


@router.delete("/{project_id}/budget-items/{item_id}")
async def delete_budget_item(
    project_id: uuid.UUID,
    item_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ProjectService.delete_budget_item(db, project_id, item_id)
    return {"message": "Budget item deleted successfully"}

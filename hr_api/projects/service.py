"""Projects service layer: projects, teams, assignments and budget items."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.constants import Priority, ProjectStatus
from hr_api.common.exceptions import ConflictError, NotFoundException
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, exists, get_or_404
from hr_api.core_hr.models import Employee
from hr_api.projects.models import BudgetItem, Project, ProjectTeam, Team
from hr_api.projects.schemas import (
    BudgetItemCreate,
    ProjectCreate,
    ProjectResponse,
    ProjectTeamCreate,
    ProjectUpdate,
    TeamCreate,
    TeamResponse,
)

logger = logging.getLogger(__name__)

_DETAIL_OPTIONS = (
    selectinload(Project.manager),
    selectinload(Project.teams).selectinload(ProjectTeam.team),
    selectinload(Project.budget_items),
)


class ProjectService:
    """Business logic for projects and everything attached to them."""

    # ═════════════════════════════════════════════════════════════════
    # Projects
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def list_projects(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        status: Optional[ProjectStatus] = None,
        priority: Optional[Priority] = None,
        manager_id: Optional[uuid.UUID] = None,
    ) -> PaginatedResponse:
        query = (
            select(Project)
            .options(selectinload(Project.manager))
            .order_by(Project.created_at.desc())
        )
        query = apply_filters(
            query,
            Project,
            {"status": status, "priority": priority, "manager_id": manager_id},
        )
        return await paginate(db, query, pagination, model=Project, schema=ProjectResponse)

    @staticmethod
    async def get_project(db: AsyncSession, project_id: uuid.UUID) -> Project:
        return await get_or_404(db, Project, project_id, options=_DETAIL_OPTIONS)

    @staticmethod
    async def create_project(db: AsyncSession, data: ProjectCreate) -> Project:
        await ensure_exists(db, Employee, data.manager_id, "Manager")

        project = Project(**data.model_dump())
        db.add(project)
        await db.flush()
        logger.info("Created project %s (%s)", project.id, project.name)
        return await ProjectService.get_project(db, project.id)

    @staticmethod
    async def update_project(
        db: AsyncSession,
        project_id: uuid.UUID,
        data: ProjectUpdate,
    ) -> Project:
        project = await ProjectService.get_project(db, project_id)
        changes = data.model_dump(exclude_unset=True)
        if "manager_id" in changes:
            await ensure_exists(db, Employee, changes["manager_id"], "Manager")

        apply_changes(project, changes)
        await db.flush()
        return await ProjectService.get_project(db, project_id)

    @staticmethod
    async def delete_project(db: AsyncSession, project_id: uuid.UUID) -> None:
        project = await ProjectService.get_project(db, project_id)
        if project.teams or project.budget_items:
            raise ConflictError(
                "Cannot delete a project with assigned teams or budget items. "
                "Remove them first."
            )
        await db.delete(project)
        await db.flush()
        logger.info("Deleted project %s", project_id)

    # ═════════════════════════════════════════════════════════════════
    # Teams
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def list_teams(db: AsyncSession, pagination: PaginationParams) -> PaginatedResponse:
        query = select(Team).options(selectinload(Team.lead)).order_by(Team.name.asc())
        return await paginate(db, query, pagination, model=Team, schema=TeamResponse)

    @staticmethod
    async def get_team(db: AsyncSession, team_id: uuid.UUID) -> Team:
        return await get_or_404(db, Team, team_id, options=(selectinload(Team.lead),))

    @staticmethod
    async def create_team(db: AsyncSession, data: TeamCreate) -> Team:
        await ensure_exists(db, Employee, data.lead_id, "Team lead")
        if await exists(db, Team, Team.name == data.name):
            raise ConflictError.duplicate("name", data.name)

        team = Team(**data.model_dump())
        db.add(team)
        await db.flush()
        logger.info("Created team %s (%s)", team.id, team.name)
        return await ProjectService.get_team(db, team.id)

    @staticmethod
    async def delete_team(db: AsyncSession, team_id: uuid.UUID) -> None:
        team = await ProjectService.get_team(db, team_id)
        if team.project_count:
            raise ConflictError("Cannot delete a team that is assigned to projects.")
        await db.delete(team)
        await db.flush()
        logger.info("Deleted team %s", team_id)

    # ── Assignments ─────────────────────────────────────────────────

    @staticmethod
    async def assign_team(
        db: AsyncSession,
        project_id: uuid.UUID,
        data: ProjectTeamCreate,
    ) -> ProjectTeam:
        await ensure_exists(db, Project, project_id)
        await ensure_exists(db, Team, data.team_id)
        if await exists(
            db,
            ProjectTeam,
            ProjectTeam.project_id == project_id,
            ProjectTeam.team_id == data.team_id,
        ):
            raise ConflictError("Team is already assigned to this project.")

        assignment = ProjectTeam(project_id=project_id, team_id=data.team_id, role=data.role)
        db.add(assignment)
        await db.flush()
        logger.info("Assigned team %s to project %s", data.team_id, project_id)
        return await get_or_404(
            db, ProjectTeam, assignment.id, "Team assignment",
            options=(selectinload(ProjectTeam.team),),
        )

    @staticmethod
    async def remove_team(
        db: AsyncSession,
        project_id: uuid.UUID,
        team_id: uuid.UUID,
    ) -> None:
        result = await db.execute(
            select(ProjectTeam).where(
                ProjectTeam.project_id == project_id,
                ProjectTeam.team_id == team_id,
            )
        )
        assignment = result.scalars().first()
        if assignment is None:
            raise NotFoundException("Team assignment", f"{project_id}/{team_id}")
        await db.delete(assignment)
        await db.flush()
        logger.info("Removed team %s from project %s", team_id, project_id)

    # ═════════════════════════════════════════════════════════════════
    # Budget items
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def add_budget_item(
        db: AsyncSession,
        project_id: uuid.UUID,
        data: BudgetItemCreate,
    ) -> BudgetItem:
        await ensure_exists(db, Project, project_id)

        item = BudgetItem(project_id=project_id, **data.model_dump())
        db.add(item)
        await db.flush()
        logger.info("Added budget item %s to project %s", item.id, project_id)
        return await get_or_404(db, BudgetItem, item.id, "Budget item")

    @staticmethod
    async def delete_budget_item(
        db: AsyncSession,
        project_id: uuid.UUID,
        item_id: uuid.UUID,
    ) -> None:
        item = await get_or_404(db, BudgetItem, item_id, "Budget item")
        if item.project_id != project_id:
            raise NotFoundException("Budget item", str(item_id))
        await db.delete(item)
        await db.flush()
        logger.info("Deleted budget item %s", item_id)

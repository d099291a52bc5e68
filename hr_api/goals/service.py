"""Goals service layer."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.constants import GoalCategory, GoalStatus
from hr_api.common.exceptions import BadRequestException
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, get_or_404
from hr_api.core_hr.models import Employee
from hr_api.goals.models import Goal
from hr_api.goals.schemas import GoalCreate, GoalProgressUpdate, GoalResponse, GoalUpdate
from hr_api.performance.models import PerformanceReview

logger = logging.getLogger(__name__)

_OPTIONS = (selectinload(Goal.employee),)


class GoalService:
    """Business logic for goals."""

    @staticmethod
    async def list_goals(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        employee_id: Optional[uuid.UUID] = None,
        status: Optional[GoalStatus] = None,
        category: Optional[GoalCategory] = None,
    ) -> PaginatedResponse:
        query = select(Goal).options(*_OPTIONS).order_by(Goal.created_at.desc())
        query = apply_filters(
            query,
            Goal,
            {"employee_id": employee_id, "status": status, "category": category},
        )
        return await paginate(db, query, pagination, model=Goal, schema=GoalResponse)

    @staticmethod
    async def get_goal(db: AsyncSession, goal_id: uuid.UUID) -> Goal:
        return await get_or_404(db, Goal, goal_id, options=_OPTIONS)

    @staticmethod
    async def create_goal(db: AsyncSession, data: GoalCreate) -> Goal:
        await ensure_exists(db, Employee, data.employee_id)
        await ensure_exists(
            db, PerformanceReview, data.performance_review_id, "Performance review",
        )

        goal = Goal(**data.model_dump())
        db.add(goal)
        await db.flush()
        logger.info("Created goal %s for employee %s", goal.id, goal.employee_id)
        return await GoalService.get_goal(db, goal.id)

    @staticmethod
    async def update_goal(
        db: AsyncSession,
        goal_id: uuid.UUID,
        data: GoalUpdate,
    ) -> Goal:
        goal = await GoalService.get_goal(db, goal_id)
        changes = data.model_dump(exclude_unset=True)

        # Completed goals are frozen unless the caller is reopening them
        if goal.status == GoalStatus.COMPLETED and changes.get("status") is None:
            raise BadRequestException(
                "Cannot update a completed goal without changing its status."
            )
        if "performance_review_id" in changes:
            await ensure_exists(
                db, PerformanceReview, changes["performance_review_id"], "Performance review",
            )

        apply_changes(goal, changes)
        await db.flush()
        return await GoalService.get_goal(db, goal_id)

    @staticmethod
    async def update_progress(
        db: AsyncSession,
        goal_id: uuid.UUID,
        data: GoalProgressUpdate,
    ) -> Goal:
        """Record progress; 100% completes the goal, anything above 0 starts it."""
        if not 0 <= data.progress <= 100:
            raise BadRequestException("Progress must be between 0 and 100.")

        goal = await GoalService.get_goal(db, goal_id)
        goal.completion_percentage = data.progress
        if data.current_value is not None:
            goal.current_value = data.current_value
        if data.notes is not None:
            goal.notes = data.notes

        if data.progress == 100:
            goal.status = GoalStatus.COMPLETED
        elif data.progress > 0:
            goal.status = GoalStatus.IN_PROGRESS

        await db.flush()
        logger.info("Goal %s progress set to %d%%", goal_id, data.progress)
        return await GoalService.get_goal(db, goal_id)

    @staticmethod
    async def delete_goal(db: AsyncSession, goal_id: uuid.UUID) -> None:
        goal = await GoalService.get_goal(db, goal_id)
        await db.delete(goal)
        await db.flush()
        logger.info("Deleted goal %s", goal_id)

"""Performance service layer: cycles, reviews and the review workflow.

Review workflow::

    DRAFT / IN_PROGRESS ──submit──▶ PENDING_APPROVAL ──complete──▶ COMPLETED

A COMPLETED review can no longer be edited or deleted.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.audit import create_audit_entry, utcnow
from hr_api.common.constants import (
    REVIEW_TRANSITION_STATUSES,
    SUBMITTABLE_REVIEW_STATUSES,
    ReviewStatus,
)
from hr_api.common.exceptions import (
    BadRequestException,
    ConflictError,
    ValidationException,
)
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, get_or_404
from hr_api.core_hr.models import Company, Employee
from hr_api.performance.models import PerformanceCycle, PerformanceReview
from hr_api.performance.schemas import (
    CycleCreate,
    CycleResponse,
    CycleUpdate,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)

logger = logging.getLogger(__name__)

_REVIEW_OPTIONS = (
    selectinload(PerformanceReview.employee),
    selectinload(PerformanceReview.reviewer),
    selectinload(PerformanceReview.cycle),
)


def _check_date_range(start: Optional[date], end: Optional[date], field: str) -> None:
    if start and end and end < start:
        raise ValidationException({field: ["End date cannot precede the start date."]})


class PerformanceService:
    """Business logic for performance cycles and reviews."""

    # ═════════════════════════════════════════════════════════════════
    # Cycles
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def list_cycles(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        company_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
    ) -> PaginatedResponse:
        query = select(PerformanceCycle).order_by(PerformanceCycle.start_date.desc())
        query = apply_filters(
            query, PerformanceCycle, {"company_id": company_id, "status": status},
        )
        return await paginate(
            db, query, pagination, model=PerformanceCycle, schema=CycleResponse,
        )

    @staticmethod
    async def get_cycle(db: AsyncSession, cycle_id: uuid.UUID) -> PerformanceCycle:
        return await get_or_404(db, PerformanceCycle, cycle_id, "Performance cycle")

    @staticmethod
    async def create_cycle(db: AsyncSession, data: CycleCreate) -> PerformanceCycle:
        await ensure_exists(db, Company, data.company_id)
        _check_date_range(data.start_date, data.end_date, "end_date")
        _check_date_range(data.review_start_date, data.review_end_date, "review_end_date")

        cycle = PerformanceCycle(**data.model_dump())
        db.add(cycle)
        await db.flush()
        logger.info("Created performance cycle %s (%s)", cycle.id, cycle.name)
        return await PerformanceService.get_cycle(db, cycle.id)

    @staticmethod
    async def update_cycle(
        db: AsyncSession,
        cycle_id: uuid.UUID,
        data: CycleUpdate,
    ) -> PerformanceCycle:
        cycle = await PerformanceService.get_cycle(db, cycle_id)
        changes = data.model_dump(exclude_unset=True)
        _check_date_range(
            changes.get("start_date", cycle.start_date),
            changes.get("end_date", cycle.end_date),
            "end_date",
        )
        _check_date_range(
            changes.get("review_start_date", cycle.review_start_date),
            changes.get("review_end_date", cycle.review_end_date),
            "review_end_date",
        )
        apply_changes(cycle, changes)
        await db.flush()
        return await PerformanceService.get_cycle(db, cycle_id)

    @staticmethod
    async def delete_cycle(db: AsyncSession, cycle_id: uuid.UUID) -> None:
        cycle = await PerformanceService.get_cycle(db, cycle_id)
        if cycle.review_count:
            raise ConflictError(
                "Cannot delete a performance cycle with existing reviews. "
                "Remove the reviews first."
            )
        await db.delete(cycle)
        await db.flush()
        logger.info("Deleted performance cycle %s", cycle_id)

    # ═════════════════════════════════════════════════════════════════
    # Reviews
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def list_reviews(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        employee_id: Optional[uuid.UUID] = None,
        reviewer_id: Optional[uuid.UUID] = None,
        cycle_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
    ) -> PaginatedResponse:
        query = (
            select(PerformanceReview)
            .options(*_REVIEW_OPTIONS)
            .order_by(PerformanceReview.due_date.desc())
        )
        query = apply_filters(
            query,
            PerformanceReview,
            {
                "employee_id": employee_id,
                "reviewer_id": reviewer_id,
                "cycle_id": cycle_id,
                "status": status,
            },
        )
        return await paginate(
            db, query, pagination, model=PerformanceReview, schema=ReviewResponse,
        )

    @staticmethod
    async def get_review(db: AsyncSession, review_id: uuid.UUID) -> PerformanceReview:
        return await get_or_404(
            db, PerformanceReview, review_id, "Performance review", options=_REVIEW_OPTIONS,
        )

    @staticmethod
    async def create_review(db: AsyncSession, data: ReviewCreate) -> PerformanceReview:
        await ensure_exists(db, Employee, data.employee_id)
        await ensure_exists(db, Employee, data.reviewer_id, "Reviewer")
        await ensure_exists(db, PerformanceCycle, data.cycle_id, "Performance cycle")

        review = PerformanceReview(**data.model_dump())
        db.add(review)
        await db.flush()
        logger.info("Created performance review %s for employee %s", review.id, review.employee_id)
        return await PerformanceService.get_review(db, review.id)

    @staticmethod
    async def update_review(
        db: AsyncSession,
        review_id: uuid.UUID,
        data: ReviewUpdate,
    ) -> PerformanceReview:
        review = await PerformanceService.get_review(db, review_id)
        if review.status == ReviewStatus.COMPLETED:
            raise BadRequestException("Cannot update a completed performance review.")

        changes = data.model_dump(exclude_unset=True)
        if changes.get("status") in REVIEW_TRANSITION_STATUSES:
            raise BadRequestException(
                f"Use the submit or complete endpoint to set status '{changes['status'].value}'."
            )
        if "cycle_id" in changes:
            await ensure_exists(db, PerformanceCycle, changes["cycle_id"], "Performance cycle")

        apply_changes(review, changes)
        await db.flush()
        return await PerformanceService.get_review(db, review_id)

    @staticmethod
    async def submit_review(
        db: AsyncSession,
        review_id: uuid.UUID,
        *,
        actor_id: Optional[uuid.UUID] = None,
    ) -> PerformanceReview:
        """Send a draft or in-progress review for approval."""
        review = await PerformanceService.get_review(db, review_id)
        if review.status not in SUBMITTABLE_REVIEW_STATUSES:
            raise BadRequestException(
                f"Cannot submit a review with status '{review.status.value}'. "
                "Only draft or in-progress reviews can be submitted."
            )

        old_status = review.status
        review.status = ReviewStatus.PENDING_APPROVAL
        review.submitted_at = utcnow()
        await db.flush()

        await create_audit_entry(
            db,
            action="submit",
            entity_type="performance_review",
            entity_id=review.id,
            actor_id=actor_id,
            old_values={"status": old_status.value},
            new_values={"status": review.status.value},
        )
        logger.info("Submitted performance review %s", review_id)
        return await PerformanceService.get_review(db, review_id)

    @staticmethod
    async def complete_review(
        db: AsyncSession,
        review_id: uuid.UUID,
        *,
        actor_id: Optional[uuid.UUID] = None,
    ) -> PerformanceReview:
        review = await PerformanceService.get_review(db, review_id)
        if review.status == ReviewStatus.COMPLETED:
            raise BadRequestException("Performance review is already completed.")

        old_status = review.status
        review.status = ReviewStatus.COMPLETED
        review.completed_at = utcnow()
        await db.flush()

        await create_audit_entry(
            db,
            action="complete",
            entity_type="performance_review",
            entity_id=review.id,
            actor_id=actor_id,
            old_values={"status": old_status.value},
            new_values={"status": review.status.value},
        )
        logger.info("Completed performance review %s", review_id)
        return await PerformanceService.get_review(db, review_id)

    @staticmethod
    async def delete_review(db: AsyncSession, review_id: uuid.UUID) -> None:
        review = await PerformanceService.get_review(db, review_id)
        if review.status == ReviewStatus.COMPLETED:
            raise BadRequestException("Cannot delete a completed performance review.")
        await db.delete(review)
        await db.flush()
        logger.info("Deleted performance review %s", review_id)

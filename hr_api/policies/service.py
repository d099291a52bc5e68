"""Policies service layer."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.exceptions import ValidationException
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, get_or_404
from hr_api.core_hr.models import Company
from hr_api.policies.models import Policy
from hr_api.policies.schemas import PolicyCreate, PolicyResponse, PolicyUpdate

logger = logging.getLogger(__name__)

_OPTIONS = (selectinload(Policy.company),)


def _check_dates(effective: Optional[date], expiry: Optional[date]) -> None:
    if effective and expiry and expiry < effective:
        raise ValidationException(
            {"expiry_date": ["Expiry date cannot precede the effective date."]}
        )


class PolicyService:

    @staticmethod
    async def list_policies(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        company_id: Optional[uuid.UUID] = None,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> PaginatedResponse:
        query = select(Policy).options(*_OPTIONS).order_by(Policy.created_at.desc())
        query = apply_filters(
            query,
            Policy,
            {"company_id": company_id, "category": category, "is_active": is_active},
        )
        return await paginate(db, query, pagination, model=Policy, schema=PolicyResponse)

    @staticmethod
    async def get_policy(db: AsyncSession, policy_id: uuid.UUID) -> Policy:
        return await get_or_404(db, Policy, policy_id, options=_OPTIONS)

    @staticmethod
    async def create_policy(
        db: AsyncSession,
        data: PolicyCreate,
        *,
        created_by: Optional[uuid.UUID] = None,
    ) -> Policy:
        await ensure_exists(db, Company, data.company_id)
        _check_dates(data.effective_date, data.expiry_date)

        policy = Policy(**data.model_dump(), created_by=created_by)
        db.add(policy)
        await db.flush()
        logger.info("Created policy %s (%s v%s)", policy.id, policy.title, policy.version)
        return await PolicyService.get_policy(db, policy.id)

    @staticmethod
    async def update_policy(
        db: AsyncSession,
        policy_id: uuid.UUID,
        data: PolicyUpdate,
    ) -> Policy:
        policy = await PolicyService.get_policy(db, policy_id)
        changes = data.model_dump(exclude_unset=True)
        _check_dates(
            changes.get("effective_date", policy.effective_date),
            changes.get("expiry_date", policy.expiry_date),
        )

        apply_changes(policy, changes)
        await db.flush()
        return await PolicyService.get_policy(db, policy_id)

    @staticmethod
    async def delete_policy(db: AsyncSession, policy_id: uuid.UUID) -> None:
        policy = await PolicyService.get_policy(db, policy_id)
        await db.delete(policy)
        await db.flush()
        logger.info("Deleted policy %s", policy_id)

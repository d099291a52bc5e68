"""Policies router."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user
from hr_api.auth.models import User
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.policies.schemas import PolicyCreate, PolicyResponse, PolicyUpdate
from hr_api.policies.service import PolicyService

router = APIRouter(prefix="", tags=["policies"])


@router.post("", response_model=PolicyResponse, status_code=201)
async def create_policy(
    body: PolicyCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    policy = await PolicyService.create_policy(db, body, created_by=user.id)
    return PolicyResponse.model_validate(policy)


@router.get("", response_model=PaginatedResponse[PolicyResponse])
async def list_policies(
    company_id: Optional[uuid.UUID] = Query(None),
    category: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await PolicyService.list_policies(
        db, pagination, company_id=company_id, category=category, is_active=is_active,
    )


@router.get("/{policy_id}", response_model=PolicyResponse)
async def get_policy(
    policy_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return PolicyResponse.model_validate(await PolicyService.get_policy(db, policy_id))


@router.patch("/{policy_id}", response_model=PolicyResponse)
async def update_policy(
    policy_id: uuid.UUID,
    body: PolicyUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return PolicyResponse.model_validate(await PolicyService.update_policy(db, policy_id, body))


@router.delete("/{policy_id}")
async def delete_policy(
    policy_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await PolicyService.delete_policy(db, policy_id)
    return {"message": "Policy deleted successfully"}

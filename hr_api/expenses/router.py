"""Expenses router: categories, expenses and the approval workflow.

All endpoints require authentication. Approve, reject and reimburse
require manager or above, and so does a PATCH that sets ``status``.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user, require_manager_for_status, require_role
from hr_api.auth.models import User
from hr_api.common.constants import ExpenseStatus, UserRole
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.database import get_db
from hr_api.expenses.schemas import (
    CategoryCreate,
    CategoryDetail,
    CategoryResponse,
    CategoryUpdate,
    ExpenseApproveRequest,
    ExpenseCreate,
    ExpenseRejectRequest,
    ExpenseResponse,
    ExpenseUpdate,
)
from hr_api.expenses.service import ExpenseService

router = APIRouter(prefix="", tags=["expenses"])


# ═════════════════════════════════════════════════════════════════════
# Categories (declared before /{expense_id} so the paths don't collide)
# ═════════════════════════════════════════════════════════════════════

@router.post("/categories", response_model=CategoryResponse, status_code=201)
async def create_category(
    body: CategoryCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category = await ExpenseService.create_category(db, body)
    return CategoryResponse.model_validate(category)


@router.get("/categories", response_model=PaginatedResponse[CategoryResponse])
async def list_categories(
    is_active: Optional[bool] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ExpenseService.list_categories(db, pagination, is_active=is_active)


@router.get("/categories/{category_id}", response_model=CategoryDetail)
async def get_category(
    category_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ExpenseService.get_category_detail(db, category_id)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    body: CategoryUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category = await ExpenseService.update_category(db, category_id, body)
    return CategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ExpenseService.delete_category(db, category_id)
    return {"message": "Expense category deleted successfully"}


# ═════════════════════════════════════════════════════════════════════
# Expenses
# ═════════════════════════════════════════════════════════════════════

# ── POST / ───────────────────────────────────────────────────────────

@router.post("", response_model=ExpenseResponse, status_code=201)
async def create_expense(
    body: ExpenseCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    expense = await ExpenseService.create_expense(db, body, actor_id=user.id)
    return ExpenseResponse.model_validate(expense)


# ── GET / ────────────────────────────────────────────────────────────

@router.get("", response_model=PaginatedResponse[ExpenseResponse])
async def list_expenses(
    employee_id: Optional[uuid.UUID] = Query(None),
    category_id: Optional[uuid.UUID] = Query(None),
    status: Optional[ExpenseStatus] = Query(None),
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await ExpenseService.list_expenses(
        db, pagination, employee_id=employee_id, category_id=category_id, status=status,
    )


# ── GET /{id} ────────────────────────────────────────────────────────

@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ExpenseResponse.model_validate(await ExpenseService.get_expense(db, expense_id))


# ── PATCH /{id} ──────────────────────────────────────────────────────

@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: uuid.UUID,
    body: ExpenseUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_manager_for_status(user, body.model_fields_set)
    expense = await ExpenseService.update_expense(db, expense_id, body)
    return ExpenseResponse.model_validate(expense)


# ── PATCH /{id}/approve ──────────────────────────────────────────────

@router.patch("/{expense_id}/approve", response_model=ExpenseResponse)
async def approve_expense(
    expense_id: uuid.UUID,
    body: Optional[ExpenseApproveRequest] = None,
    user: User = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    expense = await ExpenseService.approve_expense(
        db, expense_id, user.id, body.comments if body else None,
    )
    return ExpenseResponse.model_validate(expense)


# ── PATCH /{id}/reject ───────────────────────────────────────────────

@router.patch("/{expense_id}/reject", response_model=ExpenseResponse)
async def reject_expense(
    expense_id: uuid.UUID,
    body: Optional[ExpenseRejectRequest] = None,
    user: User = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    expense = await ExpenseService.reject_expense(
        db, expense_id, user.id, body.reason if body else None,
    )
    return ExpenseResponse.model_validate(expense)


# ── PATCH /{id}/reimburse ────────────────────────────────────────────

@router.patch("/{expense_id}/reimburse", response_model=ExpenseResponse)
async def reimburse_expense(
    expense_id: uuid.UUID,
    user: User = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    expense = await ExpenseService.reimburse_expense(db, expense_id, user.id)
    return ExpenseResponse.model_validate(expense)


# ── DELETE /{id} ─────────────────────────────────────────────────────

@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ExpenseService.delete_expense(db, expense_id)
    return {"message": "Expense deleted successfully"}

"""Expenses service layer: categories, expenses and the approval flow.

Expense lifecycle::

    PENDING ──approve──▶ APPROVED ──reimburse──▶ REIMBURSED
       └────reject───▶ REJECTED
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.common.audit import create_audit_entry, utcnow
from hr_api.common.constants import (
    EXPENSE_DECISION_STATUSES,
    LOCKED_EXPENSE_STATUSES,
    RECENT_EXPENSES_LIMIT,
    ExpenseStatus,
)
from hr_api.common.exceptions import BadRequestException, ConflictError
from hr_api.common.filters import apply_filters
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import apply_changes, ensure_exists, exists, get_or_404
from hr_api.core_hr.models import Employee
from hr_api.expenses.models import Expense, ExpenseCategory
from hr_api.expenses.schemas import (
    CategoryCreate,
    CategoryDetail,
    CategoryResponse,
    CategoryUpdate,
    ExpenseBrief,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
)

logger = logging.getLogger(__name__)

_EXPENSE_OPTIONS = (
    selectinload(Expense.employee),
    selectinload(Expense.category),
)


def _check_limit(category: ExpenseCategory, amount: Decimal) -> None:
    if category.max_amount is not None and amount > category.max_amount:
        raise BadRequestException(
            f"Amount {amount} exceeds the '{category.name}' limit of "
            f"{category.max_amount} {category.currency}."
        )


class ExpenseService:
    """Business logic for expense categories and expenses."""

    # ═════════════════════════════════════════════════════════════════
    # Categories
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def list_categories(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        is_active: Optional[bool] = None,
    ) -> PaginatedResponse:
        query = select(ExpenseCategory).order_by(ExpenseCategory.name.asc())
        query = apply_filters(query, ExpenseCategory, {"is_active": is_active})
        return await paginate(
            db, query, pagination, model=ExpenseCategory, schema=CategoryResponse,
        )

    @staticmethod
    async def get_category(db: AsyncSession, category_id: uuid.UUID) -> ExpenseCategory:
        return await get_or_404(db, ExpenseCategory, category_id, "Expense category")

    @staticmethod
    async def get_category_detail(
        db: AsyncSession,
        category_id: uuid.UUID,
    ) -> CategoryDetail:
        category = await ExpenseService.get_category(db, category_id)
        recent = (
            await db.execute(
                select(Expense)
                .where(Expense.category_id == category_id)
                .order_by(Expense.submitted_at.desc())
                .limit(RECENT_EXPENSES_LIMIT)
            )
        ).scalars().all()

        detail = CategoryDetail.model_validate(category)
        detail.recent_expenses = [ExpenseBrief.model_validate(e) for e in recent]
        return detail

    @staticmethod
    async def _check_category_name(
        db: AsyncSession,
        name: str,
        category_id: Optional[uuid.UUID] = None,
    ) -> None:
        conditions = [ExpenseCategory.name == name]
        if category_id is not None:
            conditions.append(ExpenseCategory.id != category_id)
        if await exists(db, ExpenseCategory, *conditions):
            raise ConflictError.duplicate("name", name)

    @staticmethod
    async def create_category(db: AsyncSession, data: CategoryCreate) -> ExpenseCategory:
        await ExpenseService._check_category_name(db, data.name)

        category = ExpenseCategory(**data.model_dump())
        db.add(category)
        await db.flush()
        logger.info("Created expense category %s (%s)", category.id, category.name)
        return await ExpenseService.get_category(db, category.id)

    @staticmethod
    async def update_category(
        db: AsyncSession,
        category_id: uuid.UUID,
        data: CategoryUpdate,
    ) -> ExpenseCategory:
        category = await ExpenseService.get_category(db, category_id)
        changes = data.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name and new_name != category.name:
            await ExpenseService._check_category_name(db, new_name, category_id)

        apply_changes(category, changes)
        await db.flush()
        return await ExpenseService.get_category(db, category_id)

    @staticmethod
    async def delete_category(db: AsyncSession, category_id: uuid.UUID) -> None:
        category = await ExpenseService.get_category(db, category_id)
        if category.expense_count:
            raise ConflictError(
                "Cannot delete an expense category that still has expenses."
            )
        await db.delete(category)
        await db.flush()
        logger.info("Deleted expense category %s", category_id)

    # ═════════════════════════════════════════════════════════════════
    # Expenses
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def list_expenses(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        employee_id: Optional[uuid.UUID] = None,
        category_id: Optional[uuid.UUID] = None,
        status: Optional[ExpenseStatus] = None,
    ) -> PaginatedResponse:
        query = (
            select(Expense)
            .options(*_EXPENSE_OPTIONS)
            .order_by(Expense.submitted_at.desc())
        )
        query = apply_filters(
            query,
            Expense,
            {"employee_id": employee_id, "category_id": category_id, "status": status},
        )
        return await paginate(db, query, pagination, model=Expense, schema=ExpenseResponse)

    @staticmethod
    async def get_expense(db: AsyncSession, expense_id: uuid.UUID) -> Expense:
        return await get_or_404(db, Expense, expense_id, options=_EXPENSE_OPTIONS)

    @staticmethod
    async def create_expense(
        db: AsyncSession,
        data: ExpenseCreate,
        *,
        actor_id: Optional[uuid.UUID] = None,
    ) -> Expense:
        await ensure_exists(db, Employee, data.employee_id)
        category = await ExpenseService.get_category(db, data.category_id)
        if not category.is_active:
            raise BadRequestException(f"Expense category '{category.name}' is inactive.")
        _check_limit(category, data.amount)

        expense = Expense(**data.model_dump())
        db.add(expense)
        await db.flush()

        await create_audit_entry(
            db,
            action="create",
            entity_type="expense",
            entity_id=expense.id,
            actor_id=actor_id,
            new_values={"amount": expense.amount, "currency": expense.currency},
        )
        logger.info("Created expense %s for employee %s", expense.id, expense.employee_id)
        return await ExpenseService.get_expense(db, expense.id)

    @staticmethod
    async def update_expense(
        db: AsyncSession,
        expense_id: uuid.UUID,
        data: ExpenseUpdate,
    ) -> Expense:
        expense = await ExpenseService.get_expense(db, expense_id)
        changes = data.model_dump(exclude_unset=True)

        if expense.status in LOCKED_EXPENSE_STATUSES and changes.get("status") is None:
            raise BadRequestException(
                f"Cannot update a {expense.status.value.lower()} expense "
                "without changing its status."
            )
        if changes.get("status") in EXPENSE_DECISION_STATUSES:
            raise BadRequestException(
                "Use the approve, reject or reimburse endpoint "
                f"to set status '{changes['status'].value}'."
            )
        if changes.get("amount") is not None:
            _check_limit(expense.category, changes["amount"])

        apply_changes(expense, changes)
        await db.flush()
        return await ExpenseService.get_expense(db, expense_id)

    # ── Approval flow ─────────────────────────────────────────────────

    @staticmethod
    async def approve_expense(
        db: AsyncSession,
        expense_id: uuid.UUID,
        approver_id: uuid.UUID,
        comments: Optional[str] = None,
    ) -> Expense:
        expense = await ExpenseService.get_expense(db, expense_id)
        if expense.status != ExpenseStatus.PENDING:
            raise BadRequestException(
                f"Cannot approve an expense with status '{expense.status.value}'."
            )

        old_status = expense.status
        expense.status = ExpenseStatus.APPROVED
        expense.approved_by = approver_id
        expense.approved_at = utcnow()
        if comments:
            expense.comments = comments
        await db.flush()

        await create_audit_entry(
            db,
            action="approve",
            entity_type="expense",
            entity_id=expense.id,
            actor_id=approver_id,
            old_values={"status": old_status.value},
            new_values={"status": expense.status.value},
        )
        logger.info("Approved expense %s", expense_id)
        return await ExpenseService.get_expense(db, expense_id)

    @staticmethod
    async def reject_expense(
        db: AsyncSession,
        expense_id: uuid.UUID,
        approver_id: uuid.UUID,
        reason: Optional[str] = None,
    ) -> Expense:
        expense = await ExpenseService.get_expense(db, expense_id)
        if expense.status != ExpenseStatus.PENDING:
            raise BadRequestException(
                f"Cannot reject an expense with status '{expense.status.value}'."
            )

        old_status = expense.status
        expense.status = ExpenseStatus.REJECTED
        expense.rejected_at = utcnow()
        if reason is not None:
            expense.comments = reason
        await db.flush()

        await create_audit_entry(
            db,
            action="reject",
            entity_type="expense",
            entity_id=expense.id,
            actor_id=approver_id,
            old_values={"status": old_status.value},
            new_values={"status": expense.status.value, "reason": reason},
        )
        logger.info("Rejected expense %s", expense_id)
        return await ExpenseService.get_expense(db, expense_id)

    @staticmethod
    async def reimburse_expense(
        db: AsyncSession,
        expense_id: uuid.UUID,
        actor_id: Optional[uuid.UUID] = None,
    ) -> Expense:
        expense = await ExpenseService.get_expense(db, expense_id)
        if expense.status != ExpenseStatus.APPROVED:
            raise BadRequestException("Only approved expenses can be reimbursed.")

        expense.status = ExpenseStatus.REIMBURSED
        expense.reimbursed_at = utcnow()
        await db.flush()

        await create_audit_entry(
            db,
            action="reimburse",
            entity_type="expense",
            entity_id=expense.id,
            actor_id=actor_id,
            old_values={"status": ExpenseStatus.APPROVED.value},
            new_values={"status": expense.status.value},
        )
        logger.info("Reimbursed expense %s", expense_id)
        return await ExpenseService.get_expense(db, expense_id)

    @staticmethod
    async def delete_expense(db: AsyncSession, expense_id: uuid.UUID) -> None:
        expense = await ExpenseService.get_expense(db, expense_id)
        if expense.status == ExpenseStatus.REIMBURSED:
            raise BadRequestException("Cannot delete a reimbursed expense.")
        await db.delete(expense)
        await db.flush()
        logger.info("Deleted expense %s", expense_id)

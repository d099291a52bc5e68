"""Expenses Pydantic v2 schemas: categories, expenses and approval payloads."""

import datetime as dt
import uuid
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_api.common.constants import DEFAULT_CURRENCY, ExpenseStatus
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.schemas import EmployeeSummary


# ═════════════════════════════════════════════════════════════════════
# Category
# ═════════════════════════════════════════════════════════════════════


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    max_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    is_active: bool = True


class CategoryUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "currency", "is_active"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    max_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    is_active: Optional[bool] = None


class CategoryBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    max_amount: Optional[Decimal] = None
    currency: str
    is_active: bool
    expense_count: int = 0
    created_at: datetime
    updated_at: datetime


class ExpenseBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    amount: Decimal
    currency: str
    date: dt.date
    status: ExpenseStatus
    submitted_at: datetime


class CategoryDetail(CategoryResponse):
    """Category plus its most recently submitted expenses."""

    recent_expenses: list[ExpenseBrief] = []


# ═════════════════════════════════════════════════════════════════════
# Expense
# ═════════════════════════════════════════════════════════════════════


class ExpenseCreate(BaseModel):
    employee_id: uuid.UUID
    category_id: uuid.UUID
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    description: str = Field(..., min_length=1)
    date: dt.date
    receipt: Optional[str] = Field(None, max_length=500)
    comments: Optional[str] = None


class ExpenseUpdate(PatchModel):
    """Employee and category are fixed once the expense exists."""

    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "amount",
            "currency",
            "description",
            "date",
            "status",
        }
    )

    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    receipt: Optional[str] = Field(None, max_length=500)
    status: Optional[ExpenseStatus] = None
    comments: Optional[str] = None


class ExpenseApproveRequest(BaseModel):
    comments: Optional[str] = Field(None, max_length=2000)


class ExpenseRejectRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=2000)


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    category_id: uuid.UUID
    amount: Decimal
    currency: str
    description: str
    date: dt.date
    receipt: Optional[str] = None
    status: ExpenseStatus
    comments: Optional[str] = None
    submitted_at: datetime
    approved_at: Optional[datetime] = None
    approved_by: Optional[uuid.UUID] = None
    rejected_at: Optional[datetime] = None
    reimbursed_at: Optional[datetime] = None
    employee: Optional[EmployeeSummary] = None
    category: Optional[CategoryBrief] = None
    created_at: datetime
    updated_at: datetime

"""Core HR Pydantic v2 schemas: request / response validation.

Naming conventions:
  - *Create / *Update  → request bodies (write)
  - *Response / *Detail → response bodies (read)
  - *Brief              → compact read representations embedded elsewhere
"""


import uuid
from datetime import date, datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hr_api.common.constants import CompanySize, EmployeeStatus, Gender
from hr_api.common.schemas import PatchModel


# ═════════════════════════════════════════════════════════════════════
# Shared / embedded
# ═════════════════════════════════════════════════════════════════════


class CompanyBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class DepartmentBrief(BaseModel):
    """Minimal department info embedded in other responses."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    code: Optional[str] = None


class EmployeeSummary(BaseModel):
    """Compact employee representation for managers, heads, reviewers."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_number: str
    first_name: str
    last_name: str
    email: str


# ═════════════════════════════════════════════════════════════════════
# Company
# ═════════════════════════════════════════════════════════════════════


class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    website: Optional[str] = Field(None, max_length=255)
    industry: Optional[str] = Field(None, max_length=100)
    size: Optional[CompanySize] = None
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None


class CompanyUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name"})

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    website: Optional[str] = Field(None, max_length=255)
    industry: Optional[str] = Field(None, max_length=100)
    size: Optional[CompanySize] = None
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[CompanySize] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    employee_count: int = 0
    department_count: int = 0
    created_at: datetime
    updated_at: datetime


# ═════════════════════════════════════════════════════════════════════
# Department
# ═════════════════════════════════════════════════════════════════════


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None
    code: Optional[str] = Field(None, max_length=20)
    company_id: Optional[uuid.UUID] = None
    parent_id: Optional[uuid.UUID] = None
    head_id: Optional[uuid.UUID] = None


class DepartmentUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name"})

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = None
    code: Optional[str] = Field(None, max_length=20)
    company_id: Optional[uuid.UUID] = None
    parent_id: Optional[uuid.UUID] = None
    head_id: Optional[uuid.UUID] = None


class DepartmentResponse(BaseModel):
    """Department with company, parent and head embedded."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    code: Optional[str] = None
    company_id: Optional[uuid.UUID] = None
    parent_id: Optional[uuid.UUID] = None
    head_id: Optional[uuid.UUID] = None
    company: Optional[CompanyBrief] = None
    parent: Optional[DepartmentBrief] = None
    head: Optional[EmployeeSummary] = None
    employee_count: int = 0
    created_at: datetime
    updated_at: datetime


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class EmployeeCreate(BaseModel):
    """POST /employees request body."""

    employee_number: str = Field(..., min_length=1, max_length=50)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None

    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, max_length=100)

    hire_date: date
    termination_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    emergency_contact_name: Optional[str] = Field(None, max_length=200)
    emergency_contact_phone: Optional[str] = Field(None, max_length=30)

    company_id: Optional[uuid.UUID] = None
    department_id: Optional[uuid.UUID] = None
    manager_id: Optional[uuid.UUID] = None
    user_id: Optional[uuid.UUID] = None


class EmployeeUpdate(PatchModel):
    """PATCH /employees/{id}: all fields optional."""

    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "employee_number",
            "first_name",
            "last_name",
            "email",
            "hire_date",
            "status",
        }
    )

    employee_number: Optional[str] = Field(None, min_length=1, max_length=50)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None

    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, max_length=100)

    hire_date: Optional[date] = None
    termination_date: Optional[date] = None
    status: Optional[EmployeeStatus] = None
    emergency_contact_name: Optional[str] = Field(None, max_length=200)
    emergency_contact_phone: Optional[str] = Field(None, max_length=30)

    company_id: Optional[uuid.UUID] = None
    department_id: Optional[uuid.UUID] = None
    manager_id: Optional[uuid.UUID] = None
    user_id: Optional[uuid.UUID] = None


class EmployeeResponse(BaseModel):
    """List representation."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_number: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    status: EmployeeStatus
    hire_date: date
    company_id: Optional[uuid.UUID] = None
    department_id: Optional[uuid.UUID] = None
    manager_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime


class EmployeeDetail(EmployeeResponse):
    """Full employee record with org placement embedded."""

    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    termination_date: Optional[date] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    user_id: Optional[uuid.UUID] = None

    company: Optional[CompanyBrief] = None
    department: Optional[DepartmentBrief] = None
    manager: Optional[EmployeeSummary] = None

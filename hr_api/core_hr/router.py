"""Core HR router: Company, Department and Employee API endpoints.

Routes:
    /companies                       List, create companies
    /companies/{id}                  Get, update, delete a company
    /departments                     List, create departments
    /departments/{id}                Get, update, delete a department
    /employees                       List, create employees
    /employees/{id}                  Get, update, delete an employee
    /employees/{id}/direct-reports   Manager's direct reports
"""


import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.auth.dependencies import get_current_user, require_role
from hr_api.auth.models import User
from hr_api.common.constants import EmployeeStatus, UserRole
from hr_api.common.pagination import PaginatedResponse, PaginationParams
from hr_api.core_hr.schemas import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
    EmployeeCreate,
    EmployeeDetail,
    EmployeeResponse,
    EmployeeUpdate,
)
from hr_api.core_hr.service import CompanyService, DepartmentService, EmployeeService
from hr_api.database import get_db


# ═════════════════════════════════════════════════════════════════════
# Routers
# ═════════════════════════════════════════════════════════════════════

companies_router = APIRouter(prefix="", tags=["companies"])
departments_router = APIRouter(prefix="", tags=["departments"])
employees_router = APIRouter(prefix="", tags=["employees"])


# ═════════════════════════════════════════════════════════════════════
# Company Endpoints
# ═════════════════════════════════════════════════════════════════════


@companies_router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    body: CompanyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_role(UserRole.hr_admin)),
):
    company = await CompanyService.create_company(db, body)
    return CompanyResponse.model_validate(company)


@companies_router.get("", response_model=PaginatedResponse[CompanyResponse])
async def list_companies(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    pagination: PaginationParams = Depends(),
    search: Optional[str] = Query(None, description="Search by name or description"),
    industry: Optional[str] = Query(None),
):
    """List companies, newest first, each with its employee count."""
    return await CompanyService.list_companies(
        db, pagination, search=search, industry=industry,
    )


@companies_router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CompanyResponse.model_validate(await CompanyService.get_company(db, company_id))


@companies_router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: uuid.UUID,
    body: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_role(UserRole.hr_admin)),
):
    company = await CompanyService.update_company(db, company_id, body)
    return CompanyResponse.model_validate(company)


@companies_router.delete("/{company_id}")
async def delete_company(
    company_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_role(UserRole.hr_admin)),
):
    await CompanyService.delete_company(db, company_id)
    return {"message": "Company deleted successfully"}


# ═════════════════════════════════════════════════════════════════════
# Department Endpoints
# ═════════════════════════════════════════════════════════════════════


@departments_router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    body: DepartmentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    department = await DepartmentService.create_department(db, body)
    return DepartmentResponse.model_validate(department)


@departments_router.get("", response_model=PaginatedResponse[DepartmentResponse])
async def list_departments(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    pagination: PaginationParams = Depends(),
    company_id: Optional[uuid.UUID] = Query(None, description="Filter by company"),
    parent_id: Optional[uuid.UUID] = Query(None, description="Filter by parent department"),
    search: Optional[str] = Query(None, description="Search by name or code"),
):
    return await DepartmentService.list_departments(
        db, pagination, company_id=company_id, parent_id=parent_id, search=search,
    )


@departments_router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    department = await DepartmentService.get_department(db, department_id)
    return DepartmentResponse.model_validate(department)


@departments_router.patch("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: uuid.UUID,
    body: DepartmentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    department = await DepartmentService.update_department(db, department_id, body)
    return DepartmentResponse.model_validate(department)


@departments_router.delete("/{department_id}")
async def delete_department(
    department_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await DepartmentService.delete_department(db, department_id)
    return {"message": "Department deleted successfully"}


# ═════════════════════════════════════════════════════════════════════
# Employee Endpoints
# ═════════════════════════════════════════════════════════════════════


# ── POST /employees: Create employee ────────────────────────────────

@employees_router.post("", response_model=EmployeeDetail, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    employee = await EmployeeService.create_employee(db, body, actor_id=current_user.id)
    return EmployeeDetail.model_validate(employee)


# ── GET /employees: List employees ──────────────────────────────────

@employees_router.get("", response_model=PaginatedResponse[EmployeeResponse])
async def list_employees(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    pagination: PaginationParams = Depends(),
    search: Optional[str] = Query(None, description="Search by name, email, or employee number"),
    company_id: Optional[uuid.UUID] = Query(None, description="Filter by company"),
    department_id: Optional[uuid.UUID] = Query(None, description="Filter by department"),
    manager_id: Optional[uuid.UUID] = Query(None, description="Filter by manager"),
    status: Optional[EmployeeStatus] = Query(None, description="Filter by status"),
):
    """List employees with pagination, search, and filtering."""
    return await EmployeeService.list_employees(
        db,
        pagination,
        search=search,
        company_id=company_id,
        department_id=department_id,
        manager_id=manager_id,
        status=status,
    )


# ── GET /employees/{id}/direct-reports ──────────────────────────────

@employees_router.get("/{employee_id}/direct-reports", response_model=list[EmployeeResponse])
async def get_direct_reports(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reports = await EmployeeService.get_direct_reports(db, employee_id)
    return [EmployeeResponse.model_validate(emp) for emp in reports]


# ── GET /employees/{id} ─────────────────────────────────────────────

@employees_router.get("/{employee_id}", response_model=EmployeeDetail)
async def get_employee(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return EmployeeDetail.model_validate(await EmployeeService.get_employee(db, employee_id))


# ── PATCH /employees/{id} ───────────────────────────────────────────

@employees_router.patch("/{employee_id}", response_model=EmployeeDetail)
async def update_employee(
    employee_id: uuid.UUID,
    body: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    employee = await EmployeeService.update_employee(
        db, employee_id, body, actor_id=current_user.id,
    )
    return EmployeeDetail.model_validate(employee)


# ── DELETE /employees/{id} ──────────────────────────────────────────

@employees_router.delete("/{employee_id}")
async def delete_employee(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await EmployeeService.delete_employee(db, employee_id, actor_id=current_user.id)
    return {"message": "Employee deleted successfully"}

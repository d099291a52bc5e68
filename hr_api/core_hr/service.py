"""Core HR service layer: async CRUD + business logic.

Uses:
  - ``paginate()`` from hr_api.common.pagination
  - ``apply_filters / apply_search`` from hr_api.common.filters
  - ``create_audit_entry`` from hr_api.common.audit
  - ``NotFoundException / ConflictError`` from hr_api.common.exceptions
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_api.auth.models import User
from hr_api.common.audit import create_audit_entry
from hr_api.common.exceptions import ConflictError, ValidationException
from hr_api.common.filters import apply_filters, apply_search
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import (
    apply_changes,
    delete_or_conflict,
    ensure_exists,
    exists,
    get_or_404,
)
from hr_api.core_hr.models import Company, Department, Employee
from hr_api.core_hr.schemas import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
)

logger = logging.getLogger(__name__)

_DEPARTMENT_OPTIONS = (
    selectinload(Department.company),
    selectinload(Department.parent),
    selectinload(Department.head),
)
_EMPLOYEE_OPTIONS = (
    selectinload(Employee.company),
    selectinload(Employee.department),
    selectinload(Employee.manager),
)


# ═════════════════════════════════════════════════════════════════════
# CompanyService
# ═════════════════════════════════════════════════════════════════════


class CompanyService:
    """Async CRUD operations for companies."""

    @staticmethod
    async def list_companies(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        search: Optional[str] = None,
        industry: Optional[str] = None,
    ) -> PaginatedResponse:
        query = select(Company).order_by(Company.created_at.desc())
        query = apply_filters(query, Company, {"industry__ilike": industry})
        query = apply_search(query, Company, search, ["name", "description"])
        return await paginate(db, query, pagination, model=Company, schema=CompanyResponse)

    @staticmethod
    async def get_company(db: AsyncSession, company_id: uuid.UUID) -> Company:
        return await get_or_404(db, Company, company_id)

    @staticmethod
    async def create_company(db: AsyncSession, data: CompanyCreate) -> Company:
        if await exists(db, Company, Company.name == data.name):
            raise ConflictError.duplicate("name", data.name)

        company = Company(**data.model_dump())
        db.add(company)
        await db.flush()
        logger.info("Created company %s (%s)", company.id, company.name)
        return await CompanyService.get_company(db, company.id)

    @staticmethod
    async def update_company(
        db: AsyncSession,
        company_id: uuid.UUID,
        data: CompanyUpdate,
    ) -> Company:
        company = await CompanyService.get_company(db, company_id)
        changes = data.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name and new_name != company.name:
            if await exists(db, Company, Company.name == new_name, Company.id != company_id):
                raise ConflictError.duplicate("name", new_name)

        apply_changes(company, changes)
        await db.flush()
        return await CompanyService.get_company(db, company_id)

    @staticmethod
    async def delete_company(db: AsyncSession, company_id: uuid.UUID) -> None:
        company = await CompanyService.get_company(db, company_id)
        if company.employee_count or company.department_count:
            raise ConflictError(
                "Cannot delete a company that still has employees or departments."
            )
        await delete_or_conflict(db, company, "Company")
        logger.info("Deleted company %s", company_id)


# ═════════════════════════════════════════════════════════════════════
# DepartmentService
# ═════════════════════════════════════════════════════════════════════


class DepartmentService:
    """Async CRUD operations for departments."""

    @staticmethod
    async def list_departments(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        company_id: Optional[uuid.UUID] = None,
        parent_id: Optional[uuid.UUID] = None,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        query = (
            select(Department)
            .options(*_DEPARTMENT_OPTIONS)
            .order_by(Department.created_at.desc())
        )
        query = apply_filters(
            query, Department, {"company_id": company_id, "parent_id": parent_id},
        )
        query = apply_search(query, Department, search, ["name", "code"])
        return await paginate(
            db, query, pagination, model=Department, schema=DepartmentResponse,
        )

    @staticmethod
    async def get_department(db: AsyncSession, department_id: uuid.UUID) -> Department:
        return await get_or_404(db, Department, department_id, options=_DEPARTMENT_OPTIONS)

    @staticmethod
    async def _check_references(
        db: AsyncSession,
        fields: dict[str, Any],
        department_id: Optional[uuid.UUID] = None,
    ) -> None:
        await ensure_exists(db, Company, fields.get("company_id"))
        await ensure_exists(db, Employee, fields.get("head_id"))
        parent_id = fields.get("parent_id")
        if parent_id is not None and parent_id == department_id:
            raise ValidationException({"parent_id": ["A department cannot be its own parent."]})
        await ensure_exists(db, Department, parent_id)

    @staticmethod
    async def _check_code(
        db: AsyncSession,
        code: Optional[str],
        company_id: Optional[uuid.UUID],
        department_id: Optional[uuid.UUID] = None,
    ) -> None:
        if not code:
            return
        conditions = [Department.code == code, Department.company_id == company_id]
        if department_id is not None:
            conditions.append(Department.id != department_id)
        if await exists(db, Department, *conditions):
            raise ConflictError.duplicate("code", code)

    @staticmethod
    async def create_department(db: AsyncSession, data: DepartmentCreate) -> Department:
        fields = data.model_dump()
        await DepartmentService._check_references(db, fields)
        await DepartmentService._check_code(db, data.code, data.company_id)

        department = Department(**fields)
        db.add(department)
        await db.flush()
        logger.info("Created department %s (%s)", department.id, department.name)
        return await DepartmentService.get_department(db, department.id)

    @staticmethod
    async def update_department(
        db: AsyncSession,
        department_id: uuid.UUID,
        data: DepartmentUpdate,
    ) -> Department:
        department = await DepartmentService.get_department(db, department_id)
        changes = data.model_dump(exclude_unset=True)

        await DepartmentService._check_references(db, changes, department_id)
        if "code" in changes or "company_id" in changes:
            await DepartmentService._check_code(
                db,
                changes.get("code", department.code),
                changes.get("company_id", department.company_id),
                department_id,
            )

        apply_changes(department, changes)
        await db.flush()
        return await DepartmentService.get_department(db, department_id)

    @staticmethod
    async def delete_department(db: AsyncSession, department_id: uuid.UUID) -> None:
        department = await DepartmentService.get_department(db, department_id)
        if department.employee_count:
            raise ConflictError("Cannot delete a department that still has employees.")
        if await exists(db, Department, Department.parent_id == department_id):
            raise ConflictError("Cannot delete a department that has child departments.")
        await delete_or_conflict(db, department, "Department")
        logger.info("Deleted department %s", department_id)


# ═════════════════════════════════════════════════════════════════════
# EmployeeService
# ═════════════════════════════════════════════════════════════════════


class EmployeeService:
    """Async CRUD operations for employees."""

    # ── List (paginated, searchable, filterable) ────────────────────

    @staticmethod
    async def list_employees(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        search: Optional[str] = None,
        company_id: Optional[uuid.UUID] = None,
        department_id: Optional[uuid.UUID] = None,
        manager_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
    ) -> PaginatedResponse:
        """Return a paginated, filtered, searchable employee list."""
        query = select(Employee).order_by(Employee.created_at.desc())
        filters: dict[str, Any] = {
            "company_id": company_id,
            "department_id": department_id,
            "manager_id": manager_id,
            "status": status,
        }
        query = apply_filters(query, Employee, filters)
        query = apply_search(
            query,
            Employee,
            search,
            ["first_name", "last_name", "email", "employee_number"],
        )
        return await paginate(db, query, pagination, model=Employee, schema=EmployeeResponse)

    # ── Get single ──────────────────────────────────────────────────

    @staticmethod
    async def get_employee(db: AsyncSession, employee_id: uuid.UUID) -> Employee:
        """Load an employee with company, department and manager."""
        return await get_or_404(db, Employee, employee_id, options=_EMPLOYEE_OPTIONS)

    @staticmethod
    async def get_direct_reports(
        db: AsyncSession,
        manager_id: uuid.UUID,
    ) -> list[Employee]:
        await ensure_exists(db, Employee, manager_id)
        result = await db.execute(
            select(Employee)
            .where(Employee.manager_id == manager_id)
            .order_by(Employee.first_name, Employee.last_name)
        )
        return list(result.scalars().all())

    # ── Validation helpers ──────────────────────────────────────────

    @staticmethod
    async def _check_unique(
        db: AsyncSession,
        fields: dict[str, Any],
        employee_id: Optional[uuid.UUID] = None,
    ) -> None:
        for name in ("employee_number", "email"):
            value = fields.get(name)
            if value is None:
                continue
            conditions = [getattr(Employee, name) == value]
            if employee_id is not None:
                conditions.append(Employee.id != employee_id)
            if await exists(db, Employee, *conditions):
                raise ConflictError.duplicate(name, value)

    @staticmethod
    async def _check_references(
        db: AsyncSession,
        fields: dict[str, Any],
        employee_id: Optional[uuid.UUID] = None,
    ) -> None:
        manager_id = fields.get("manager_id")
        if manager_id is not None and manager_id == employee_id:
            raise ValidationException({"manager_id": ["An employee cannot be their own manager."]})
        await ensure_exists(db, Company, fields.get("company_id"))
        await ensure_exists(db, Department, fields.get("department_id"))
        await ensure_exists(db, Employee, manager_id, "Manager")
        await ensure_exists(db, User, fields.get("user_id"))

    @staticmethod
    def _check_dates(hire_date: Optional[date], termination_date: Optional[date]) -> None:
        if hire_date and termination_date and termination_date < hire_date:
            raise ValidationException(
                {"termination_date": ["Termination date cannot precede the hire date."]}
            )

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def create_employee(
        db: AsyncSession,
        data: EmployeeCreate,
        *,
        actor_id: Optional[uuid.UUID] = None,
    ) -> Employee:
        """Create a new employee record."""
        fields = data.model_dump()
        fields["email"] = fields["email"].lower()
        await EmployeeService._check_unique(db, fields)
        await EmployeeService._check_references(db, fields)
        EmployeeService._check_dates(data.hire_date, data.termination_date)

        employee = Employee(**fields)
        db.add(employee)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Employee number, email or user link is already in use.")

        await create_audit_entry(
            db,
            action="create",
            entity_type="employee",
            entity_id=employee.id,
            actor_id=actor_id,
            new_values=data.model_dump(),
        )
        logger.info("Created employee %s (%s)", employee.id, employee.employee_number)
        return await EmployeeService.get_employee(db, employee.id)

    # ── Update ──────────────────────────────────────────────────────

    @staticmethod
    async def update_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
        data: EmployeeUpdate,
        *,
        actor_id: Optional[uuid.UUID] = None,
    ) -> Employee:
        """Partially update an employee."""
        employee = await EmployeeService.get_employee(db, employee_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()

        await EmployeeService._check_unique(db, changes, employee_id)
        await EmployeeService._check_references(db, changes, employee_id)
        EmployeeService._check_dates(
            changes.get("hire_date", employee.hire_date),
            changes.get("termination_date", employee.termination_date),
        )

        old_values = apply_changes(employee, changes)
        await db.flush()

        if old_values:
            await create_audit_entry(
                db,
                action="update",
                entity_type="employee",
                entity_id=employee.id,
                actor_id=actor_id,
                old_values=old_values,
                new_values=changes,
            )
        return await EmployeeService.get_employee(db, employee_id)

    # ── Delete ──────────────────────────────────────────────────────

    @staticmethod
    async def delete_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
        *,
        actor_id: Optional[uuid.UUID] = None,
    ) -> None:
        employee = await EmployeeService.get_employee(db, employee_id)
        reports = await db.execute(
            select(func.count()).select_from(Employee).where(Employee.manager_id == employee_id)
        )
        if reports.scalar():
            raise ConflictError("Cannot delete an employee who still manages other employees.")

        snapshot = {"employee_number": employee.employee_number, "email": employee.email}
        await delete_or_conflict(db, employee, "Employee")
        await create_audit_entry(
            db,
            action="delete",
            entity_type="employee",
            entity_id=employee_id,
            actor_id=actor_id,
            old_values=snapshot,
        )
        logger.info("Deleted employee %s", employee_id)

"""Core HR ORM models: Company, Department, Employee.

SQLAlchemy 2.0 async-compatible models with Mapped[] annotations.
Column names match the PostgreSQL schema defined in 001_initial_schema.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hr_api.common.audit import TimestampMixin
from hr_api.common.constants import CompanySize, EmployeeStatus, Gender
from hr_api.database import Base

if TYPE_CHECKING:
    from hr_api.auth.models import User


# ═════════════════════════════════════════════════════════════════════
# Company
# ═════════════════════════════════════════════════════════════════════


class Company(Base, TimestampMixin):
    """Legal entity that owns departments, employees, benefits and policies."""

    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(200), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    website: Mapped[Optional[str]] = mapped_column(sa.String(255))
    industry: Mapped[Optional[str]] = mapped_column(sa.String(100))
    size: Mapped[Optional[CompanySize]] = mapped_column(
        sa.Enum(CompanySize, name="company_size"),
    )
    address: Mapped[Optional[str]] = mapped_column(sa.Text)
    phone: Mapped[Optional[str]] = mapped_column(sa.String(30))
    email: Mapped[Optional[str]] = mapped_column(sa.String(255))

    # ── Relationships ───────────────────────────────────────────────
    departments: Mapped[list[Department]] = relationship(
        back_populates="company", foreign_keys="Department.company_id",
    )
    employees: Mapped[list[Employee]] = relationship(
        back_populates="company", foreign_keys="Employee.company_id",
    )

    def __repr__(self) -> str:
        return f"<Company {self.name!r}>"


# ═════════════════════════════════════════════════════════════════════
# Department
# ═════════════════════════════════════════════════════════════════════


class Department(Base, TimestampMixin):
    """Organisational department (supports hierarchy via parent_id)."""

    __tablename__ = "departments"
    __table_args__ = (
        sa.UniqueConstraint("company_id", "code", name="uq_dept_company_code"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(150), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    code: Mapped[Optional[str]] = mapped_column(sa.String(20))
    company_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("companies.id"), index=True,
    )
    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("departments.id"),
    )
    head_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employees.id", name="fk_dept_head", use_alter=True),
    )

    # ── Relationships ───────────────────────────────────────────────
    company: Mapped[Optional[Company]] = relationship(
        back_populates="departments", foreign_keys=[company_id],
    )
    parent: Mapped[Optional[Department]] = relationship(
        back_populates="children", remote_side=[id], foreign_keys=[parent_id],
    )
    children: Mapped[list[Department]] = relationship(
        back_populates="parent", foreign_keys=[parent_id],
    )
    head: Mapped[Optional[Employee]] = relationship(foreign_keys=[head_id])
    employees: Mapped[list[Employee]] = relationship(
        back_populates="department", foreign_keys="Employee.department_id",
    )

    def __repr__(self) -> str:
        return f"<Department {self.name!r} ({self.code})>"


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class Employee(Base, TimestampMixin):
    """Employee master record."""

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_number: Mapped[str] = mapped_column(
        sa.String(50), unique=True, nullable=False,
    )
    first_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    email: Mapped[str] = mapped_column(sa.String(255), unique=True, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(sa.String(30))
    date_of_birth: Mapped[Optional[date]] = mapped_column(sa.Date)
    gender: Mapped[Optional[Gender]] = mapped_column(sa.Enum(Gender, name="gender"))

    # Address
    address: Mapped[Optional[str]] = mapped_column(sa.Text)
    city: Mapped[Optional[str]] = mapped_column(sa.String(100))
    state: Mapped[Optional[str]] = mapped_column(sa.String(100))
    postal_code: Mapped[Optional[str]] = mapped_column(sa.String(20))
    country: Mapped[Optional[str]] = mapped_column(sa.String(100))

    # Employment
    hire_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    termination_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    status: Mapped[EmployeeStatus] = mapped_column(
        sa.Enum(EmployeeStatus, name="employee_status"),
        default=EmployeeStatus.ACTIVE,
        server_default=EmployeeStatus.ACTIVE.name,
        nullable=False,
    )
    emergency_contact_name: Mapped[Optional[str]] = mapped_column(sa.String(200))
    emergency_contact_phone: Mapped[Optional[str]] = mapped_column(sa.String(30))

    # Org placement
    company_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("companies.id"), index=True,
    )
    department_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("departments.id"), index=True,
    )
    manager_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), index=True,
    )
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="SET NULL"),
        unique=True,
    )

    # ── Relationships ───────────────────────────────────────────────
    company: Mapped[Optional[Company]] = relationship(
        back_populates="employees", foreign_keys=[company_id],
    )
    department: Mapped[Optional[Department]] = relationship(
        back_populates="employees", foreign_keys=[department_id],
    )
    manager: Mapped[Optional[Employee]] = relationship(
        back_populates="direct_reports", remote_side=[id], foreign_keys=[manager_id],
    )
    direct_reports: Mapped[list[Employee]] = relationship(
        back_populates="manager", foreign_keys=[manager_id],
    )
    user: Mapped[Optional["User"]] = relationship(back_populates="employee")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Employee {self.employee_number} {self.full_name!r}>"


# ── Aggregate columns ───────────────────────────────────────────────

Company.employee_count = column_property(
    sa.select(sa.func.count(Employee.id))
    .where(Employee.company_id == Company.id)
    .correlate_except(Employee)
    .scalar_subquery(),
)
Company.department_count = column_property(
    sa.select(sa.func.count(Department.id))
    .where(Department.company_id == Company.id)
    .correlate_except(Department)
    .scalar_subquery(),
)
Department.employee_count = column_property(
    sa.select(sa.func.count(Employee.id))
    .where(Employee.department_id == Department.id)
    .correlate_except(Employee)
    .scalar_subquery(),
)

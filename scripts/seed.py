#!/usr/bin/env python3
"""Seed the database with a demo company and a hr_admin login.

Creates one company with departments, employees, benefits and enrollments,
skills, a project with a team and budget line, a week of time records and
a performance cycle with one review.

Usage:
    python -m scripts.seed
    python -m scripts.seed --admin-password 'S3cret!pass'
    python -m scripts.seed --admin-email hr@acme.com

Run ``alembic upgrade head`` first. Re-running against a seeded database
stops early because the demo company already exists.
"""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select

from hr_api.auth.service import create_user
from hr_api.benefits.schemas import BenefitCreate
from hr_api.benefits.service import BenefitService
from hr_api.common.constants import (
    BenefitType,
    CompanySize,
    CycleStatus,
    CycleType,
    Gender,
    Priority,
    ProjectStatus,
    ReviewType,
    SkillLevel,
    UserRole,
)
from hr_api.core_hr.models import Company
from hr_api.core_hr.schemas import (
    CompanyCreate,
    DepartmentCreate,
    DepartmentUpdate,
    EmployeeCreate,
)
from hr_api.core_hr.service import CompanyService, DepartmentService, EmployeeService
from hr_api.database import async_session_factory, engine
from hr_api.performance.schemas import CycleCreate, ReviewCreate
from hr_api.performance.service import PerformanceService
from hr_api.projects.schemas import (
    BudgetItemCreate,
    ProjectCreate,
    ProjectTeamCreate,
    TeamCreate,
)
from hr_api.projects.service import ProjectService
from hr_api.skills.schemas import EmployeeSkillCreate, SkillCreate
from hr_api.skills.service import EmployeeSkillService, SkillService
from hr_api.time_tracking.schemas import TimeRecordCreate
from hr_api.time_tracking.service import TimeTrackingService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("seed")

DEMO_COMPANY = "Acme Corporation"

DEPARTMENTS = [
    ("Engineering", "ENG"),
    ("Human Resources", "HR"),
    ("Sales", "SALES"),
]

# (number, first, last, email, gender, department code, is_manager)
EMPLOYEES = [
    ("EMP-001", "Alice", "Johnson", "alice.johnson@acme.com", Gender.FEMALE, "ENG", True),
    ("EMP-002", "Bob", "Smith", "bob.smith@acme.com", Gender.MALE, "ENG", False),
    ("EMP-003", "Carol", "Davis", "carol.davis@acme.com", Gender.FEMALE, "HR", True),
    ("EMP-004", "Dan", "Lee", "dan.lee@acme.com", Gender.MALE, "SALES", True),
    ("EMP-005", "Eve", "Martinez", "eve.martinez@acme.com", Gender.OTHER, "SALES", False),
]

BENEFITS = [
    ("Health Plus", BenefitType.HEALTH_INSURANCE, "BlueCare", Decimal("350.00")),
    ("Dental Basic", BenefitType.DENTAL_INSURANCE, "SmileCo", Decimal("45.00")),
    ("401k Match", BenefitType.RETIREMENT_401K, "Fidelity", None),
]

SKILLS = [
    ("Python", "Programming"),
    ("PostgreSQL", "Databases"),
    ("Negotiation", "Soft skills"),
    ("Recruiting", "HR"),
]


async def seed(admin_email: str, admin_password: str) -> bool:
    """Insert the demo data set. Returns False if it was already present."""
    async with async_session_factory() as db:
        existing = await db.execute(select(Company.id).where(Company.name == DEMO_COMPANY))
        if existing.first() is not None:
            logger.info("Company %r already exists, nothing to do", DEMO_COMPANY)
            return False

        admin = await create_user(db, admin_email, admin_password, role=UserRole.hr_admin)
        logger.info("Admin user: %s", admin.email)

        company = await CompanyService.create_company(db, CompanyCreate(
            name=DEMO_COMPANY,
            description="Demo company for local development",
            website="https://acme.example.com",
            industry="Technology",
            size=CompanySize.MEDIUM,
            email="contact@acme.com",
        ))

        departments = {}
        for name, code in DEPARTMENTS:
            departments[code] = await DepartmentService.create_department(
                db, DepartmentCreate(name=name, code=code, company_id=company.id),
            )
        logger.info("Departments: %d", len(departments))

        employees = []
        managers = {}
        for number, first, last, email, gender, dept, is_manager in EMPLOYEES:
            employee = await EmployeeService.create_employee(db, EmployeeCreate(
                employee_number=number,
                first_name=first,
                last_name=last,
                email=email,
                gender=gender,
                hire_date=date(2022, 1, 10) + timedelta(days=30 * len(employees)),
                company_id=company.id,
                department_id=departments[dept].id,
                manager_id=None if is_manager else managers[dept].id,
                user_id=admin.id if number == "EMP-003" else None,
            ), actor_id=admin.id)
            if is_manager:
                managers[dept] = employee
                await DepartmentService.update_department(
                    db, departments[dept].id, DepartmentUpdate(head_id=employee.id),
                )
            employees.append(employee)
        logger.info("Employees: %d", len(employees))

        for name, kind, provider, cost in BENEFITS:
            benefit = await BenefitService.create_benefit(db, BenefitCreate(
                name=name, type=kind, provider=provider, cost=cost, company_id=company.id,
            ))
            if kind == BenefitType.HEALTH_INSURANCE:
                for employee in employees:
                    await BenefitService.enroll(db, benefit.id, employee.id)
        logger.info("Benefits: %d", len(BENEFITS))

        skills = {}
        for name, category in SKILLS:
            skills[name] = await SkillService.create_skill(
                db, SkillCreate(name=name, category=category),
            )
        alice, bob = employees[0], employees[1]
        await EmployeeSkillService.create_employee_skill(db, EmployeeSkillCreate(
            employee_id=alice.id, skill_id=skills["Python"].id,
            level=SkillLevel.EXPERT, years_of_experience=9,
            certified=True, certified_at=date(2023, 3, 1), expires_at=date(2026, 3, 1),
        ))
        await EmployeeSkillService.create_employee_skill(db, EmployeeSkillCreate(
            employee_id=bob.id, skill_id=skills["PostgreSQL"].id,
            level=SkillLevel.INTERMEDIATE, years_of_experience=3,
        ))
        logger.info("Skills: %d", len(skills))

        project = await ProjectService.create_project(db, ProjectCreate(
            name="HR Portal Revamp",
            description="Self-service portal for employees",
            status=ProjectStatus.IN_PROGRESS,
            priority=Priority.HIGH,
            start_date=date.today() - timedelta(days=30),
            budget=Decimal("120000.00"),
            manager_id=alice.id,
        ))
        team = await ProjectService.create_team(
            db, TeamCreate(name="Platform", lead_id=alice.id),
        )
        await ProjectService.assign_team(
            db, project.id, ProjectTeamCreate(team_id=team.id, role="Delivery"),
        )
        await ProjectService.add_budget_item(db, project.id, BudgetItemCreate(
            description="Cloud hosting", category="Infrastructure", amount=Decimal("8400.00"),
        ))
        logger.info("Project: %s", project.name)

        monday = date.today() - timedelta(days=date.today().weekday() + 7)
        for offset in range(5):
            day = monday + timedelta(days=offset)
            await TimeTrackingService.create_record(db, TimeRecordCreate(
                employee_id=bob.id,
                date=day,
                clock_in=datetime.combine(day, time(9, 0), tzinfo=timezone.utc),
                clock_out=datetime.combine(day, time(17, 30), tzinfo=timezone.utc),
                break_start=datetime.combine(day, time(12, 30), tzinfo=timezone.utc),
                break_end=datetime.combine(day, time(13, 0), tzinfo=timezone.utc),
            ))
        logger.info("Time records: 5")

        year = date.today().year
        cycle = await PerformanceService.create_cycle(db, CycleCreate(
            name=f"FY{year} Annual Review",
            cycle_type=CycleType.ANNUAL,
            company_id=company.id,
            start_date=date(year, 1, 1),
            end_date=date(year, 12, 31),
            review_start_date=date(year, 12, 1),
            review_end_date=date(year, 12, 31),
            status=CycleStatus.ACTIVE,
        ))
        await PerformanceService.create_review(db, ReviewCreate(
            employee_id=bob.id,
            reviewer_id=alice.id,
            cycle_id=cycle.id,
            period=str(year),
            type=ReviewType.ANNUAL,
            due_date=date(year, 12, 31),
        ))
        logger.info("Performance cycle: %s", cycle.name)

        await db.commit()
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Seed the HR database with demo data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--admin-email", default="admin@example.com")
    parser.add_argument("--admin-password", default="ChangeMe123!")
    args = parser.parse_args()

    async def _run() -> bool:
        try:
            return await seed(args.admin_email, args.admin_password)
        finally:
            await engine.dispose()

    created = asyncio.run(_run())
    logger.info("Done" if created else "Skipped")
    sys.exit(0)


if __name__ == "__main__":
    main()

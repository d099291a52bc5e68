"""Shared test fixtures: async DB, client, auth helpers, factories.

Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import os

# Settings are read at import time, so configure the environment first
os.environ.setdefault("JWT_SECRET", "test-secret-for-ci-do-not-use-in-production")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import uuid
from datetime import date
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import INET, JSONB, UUID as PG_UUID
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from hr_api.auth.models import User
from hr_api.auth.service import create_session, create_user
from hr_api.common.constants import UserRole
from hr_api.common.pagination import PaginationParams
from hr_api.common.rate_limit import limiter
from hr_api.core_hr.models import Company, Department, Employee
from hr_api.database import Base, get_db
from hr_api.main import create_app

# Import every model module so the metadata holds the full schema
import hr_api.announcements.models  # noqa: F401
import hr_api.benefits.models  # noqa: F401
import hr_api.documents.models  # noqa: F401
import hr_api.expenses.models  # noqa: F401
import hr_api.goals.models  # noqa: F401
import hr_api.performance.models  # noqa: F401
import hr_api.policies.models  # noqa: F401
import hr_api.projects.models  # noqa: F401
import hr_api.skills.models  # noqa: F401
import hr_api.time_tracking.models  # noqa: F401
import hr_api.training.models  # noqa: F401


# ── SQLite compat: compile PG-specific types ────────────────────────

@compiles(JSONB, "sqlite")
def _jsonb_sqlite(element, compiler, **kw):
    return "TEXT"


@compiles(INET, "sqlite")
def _inet_sqlite(element, compiler, **kw):
    return "TEXT"


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Start every test with empty rate-limit counters."""
    limiter.reset()
    yield


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    """Create a fresh app instance with DB dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Database session (for direct DB operations in tests) ────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


# ── Model factories ─────────────────────────────────────────────────

def page_params(page: int = 1, page_size: int = 50, sort: str | None = None) -> PaginationParams:
    """PaginationParams for direct service calls, bypassing the Query defaults."""
    return PaginationParams(page=page, page_size=page_size, sort=sort)


async def make_company(db: AsyncSession, *, name: str = "Acme Corporation", **kwargs) -> Company:
    company = Company(name=name, **kwargs)
    db.add(company)
    await db.commit()
    return company


async def make_department(
    db: AsyncSession,
    *,
    name: str = "Engineering",
    code: str | None = "ENG",
    company_id: uuid.UUID | None = None,
    **kwargs,
) -> Department:
    department = Department(name=name, code=code, company_id=company_id, **kwargs)
    db.add(department)
    await db.commit()
    return department


async def make_employee(
    db: AsyncSession,
    *,
    first_name: str = "Test",
    last_name: str = "User",
    email: str | None = None,
    employee_number: str | None = None,
    hire_date: date = date(2024, 1, 15),
    **kwargs,
) -> Employee:
    suffix = uuid.uuid4().hex[:6]
    employee = Employee(
        employee_number=employee_number or f"EMP-{suffix.upper()}",
        first_name=first_name,
        last_name=last_name,
        email=email or f"user.{suffix}@example.com",
        hire_date=hire_date,
        **kwargs,
    )
    db.add(employee)
    await db.commit()
    return employee


async def make_user(
    db: AsyncSession,
    *,
    role: UserRole = UserRole.employee,
    email: str | None = None,
    password: str = "Passw0rd!",
) -> User:
    user = await create_user(
        db, email or f"login.{uuid.uuid4().hex[:6]}@example.com", password, role=role,
    )
    await db.commit()
    return user


async def make_auth_headers(db: AsyncSession, user: User) -> dict[str, str]:
    """Open a real session for *user* and return Bearer headers."""
    access_token, _refresh, _expires = await create_session(db, user)
    await db.commit()
    return {"Authorization": f"Bearer {access_token}"}


# ── Fixtures built on the factories ─────────────────────────────────

@pytest.fixture
async def test_company(db) -> Company:
    return await make_company(db)


@pytest.fixture
async def test_department(db, test_company) -> Department:
    return await make_department(db, company_id=test_company.id)


@pytest.fixture
async def test_employee(db, test_company, test_department) -> Employee:
    return await make_employee(
        db,
        email="test.user@example.com",
        company_id=test_company.id,
        department_id=test_department.id,
    )


@pytest.fixture
async def admin_user(db) -> User:
    return await make_user(db, role=UserRole.hr_admin, email="admin@example.com")


@pytest.fixture
async def auth_headers(db, admin_user) -> dict[str, str]:
    """Bearer headers for an hr_admin."""
    return await make_auth_headers(db, admin_user)


@pytest.fixture
async def employee_user(db) -> User:
    return await make_user(db, role=UserRole.employee, email="staff@example.com")


@pytest.fixture
async def employee_headers(db, employee_user) -> dict[str, str]:
    """Bearer headers for a plain employee (below manager)."""
    return await make_auth_headers(db, employee_user)

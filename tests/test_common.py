"""Tests for common utilities: filters, sorting, search, pagination and query helpers.

Exercises apply_filters, apply_sorting, apply_search, paginate and the
helpers in hr_api/common/queries.py directly against the test database.
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import ClassVar, Optional

import pytest
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.common.audit import snapshot
from hr_api.common.constants import EmployeeStatus
from hr_api.common.exceptions import ConflictError, NotFoundException
from hr_api.common.filters import _get_column, apply_filters, apply_search, apply_sorting
from hr_api.common.pagination import paginate
from hr_api.common.queries import apply_changes, ensure_exists, exists, get_or_404
from hr_api.common.schemas import PatchModel
from hr_api.core_hr.models import Company, Employee
from hr_api.core_hr.schemas import EmployeeSummary
from tests.conftest import make_company, make_employee, page_params


async def _names(db: AsyncSession, query) -> list[str]:
    return [e.first_name for e in (await db.execute(query)).scalars().all()]


# ═════════════════════════════════════════════════════════════════════
# FILTER TESTS
# ═════════════════════════════════════════════════════════════════════


class TestApplyFilters:
    """Tests for apply_filters utility."""

    async def test_filter_by_equality(self, db: AsyncSession):
        await make_employee(db, first_name="Alice")
        await make_employee(db, first_name="Bob")

        query = apply_filters(select(Employee), Employee, {"first_name": "Alice"})
        assert await _names(db, query) == ["Alice"]

    async def test_filter_none_values_skipped(self, db: AsyncSession):
        await make_employee(db, first_name="Alice")

        query = apply_filters(
            select(Employee), Employee, {"first_name": None, "status": EmployeeStatus.ACTIVE},
        )
        assert await _names(db, query) == ["Alice"]

    async def test_filter_by_ilike(self, db: AsyncSession):
        await make_employee(db, first_name="Alexander")
        await make_employee(db, first_name="Bobby")

        query = apply_filters(select(Employee), Employee, {"first_name__ilike": "ALEX"})
        assert await _names(db, query) == ["Alexander"]

    async def test_filter_by_from_to_range(self, db: AsyncSession):
        await make_employee(db, first_name="E1", hire_date=date(2024, 1, 1))
        await make_employee(db, first_name="E2", hire_date=date(2025, 6, 1))
        await make_employee(db, first_name="E3", hire_date=date(2026, 1, 1))

        query = apply_filters(select(Employee), Employee, {
            "hire_date__from": date(2025, 1, 1),
            "hire_date__to": date(2025, 12, 31),
        })
        assert await _names(db, query) == ["E2"]

    async def test_range_bounds_are_inclusive(self, db: AsyncSession):
        await make_employee(db, first_name="Edge", hire_date=date(2025, 1, 1))

        query = apply_filters(select(Employee), Employee, {
            "hire_date__from": date(2025, 1, 1),
            "hire_date__to": date(2025, 1, 1),
        })
        assert await _names(db, query) == ["Edge"]

    async def test_filter_by_in(self, db: AsyncSession):
        for name in ("Alice", "Bob", "Charlie"):
            await make_employee(db, first_name=name)

        query = apply_filters(
            select(Employee).order_by(Employee.first_name),
            Employee,
            {"first_name__in": ["Alice", "Charlie"]},
        )
        assert await _names(db, query) == ["Alice", "Charlie"]

    async def test_filter_nonexistent_column_ignored(self, db: AsyncSession):
        await make_employee(db, first_name="Alice")

        query = apply_filters(select(Employee), Employee, {"nonexistent_col": "value"})
        assert await _names(db, query) == ["Alice"]


# ═════════════════════════════════════════════════════════════════════
# SORT / SEARCH TESTS
# ═════════════════════════════════════════════════════════════════════


class TestApplySorting:

    async def test_sort_ascending(self, db: AsyncSession):
        await make_employee(db, first_name="Zara")
        await make_employee(db, first_name="Adam")

        query = apply_sorting(select(Employee), Employee, "first_name")
        assert await _names(db, query) == ["Adam", "Zara"]

    async def test_sort_descending_replaces_default_order(self, db: AsyncSession):
        await make_employee(db, first_name="Zara")
        await make_employee(db, first_name="Adam")

        base = select(Employee).order_by(Employee.first_name.asc())
        query = apply_sorting(base, Employee, "-first_name")
        assert await _names(db, query) == ["Zara", "Adam"]

    def test_sort_none_no_op(self):
        query = select(Employee)
        assert apply_sorting(query, Employee, None) is query

    def test_sort_unknown_column_keeps_query(self):
        query = select(Employee).order_by(Employee.last_name)
        assert apply_sorting(query, Employee, "-does_not_exist") is query


class TestApplySearch:

    async def test_search_any_column(self, db: AsyncSession):
        await make_employee(db, first_name="Ada", last_name="Lovelace")
        await make_employee(db, first_name="Alan", last_name="Turing")

        query = apply_search(select(Employee), Employee, "LOVE", ["first_name", "last_name"])
        assert await _names(db, query) == ["Ada"]

    def test_blank_search_ignored(self):
        query = select(Employee)
        assert apply_search(query, Employee, "   ", ["first_name"]) is query

    def test_unknown_columns_ignored(self):
        query = select(Employee)
        assert apply_search(query, Employee, "x", ["nope"]) is query


class TestGetColumn:

    def test_get_existing_column(self):
        assert _get_column(Employee, "email") is not None

    def test_relationship_is_not_a_column(self):
        assert _get_column(Employee, "department") is None

    def test_private_and_missing_names(self):
        assert _get_column(Employee, "_sa_instance_state") is None
        assert _get_column(Employee, "nonexistent") is None


# ═════════════════════════════════════════════════════════════════════
# PAGINATION TESTS
# ═════════════════════════════════════════════════════════════════════


class TestPagination:

    async def test_meta_for_middle_page(self, db: AsyncSession):
        for i in range(5):
            await make_employee(db, first_name=f"E{i}")

        page = await paginate(
            db,
            select(Employee).order_by(Employee.first_name),
            page_params(page=2, page_size=2),
        )
        assert [e.first_name for e in page.data] == ["E2", "E3"]
        assert page.meta.total == 5
        assert page.meta.total_pages == 3
        assert page.meta.has_next is True
        assert page.meta.has_prev is True

    async def test_last_page(self, db: AsyncSession):
        for i in range(3):
            await make_employee(db, first_name=f"E{i}")

        page = await paginate(
            db,
            select(Employee).order_by(Employee.first_name),
            page_params(page=2, page_size=2),
        )
        assert [e.first_name for e in page.data] == ["E2"]
        assert page.meta.has_next is False

    async def test_empty_result(self, db: AsyncSession):
        page = await paginate(db, select(Employee), page_params())
        assert page.data == []
        assert page.meta.total == 0
        assert page.meta.total_pages == 0
        assert page.meta.has_next is False
        assert page.meta.has_prev is False

    async def test_client_sort_and_schema(self, db: AsyncSession):
        await make_employee(db, first_name="Bea")
        await make_employee(db, first_name="Cal")

        page = await paginate(
            db,
            select(Employee).order_by(Employee.first_name),
            page_params(sort="-first_name"),
            model=Employee,
            schema=EmployeeSummary,
        )
        assert all(isinstance(e, EmployeeSummary) for e in page.data)
        assert [e.first_name for e in page.data] == ["Cal", "Bea"]

    async def test_page_beyond_end(self, db: AsyncSession):
        await make_employee(db)
        page = await paginate(db, select(Employee), page_params(page=4, page_size=10))
        assert page.data == []
        assert page.meta.total == 1
        assert page.meta.has_prev is True


async def test_http_pagination_bounds(client, auth_headers):
    too_big = await client.get("/api/v1/employees?page_size=101", headers=auth_headers)
    assert too_big.status_code == 422

    zero_page = await client.get("/api/v1/employees?page=0", headers=auth_headers)
    assert zero_page.status_code == 422


# ═════════════════════════════════════════════════════════════════════
# QUERY HELPERS
# ═════════════════════════════════════════════════════════════════════


class TestQueryHelpers:

    async def test_get_or_404_label(self, db: AsyncSession):
        with pytest.raises(NotFoundException) as exc:
            await get_or_404(db, Company, uuid.uuid4())
        assert exc.value.title == "Company Not Found"
        assert exc.value.status_code == 404

    async def test_ensure_exists_accepts_none(self, db: AsyncSession):
        await ensure_exists(db, Company, None)

    async def test_ensure_exists_custom_label(self, db: AsyncSession):
        with pytest.raises(NotFoundException) as exc:
            await ensure_exists(db, Employee, uuid.uuid4(), "Manager")
        assert exc.value.title == "Manager Not Found"

    async def test_exists(self, db: AsyncSession):
        company = await make_company(db)
        assert await exists(db, Company, Company.name == company.name)
        assert not await exists(db, Company, Company.name == "Nobody Inc")

    def test_apply_changes_returns_old_values(self):
        company = Company(name="Old", industry="Retail")
        old = apply_changes(company, {"name": "New", "industry": "Retail"})
        assert old == {"name": "Old"}
        assert company.name == "New"

    def test_conflict_duplicate_errors(self):
        err = ConflictError.duplicate("email", "a@example.com")
        assert err.status_code == 409
        assert err.errors == {"email": ["'a@example.com' is already in use."]}


# ═════════════════════════════════════════════════════════════════════
# AUDIT SNAPSHOTS
# ═════════════════════════════════════════════════════════════════════


def test_snapshot_is_json_safe():
    ident = uuid.uuid4()
    rendered = snapshot({
        "status": EmployeeStatus.ACTIVE,
        "hire_date": date(2025, 3, 1),
        "salary": Decimal("1000.50"),
        "manager_id": ident,
        "tags": ("a", "b"),
        "city": None,
    })
    assert rendered == {
        "status": "ACTIVE",
        "hire_date": "2025-03-01",
        "salary": "1000.50",
        "manager_id": str(ident),
        "tags": ["a", "b"],
        "city": None,
    }


def test_snapshot_empty_is_null():
    assert snapshot({}) is None
    assert snapshot(None) is None


# ═════════════════════════════════════════════════════════════════════
# PATCH BODY TESTS
# ═════════════════════════════════════════════════════════════════════


class _ItemUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name"})

    name: Optional[str] = None
    note: Optional[str] = None


class TestPatchModel:

    def test_omitted_fields_stay_unset(self):
        assert _ItemUpdate().model_dump(exclude_unset=True) == {}

    def test_nullable_field_may_be_cleared(self):
        assert _ItemUpdate(note=None).model_dump(exclude_unset=True) == {"note": None}

    def test_null_rejected_for_non_nullable(self):
        with pytest.raises(ValidationError) as exc:
            _ItemUpdate(name=None)
        error = exc.value.errors()[0]
        assert error["loc"] == ("name",)
        assert "cannot be null" in error["msg"]

    def test_value_accepted_for_non_nullable(self):
        assert _ItemUpdate(name="Ada").name == "Ada"

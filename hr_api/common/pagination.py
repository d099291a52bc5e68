"""Page/size/sort query parameters and the ``{"data", "meta"}`` list envelope."""


import math
from typing import Any, Generic, Optional, Sequence, TypeVar

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.common.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from hr_api.common.filters import apply_sorting

T = TypeVar("T")


class PaginationParams:
    """List-endpoint query parameters, injected with ``Depends(PaginationParams)``.

    Out-of-range values never reach a service: FastAPI rejects ``page < 1``
    and ``page_size`` outside ``1..MAX_PAGE_SIZE`` with a 422.
    """

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="1-based page number"),
        page_size: int = Query(
            default=DEFAULT_PAGE_SIZE,
            ge=1,
            le=MAX_PAGE_SIZE,
            description=f"Rows per page, at most {MAX_PAGE_SIZE}",
        ),
        sort: Optional[str] = Query(
            default=None,
            description='Column to order by, "-" prefix for descending (e.g. "-hire_date")',
        ),
    ) -> None:
        self.page = page
        self.page_size = page_size
        self.sort = sort

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def window(self, query: Select) -> Select:
        return query.offset(self.offset).limit(self.page_size)


class PaginationMeta(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, params: PaginationParams, total: int) -> "PaginationMeta":
        pages = math.ceil(total / params.page_size) if total else 0
        return cls(
            page=params.page,
            page_size=params.page_size,
            total=total,
            total_pages=pages,
            has_next=params.page < pages,
            has_prev=params.page > 1,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    data: Sequence[T]
    meta: PaginationMeta


async def count_rows(session: AsyncSession, query: Select) -> int:
    """Number of rows *query* would return, ignoring ORDER BY/LIMIT."""
    wrapped = select(func.count()).select_from(query.order_by(None).subquery())
    return (await session.execute(wrapped)).scalar_one()


async def paginate(
    session: AsyncSession,
    query: Select,
    params: PaginationParams,
    *,
    model: Any = None,
    schema: Any = None,
) -> PaginatedResponse:
    """
    Run one page of *query* and wrap it with its pagination metadata.

    ``params.sort`` overrides the query's own ordering only when *model* is
    given and the name is one of its columns. With *schema*, each row is
    converted through ``schema.model_validate`` before being returned.
    """
    if model is not None:
        query = apply_sorting(query, model, params.sort)

    total = await count_rows(session, query)
    rows: Sequence[Any] = (await session.execute(params.window(query))).scalars().all()
    if schema is not None:
        rows = [schema.model_validate(row) for row in rows]

    return PaginatedResponse(data=rows, meta=PaginationMeta.build(params, total))

"""Query-string driven WHERE and ORDER BY clauses for list endpoints.

Services collect their optional query parameters into a dict and hand it to
:func:`apply_filters`; the key suffix picks the comparison. Only real mapped
columns are honoured, so a typo or a relationship name never reaches SQL.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from sqlalchemy import Select, String, and_, cast, or_
from sqlalchemy.orm import ColumnProperty, InstrumentedAttribute

_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "ilike": lambda col, value: col.ilike(f"%{value}%"),
    "from": lambda col, value: col >= value,
    "to": lambda col, value: col <= value,
    "in": lambda col, value: col.in_(value),
}


def _get_column(model: Any, name: str) -> Optional[InstrumentedAttribute]:
    if name.startswith("_"):
        return None
    attr = getattr(model, name, None)
    if isinstance(attr, InstrumentedAttribute) and isinstance(attr.property, ColumnProperty):
        return attr
    return None


def _split_key(key: str) -> tuple[str, str]:
    name, sep, suffix = key.rpartition("__")
    if sep and suffix in _OPERATORS:
        return name, suffix
    return key, "eq"


def apply_filters(
    query: Select,
    model: Any,
    filters: dict[str, Any],
) -> Select:
    """
    AND together one condition per non-``None`` entry of *filters*.

    ``status`` compares for equality; ``name__ilike`` is a case-insensitive
    substring match; ``hire_date__from`` / ``hire_date__to`` are inclusive
    bounds; ``id__in`` takes a sequence.
    """
    conditions = []
    for key, value in filters.items():
        if value is None:
            continue
        name, op = _split_key(key)
        col = _get_column(model, name)
        if col is None:
            continue
        conditions.append(col == value if op == "eq" else _OPERATORS[op](col, value))

    return query.where(and_(*conditions)) if conditions else query


def apply_sorting(
    query: Select,
    model: Any,
    sort: Optional[str],
) -> Select:
    """Order by ``sort`` (``"-"`` prefix for DESC), replacing any existing ORDER BY."""
    if not sort:
        return query
    col = _get_column(model, sort.lstrip("-"))
    if col is None:
        return query
    return query.order_by(None).order_by(col.desc() if sort.startswith("-") else col.asc())


def apply_search(
    query: Select,
    model: Any,
    search: Optional[str],
    columns: Sequence[str],
) -> Select:
    """Keep rows where any of *columns* contains *search*, ignoring case."""
    term = (search or "").strip()
    if not term:
        return query
    matches = [
        cast(col, String).ilike(f"%{term}%")
        for col in (_get_column(model, name) for name in columns)
        if col is not None
    ]
    return query.where(or_(*matches)) if matches else query

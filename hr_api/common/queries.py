"""Small query helpers shared by the service layers."""

from __future__ import annotations

import uuid
from typing import Any, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.common.exceptions import ConflictError, NotFoundException

M = TypeVar("M")


async def get_or_404(
    db: AsyncSession,
    model: type[M],
    entity_id: uuid.UUID,
    entity_type: Optional[str] = None,
    *,
    options: tuple = (),
) -> M:
    """Load *model* by primary key or raise ``NotFoundException``.

    Always re-reads the row so aggregate columns and eager-loaded
    relationships reflect the current database state.
    """
    stmt = (
        select(model)
        .where(model.id == entity_id)
        .options(*options)
        .execution_options(populate_existing=True)
    )
    obj = (await db.execute(stmt)).scalars().first()
    if obj is None:
        raise NotFoundException(entity_type or model.__name__, str(entity_id))
    return obj


async def ensure_exists(
    db: AsyncSession,
    model: Any,
    entity_id: Optional[uuid.UUID],
    entity_type: Optional[str] = None,
) -> None:
    """Raise ``NotFoundException`` unless *entity_id* is None or present."""
    if entity_id is None:
        return
    found = await db.execute(select(model.id).where(model.id == entity_id))
    if found.first() is None:
        raise NotFoundException(entity_type or model.__name__, str(entity_id))


async def exists(db: AsyncSession, model: Any, *conditions: Any) -> bool:
    """True if at least one *model* row satisfies every condition."""
    stmt = select(model.id).where(*conditions).limit(1)
    return (await db.execute(stmt)).first() is not None


def apply_changes(obj: Any, changes: dict[str, Any]) -> dict[str, Any]:
    """Set attributes on *obj* and return the previous values of changed fields."""
    old_values: dict[str, Any] = {}
    for field, value in changes.items():
        current = getattr(obj, field)
        if current != value:
            old_values[field] = current
            setattr(obj, field, value)
    return old_values


async def delete_or_conflict(db: AsyncSession, obj: Any, entity_type: str) -> None:
    """Delete *obj*; rows still referencing it turn into a 409."""
    await db.delete(obj)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(
            f"{entity_type} is still referenced by other records and cannot be deleted."
        )

"""Row timestamps and the append-only audit trail.

Every service that changes employee data, approves a submission or
authenticates a user records what happened through
:func:`create_audit_entry`. Rows are never updated or deleted by the API.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import INET, JSONB, UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from hr_api.database import Base

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp(**kwargs: Any) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        **kwargs,
    )


class TimestampMixin:
    """``created_at`` / ``updated_at`` columns shared by every HR table."""

    created_at: Mapped[datetime] = _timestamp()
    updated_at: Mapped[datetime] = _timestamp(onupdate=utcnow)


class AuditTrail(Base):
    __tablename__ = "audit_trail"
    __table_args__ = (
        Index("ix_audit_trail_entity", "entity_type", "entity_id"),
        Index("ix_audit_trail_actor_id", "actor_id"),
        Index("ix_audit_trail_action", "action"),
        Index("ix_audit_trail_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    # Kept when the user account is removed
    actor_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
    old_values = Column(JSONB, nullable=True)
    new_values = Column(JSONB, nullable=True)
    ip_address = Column(INET, nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at: Mapped[datetime] = _timestamp()

    @property
    def changed_fields(self) -> list[str]:
        """Names present in either value mapping, sorted."""
        return sorted(set(self.old_values or {}) | set(self.new_values or {}))

    def __repr__(self) -> str:
        return f"<AuditTrail {self.entity_type}:{self.entity_id} {self.action} actor={self.actor_id}>"


# ── Recording changes ───────────────────────────────────────────────

def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (Decimal, uuid.UUID)):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    return str(value)


def snapshot(values: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Render a field/value mapping so it can be stored in a JSONB column.

    Enums collapse to their value, dates to ISO-8601 and decimals or UUIDs
    to strings. ``None`` and empty mappings are stored as NULL.
    """
    if not values:
        return None
    return _jsonable(values)


async def create_audit_entry(
    session: AsyncSession,
    *,
    action: str,
    entity_type: str,
    entity_id: uuid.UUID,
    actor_id: Optional[uuid.UUID] = None,
    old_values: Optional[dict[str, Any]] = None,
    new_values: Optional[dict[str, Any]] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AuditTrail:
    """
    Append a row to the audit trail and flush it inside the caller's transaction.

    ``action`` is a short verb such as ``login``, ``submit`` or ``reimburse``;
    ``entity_type`` is the snake_case name of the record that changed. The
    value mappings may hold enums, dates and decimals: they pass through
    :func:`snapshot` before being written.
    """
    entry = AuditTrail(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        old_values=snapshot(old_values),
        new_values=snapshot(new_values),
        ip_address=ip_address,
        user_agent=user_agent,
    )
    session.add(entry)
    await session.flush()
    logger.debug("Audit %s %s/%s by %s", action, entity_type, entity_id, actor_id)
    return entry

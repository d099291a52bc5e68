"""Skills ORM models: Skill, EmployeeSkill."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hr_api.common.audit import TimestampMixin
from hr_api.common.constants import SkillLevel
from hr_api.core_hr.models import Employee
from hr_api.database import Base


class Skill(Base, TimestampMixin):
    __tablename__ = "skills"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    category: Mapped[Optional[str]] = mapped_column(sa.String(100), index=True)

    def __repr__(self) -> str:
        return f"<Skill {self.name!r}>"


class EmployeeSkill(Base, TimestampMixin):
    """An employee's proficiency in one skill, with optional certification."""

    __tablename__ = "employee_skills"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "skill_id", name="uq_employee_skill"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("skills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    level: Mapped[SkillLevel] = mapped_column(
        sa.Enum(SkillLevel, name="skill_level"), nullable=False,
    )
    years_of_experience: Mapped[Optional[int]] = mapped_column(sa.Integer)
    certified: Mapped[bool] = mapped_column(
        sa.Boolean, default=False, server_default=sa.false(), nullable=False,
    )
    certified_at: Mapped[Optional[date]] = mapped_column(sa.Date)
    expires_at: Mapped[Optional[date]] = mapped_column(sa.Date)
    notes: Mapped[Optional[str]] = mapped_column(sa.Text)

    employee: Mapped[Employee] = relationship()
    skill: Mapped[Skill] = relationship()


Skill.employee_count = column_property(
    sa.select(sa.func.count(EmployeeSkill.id))
    .where(EmployeeSkill.skill_id == Skill.id)
    .correlate_except(EmployeeSkill)
    .scalar_subquery(),
)

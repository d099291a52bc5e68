"""Projects ORM models: Project, Team, ProjectTeam, BudgetItem."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from hr_api.common.audit import TimestampMixin, utcnow
from hr_api.common.constants import DEFAULT_CURRENCY, Priority, ProjectStatus
from hr_api.core_hr.models import Employee
from hr_api.database import Base


# ═════════════════════════════════════════════════════════════════════
# Project
# ═════════════════════════════════════════════════════════════════════


class Project(Base, TimestampMixin):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    status: Mapped[ProjectStatus] = mapped_column(
        sa.Enum(ProjectStatus, name="project_status"),
        default=ProjectStatus.PLANNING,
        server_default=ProjectStatus.PLANNING.name,
        nullable=False,
        index=True,
    )
    priority: Mapped[Priority] = mapped_column(
        sa.Enum(Priority, name="priority"),
        default=Priority.MEDIUM,
        server_default=Priority.MEDIUM.name,
        nullable=False,
    )
    start_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    end_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    budget: Mapped[Optional[Decimal]] = mapped_column(sa.Numeric(14, 2))
    currency: Mapped[str] = mapped_column(
        sa.String(3), default=DEFAULT_CURRENCY, server_default=DEFAULT_CURRENCY,
    )
    manager_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employees.id", ondelete="SET NULL"),
        index=True,
    )

    manager: Mapped[Optional[Employee]] = relationship()
    teams: Mapped[list[ProjectTeam]] = relationship(
        back_populates="project", passive_deletes=True,
    )
    budget_items: Mapped[list[BudgetItem]] = relationship(
        back_populates="project",
        passive_deletes=True,
        order_by="BudgetItem.created_at",
    )

    def __repr__(self) -> str:
        return f"<Project {self.name!r} ({self.status.value})>"


# ═════════════════════════════════════════════════════════════════════
# Team / assignment
# ═════════════════════════════════════════════════════════════════════


class Team(Base, TimestampMixin):
    __tablename__ = "teams"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(200), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    lead_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id", ondelete="SET NULL"),
    )

    lead: Mapped[Optional[Employee]] = relationship()

    def __repr__(self) -> str:
        return f"<Team {self.name!r}>"


class ProjectTeam(Base):
    """Assignment of a team to a project, with an optional role."""

    __tablename__ = "project_teams"
    __table_args__ = (
        sa.UniqueConstraint("project_id", "team_id", name="uq_project_team"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    team_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[Optional[str]] = mapped_column(sa.String(100))
    assigned_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False,
    )

    project: Mapped[Project] = relationship(back_populates="teams")
    team: Mapped[Team] = relationship()


# ═════════════════════════════════════════════════════════════════════
# Budget
# ═════════════════════════════════════════════════════════════════════


class BudgetItem(Base, TimestampMixin):
    __tablename__ = "budget_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(sa.String(500), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(sa.String(100))
    amount: Mapped[Decimal] = mapped_column(sa.Numeric(14, 2), nullable=False)

    project: Mapped[Project] = relationship(back_populates="budget_items")


Project.budget_spent = column_property(
    sa.select(sa.func.coalesce(sa.func.sum(BudgetItem.amount), 0))
    .where(BudgetItem.project_id == Project.id)
    .correlate_except(BudgetItem)
    .scalar_subquery(),
)

Team.project_count = column_property(
    sa.select(sa.func.count(ProjectTeam.id))
    .where(ProjectTeam.team_id == Team.id)
    .correlate_except(ProjectTeam)
    .scalar_subquery(),
)

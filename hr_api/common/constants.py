"""Enums and constants for the HR System API, matching the PostgreSQL ENUM types."""

from __future__ import annotations

import enum


# ── Auth / Roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    employee = "employee"
    manager = "manager"
    hr_admin = "hr_admin"
    system_admin = "system_admin"


# ── Companies / Core HR ─────────────────────────────────────────────

class CompanySize(str, enum.Enum):
    STARTUP = "STARTUP"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    ENTERPRISE = "ENTERPRISE"


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TERMINATED = "TERMINATED"
    ON_LEAVE = "ON_LEAVE"


# ── Benefits ────────────────────────────────────────────────────────

class BenefitType(str, enum.Enum):
    HEALTH_INSURANCE = "HEALTH_INSURANCE"
    DENTAL_INSURANCE = "DENTAL_INSURANCE"
    VISION_INSURANCE = "VISION_INSURANCE"
    LIFE_INSURANCE = "LIFE_INSURANCE"
    RETIREMENT_401K = "RETIREMENT_401K"
    VACATION = "VACATION"
    SICK_LEAVE = "SICK_LEAVE"
    OTHER = "OTHER"


class EnrollmentStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


# ── Performance ─────────────────────────────────────────────────────

class CycleType(str, enum.Enum):
    ANNUAL = "ANNUAL"
    QUARTERLY = "QUARTERLY"
    MONTHLY = "MONTHLY"
    PROJECT_BASED = "PROJECT_BASED"


class CycleStatus(str, enum.Enum):
    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    IN_REVIEW = "IN_REVIEW"
    CALIBRATION = "CALIBRATION"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ReviewType(str, enum.Enum):
    ANNUAL = "ANNUAL"
    MID_YEAR = "MID_YEAR"
    PROBATION = "PROBATION"
    PROJECT = "PROJECT"
    QUARTERLY = "QUARTERLY"
    CONTINUOUS = "CONTINUOUS"


class ReviewStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    IN_PROGRESS = "IN_PROGRESS"
    SELF_REVIEW = "SELF_REVIEW"
    MANAGER_REVIEW = "MANAGER_REVIEW"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    CALIBRATION = "CALIBRATION"
    COMPLETED = "COMPLETED"
    ACKNOWLEDGED = "ACKNOWLEDGED"


class PromotionRecommendation(str, enum.Enum):
    NONE = "NONE"
    NOT_READY = "NOT_READY"
    READY_NOW = "READY_NOW"
    READY_6_MONTHS = "READY_6_MONTHS"
    READY_12_MONTHS = "READY_12_MONTHS"


# Reviews can only be submitted from these states
SUBMITTABLE_REVIEW_STATUSES = frozenset({ReviewStatus.DRAFT, ReviewStatus.IN_PROGRESS})

# Reached only through the submit and complete endpoints
REVIEW_TRANSITION_STATUSES = frozenset({ReviewStatus.PENDING_APPROVAL, ReviewStatus.COMPLETED})


# ── Goals ───────────────────────────────────────────────────────────

class GoalCategory(str, enum.Enum):
    PERFORMANCE = "PERFORMANCE"
    DEVELOPMENT = "DEVELOPMENT"
    CAREER = "CAREER"
    PROJECT = "PROJECT"
    COMPANY = "COMPANY"


class GoalStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ON_HOLD = "ON_HOLD"


# ── Time tracking ───────────────────────────────────────────────────

class TimeRecordStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    NEEDS_REVIEW = "NEEDS_REVIEW"


REVIEWABLE_TIME_RECORD_STATUSES = frozenset(
    {TimeRecordStatus.PENDING, TimeRecordStatus.NEEDS_REVIEW}
)

# Reached only through the approve and reject endpoints
TIME_RECORD_DECISION_STATUSES = frozenset({TimeRecordStatus.APPROVED, TimeRecordStatus.REJECTED})


# ── Expenses ────────────────────────────────────────────────────────

class ExpenseStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REIMBURSED = "REIMBURSED"
    CANCELLED = "CANCELLED"


# Expenses in these states are frozen unless the update moves the status
LOCKED_EXPENSE_STATUSES = frozenset({ExpenseStatus.APPROVED, ExpenseStatus.REIMBURSED})

# Reached only through the approve, reject and reimburse endpoints
EXPENSE_DECISION_STATUSES = frozenset(
    {ExpenseStatus.APPROVED, ExpenseStatus.REJECTED, ExpenseStatus.REIMBURSED}
)


# ── Training ────────────────────────────────────────────────────────

class TrainingType(str, enum.Enum):
    ONLINE = "ONLINE"
    IN_PERSON = "IN_PERSON"
    WORKSHOP = "WORKSHOP"
    SEMINAR = "SEMINAR"
    CONFERENCE = "CONFERENCE"
    CERTIFICATION = "CERTIFICATION"


class TrainingStatus(str, enum.Enum):
    ENROLLED = "ENROLLED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# ── Skills ──────────────────────────────────────────────────────────

class SkillLevel(str, enum.Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


# ── Projects / Announcements ────────────────────────────────────────

class ProjectStatus(str, enum.Enum):
    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Priority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class AnnouncementType(str, enum.Enum):
    GENERAL = "GENERAL"
    POLICY = "POLICY"
    EVENT = "EVENT"
    HOLIDAY = "HOLIDAY"
    URGENT = "URGENT"


class AnnouncementStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


# ── Role hierarchy ──────────────────────────────────────────────────

ROLE_LEVELS: dict[UserRole, int] = {
    UserRole.employee: 1,
    UserRole.manager: 2,
    UserRole.hr_admin: 3,
    UserRole.system_admin: 4,
}


# ── Misc ────────────────────────────────────────────────────────────

DEFAULT_CURRENCY = "USD"
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
RECENT_EXPENSES_LIMIT = 10

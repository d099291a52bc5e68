"""Common module: building blocks shared by every HR System API service."""

from hr_api.common.audit import AuditTrail, TimestampMixin, create_audit_entry, utcnow
from hr_api.common.exceptions import (
    AppException,
    BadRequestException,
    ConflictError,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    register_exception_handlers,
)
from hr_api.common.filters import apply_filters, apply_search, apply_sorting
from hr_api.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_api.common.queries import (
    apply_changes,
    delete_or_conflict,
    ensure_exists,
    exists,
    get_or_404,
)

__all__ = [
    # Audit trail and timestamps
    "AuditTrail",
    "TimestampMixin",
    "create_audit_entry",
    "utcnow",
    # RFC 7807 errors
    "AppException",
    "BadRequestException",
    "ConflictError",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    "register_exception_handlers",
    # Listing
    "apply_filters",
    "apply_search",
    "apply_sorting",
    "PaginatedResponse",
    "PaginationParams",
    "paginate",
    # Lookups
    "apply_changes",
    "delete_or_conflict",
    "ensure_exists",
    "exists",
    "get_or_404",
]

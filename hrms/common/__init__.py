"""Common module — shared utilities for the HRMS leave engine."""

from hrms.common.constants import (
    ENTITLEMENT_POLICY,
    WEEKEND_DAYS,
    Department,
    LeaveStatus,
    LeaveTypeName,
    UserRole,
)
from hrms.common.exceptions import (
    AppException,
    BusinessRuleViolation,
    ConflictError,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    register_exception_handlers,
)
from hrms.common.pagination import (
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
    paginate,
)

__all__ = [
    # Constants / Enums
    "Department",
    "LeaveStatus",
    "LeaveTypeName",
    "UserRole",
    "ENTITLEMENT_POLICY",
    "WEEKEND_DAYS",
    # Exceptions
    "AppException",
    "BusinessRuleViolation",
    "ConflictError",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    "register_exception_handlers",
    # Pagination
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "paginate",
]

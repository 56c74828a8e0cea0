"""Custom exceptions and RFC 7807 Problem Detail error handlers."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

BASE_ERROR_URI = "https://hrms.example.com/errors"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all application exceptions → RFC 7807 JSON."""

    code: str = "APP_ERROR"

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)


class NotFoundException(AppException):
    """404 — entity not found."""

    code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            status_code=404,
            error_type="not-found",
            title=f"{entity_type} Not Found",
            detail=f"{entity_type} with id '{entity_id}' does not exist.",
        )


class ConflictError(AppException):
    """409 — unique-constraint / duplicate / state conflict."""

    code = "CONFLICT"

    def __init__(
        self,
        field: str,
        value: Any,
        *,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(
            status_code=409,
            error_type="conflict",
            title="Conflict",
            detail=detail or f"An entry with {field}='{value}' already exists.",
            errors={field: [f"'{value}' is already in use."]} if detail is None else None,
        )


class ForbiddenException(AppException):
    """403 — insufficient permissions."""

    code = "FORBIDDEN"

    def __init__(
        self,
        detail: str = "You do not have permission to perform this action.",
    ) -> None:
        super().__init__(
            status_code=403,
            error_type="forbidden",
            title="Forbidden",
            detail=detail,
        )


class ValidationException(AppException):
    """422 — invalid input detected by business-logic validation."""

    code = "INVALID_INPUT"

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            status_code=422,
            error_type="validation-error",
            title="Validation Error",
            detail="; ".join(msg for msgs in errors.values() for msg in msgs),
            errors=errors,
        )


class BusinessRuleViolation(AppException):
    """422 — input is well-formed but a business rule forbids the operation."""

    code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, rule: str, detail: str, errors: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            status_code=422,
            error_type=f"business-rule/{rule}",
            title="Business Rule Violation",
            detail=detail,
            errors=errors,
        )


# ── Not found ───────────────────────────────────────────────────────

class EmployeeNotFound(NotFoundException):
    code = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: uuid.UUID) -> None:
        super().__init__("Employee", employee_id)


class LeaveRequestNotFound(NotFoundException):
    code = "LEAVE_REQUEST_NOT_FOUND"

    def __init__(self, request_id: uuid.UUID) -> None:
        super().__init__("LeaveRequest", request_id)


class LeaveTypeNotConfigured(NotFoundException):
    """The name is a valid leave type but the catalog row was never provisioned."""

    code = "LEAVE_TYPE_NOT_CONFIGURED"

    def __init__(self, name: str) -> None:
        super().__init__("LeaveType", name)
        self.detail = f"Leave type '{name}' is not configured."


class NoBalanceConfigured(NotFoundException):
    code = "NO_BALANCE_CONFIGURED"

    def __init__(self, employee_id: uuid.UUID, leave_type: Any) -> None:
        super().__init__("LeaveBalance", f"{employee_id}/{leave_type}")
        self.employee_id = employee_id
        self.leave_type = leave_type
        self.detail = (
            f"No leave balance configured for employee '{employee_id}' "
            f"and leave type '{leave_type}'."
        )


# ── Invalid input ───────────────────────────────────────────────────

class InvalidDateRange(ValidationException):
    code = "INVALID_DATE_RANGE"

    def __init__(self, start_date: date, end_date: date) -> None:
        super().__init__(
            {"end_date": [
                f"End date {end_date.isoformat()} cannot be before "
                f"start date {start_date.isoformat()}."
            ]}
        )


class UnknownLeaveType(ValidationException):
    code = "UNKNOWN_LEAVE_TYPE"

    def __init__(self, name: str) -> None:
        super().__init__({"leave_type": [f"Invalid leave type: {name}"]})


class NoWorkingDaysSelected(ValidationException):
    code = "NO_WORKING_DAYS_SELECTED"

    def __init__(self, start_date: date, end_date: date) -> None:
        super().__init__(
            {"dates": [
                f"Selected dates {start_date.isoformat()} to "
                f"{end_date.isoformat()} contain no working days."
            ]}
        )


# ── Conflict ────────────────────────────────────────────────────────

class AlreadyProcessed(ConflictError):
    code = "ALREADY_PROCESSED"

    def __init__(self, request_id: uuid.UUID, status: Any) -> None:
        self.request_id = request_id
        self.status = status
        label = getattr(status, "value", status)
        super().__init__(
            "status",
            label,
            detail=f"Leave request '{request_id}' is already {label}.",
        )


class DuplicateEntitlement(ConflictError):
    code = "DUPLICATE_ENTITLEMENT"

    def __init__(self, employee_id: uuid.UUID, leave_type_id: uuid.UUID) -> None:
        super().__init__(
            "leave_type_id",
            leave_type_id,
            detail=(
                f"Employee '{employee_id}' already has a balance for "
                f"leave type '{leave_type_id}'."
            ),
        )


class DuplicateEmployee(ConflictError):
    code = "DUPLICATE_EMPLOYEE"

    def __init__(self, email: str) -> None:
        super().__init__("email", email)


# ── Business rule ───────────────────────────────────────────────────

class InsufficientBalance(BusinessRuleViolation):
    code = "INSUFFICIENT_BALANCE"

    def __init__(self, available: int, requested: int) -> None:
        self.available = available
        self.requested = requested
        super().__init__(
            "insufficient-balance",
            f"Insufficient leave balance. Available: {available}, Requested: {requested}.",
            errors={"balance": [f"available={available}", f"requested={requested}"]},
        )


# ── RFC 7807 builder ────────────────────────────────────────────────

def _build_problem_detail(exc: AppException, request: Request) -> dict[str, Any]:
    body: dict[str, Any] = {
        "type": f"{BASE_ERROR_URI}/{exc.error_type}",
        "title": exc.title,
        "status": exc.status_code,
        "detail": exc.detail,
        "code": exc.code,
        "instance": str(request.url.path),
    }
    if exc.errors:
        body["errors"] = exc.errors
    return body


# ── FastAPI handlers ────────────────────────────────────────────────

async def _handle_app_exception(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_build_problem_detail(exc, request),
        media_type="application/problem+json",
    )


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    field_errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err.get("loc", ())
        name = (
            ".".join(str(p) for p in loc[1:])
            if len(loc) > 1
            else str(loc[0]) if loc else "unknown"
        )
        field_errors.setdefault(name, []).append(err.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=422,
        content={
            "type": f"{BASE_ERROR_URI}/validation-error",
            "title": "Validation Error",
            "status": 422,
            "detail": "Request validation failed.",
            "code": ValidationException.code,
            "instance": str(request.url.path),
            "errors": field_errors,
        },
        media_type="application/problem+json",
    )


# ── Registration helper (called from main.py) ──────────────────────

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""
    app.add_exception_handler(AppException, _handle_app_exception)          # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]

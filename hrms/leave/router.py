"""Leave router — leave types, balances, apply, history, approve/reject.

Manager-only endpoints (pending queue and decisions) enforce the role via
the bearer token; the rest are open.
"""


import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.auth.dependencies import require_role
from hrms.auth.schemas import CurrentUser
from hrms.common.constants import UserRole
from hrms.common.pagination import PaginatedResponse, PaginationParams
from hrms.common.rate_limit import WRITE_LIMIT, limiter
from hrms.database import get_db
from hrms.leave.schemas import (
    LeaveApplyRequest,
    LeaveBalanceOut,
    LeaveDecisionRequest,
    LeaveRequestOut,
    LeaveTypeOut,
)
from hrms.leave.service import LeaveService

router = APIRouter(prefix="", tags=["leave"])


# ── GET /types ──────────────────────────────────────────────────────

@router.get("/types", response_model=list[LeaveTypeOut])
async def list_leave_types(db: AsyncSession = Depends(get_db)):
    return await LeaveService.get_leave_types(db)


# ── GET /balances/{employee_id} ─────────────────────────────────────

@router.get("/balances/{employee_id}", response_model=list[LeaveBalanceOut])
async def get_balances(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Remaining days per leave type for one employee."""
    return await LeaveService.get_balances(db, employee_id)


# ── POST /apply ─────────────────────────────────────────────────────

@router.post("/apply", response_model=LeaveRequestOut, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def apply_leave(
    request: Request,
    body: LeaveApplyRequest,
    db: AsyncSession = Depends(get_db),
):
    """Apply for leave. Validates dates, type, balance and working days."""
    return await LeaveService.apply_leave(
        db,
        body.employee_id,
        body.leave_type,
        body.start_date,
        body.end_date,
        body.reason,
    )


# ── GET /history ────────────────────────────────────────────────────

@router.get("/history", response_model=PaginatedResponse[LeaveRequestOut])
async def leave_history(
    employee_id: uuid.UUID = Query(..., description="Employee whose requests to list"),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """An employee's leave requests, oldest first (zero-based pages)."""
    return await LeaveService.get_history(
        db, employee_id, pagination.page, pagination.size,
    )


# ── GET /pending ────────────────────────────────────────────────────

@router.get("/pending", response_model=PaginatedResponse[LeaveRequestOut])
async def pending_approvals(
    pagination: PaginationParams = Depends(),
    user: CurrentUser = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    """Requests awaiting a decision, oldest first."""
    return await LeaveService.get_pending(db, pagination.page, pagination.size)


# ── PATCH /{id}/approve ─────────────────────────────────────────────

@router.patch("/{request_id}/approve", response_model=LeaveRequestOut)
async def approve_leave(
    request_id: uuid.UUID,
    body: Optional[LeaveDecisionRequest] = None,
    user: CurrentUser = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    """Approve a pending leave request. Deducts from balance."""
    return await LeaveService.approve(
        db, request_id, remarks=body.remarks if body else None,
    )


# ── PATCH /{id}/reject ──────────────────────────────────────────────

@router.patch("/{request_id}/reject", response_model=LeaveRequestOut)
async def reject_leave(
    request_id: uuid.UUID,
    body: Optional[LeaveDecisionRequest] = None,
    user: CurrentUser = Depends(require_role(UserRole.manager)),
    db: AsyncSession = Depends(get_db),
):
    """Reject a pending leave request. Balance is untouched."""
    return await LeaveService.reject(
        db, request_id, remarks=body.remarks if body else None,
    )

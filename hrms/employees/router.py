"""Employee router — onboarding and directory listing.

Routes:
    /employees        — List, create employees
    /employees/{id}   — Get employee
"""


import uuid

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.pagination import PaginationParams
from hrms.common.rate_limit import WRITE_LIMIT, limiter
from hrms.database import get_db
from hrms.employees.schemas import EmployeeCreate, EmployeeResponse
from hrms.employees.service import EmployeeService

employees_router = APIRouter(prefix="", tags=["employees"])


# ── POST /employees — Create employee ───────────────────────────────

@employees_router.post("", response_model=EmployeeResponse, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_employee(
    request: Request,
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create an employee and initialize their leave balances."""
    return await EmployeeService.create_employee(
        db, body.name, body.email, body.department,
    )


# ── GET /employees — List employees ─────────────────────────────────

@employees_router.get("")
async def list_employees(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Paginated employee list (zero-based pages)."""
    result = await EmployeeService.list_employees(db, pagination.page, pagination.size)
    items = [EmployeeResponse.model_validate(emp) for emp in result.data]
    return {
        "data": [item.model_dump(mode="json") for item in items],
        "meta": result.meta.model_dump(),
    }


# ── GET /employees/{id} — Employee detail ──────────────────────────

@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService.get_employee(db, employee_id)

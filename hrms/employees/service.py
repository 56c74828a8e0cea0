"""Employee service layer — directory lookups and onboarding.

Uses:
  - ``paginate()`` from hrms.common.pagination
  - ``EntitlementService`` from hrms.leave.entitlements
  - ``EmployeeNotFound / DuplicateEmployee`` from hrms.common.exceptions
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.constants import Department
from hrms.common.exceptions import DuplicateEmployee, EmployeeNotFound
from hrms.common.pagination import PaginatedResponse, paginate
from hrms.employees.models import Employee
from hrms.leave.entitlements import EntitlementService

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# EmployeeDirectory
# ═════════════════════════════════════════════════════════════════════


class EmployeeDirectory:
    """Read-only lookups the leave engine performs against employees."""

    @staticmethod
    async def exists(db: AsyncSession, employee_id: uuid.UUID) -> bool:
        result = await db.execute(
            select(Employee.id).where(Employee.id == employee_id)
        )
        return result.first() is not None

    @staticmethod
    async def get(db: AsyncSession, employee_id: uuid.UUID) -> Optional[Employee]:
        return await db.get(Employee, employee_id)

    @staticmethod
    async def require(db: AsyncSession, employee_id: uuid.UUID) -> Employee:
        employee = await EmployeeDirectory.get(db, employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)
        return employee


# ═════════════════════════════════════════════════════════════════════
# EmployeeService
# ═════════════════════════════════════════════════════════════════════


class EmployeeService:
    """Async create / read operations for employees."""

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def create_employee(
        db: AsyncSession,
        name: str,
        email: str,
        department: Department,
    ) -> Employee:
        """Persist a new employee and seed their leave balances.

        The employee row and its balances are written in the same session,
        so a failure while seeding leaves neither behind once the session
        rolls back.
        """
        existing = await db.execute(select(Employee.id).where(Employee.email == email))
        if existing.first() is not None:
            logger.warning("Employee with email %s already exists", email)
            raise DuplicateEmployee(email)

        employee = Employee(name=name, email=email, department=department)
        try:
            async with db.begin_nested():
                db.add(employee)
                await db.flush()
        except IntegrityError as exc:
            raise DuplicateEmployee(email) from exc

        await EntitlementService.create_employee_entitlements(
            db, employee.id, department,
        )

        logger.info(
            "Created employee id=%s department=%s", employee.id, department.value,
        )
        return employee

    # ── Get ─────────────────────────────────────────────────────────

    @staticmethod
    async def get_employee(db: AsyncSession, employee_id: uuid.UUID) -> Employee:
        return await EmployeeDirectory.require(db, employee_id)

    # ── List ────────────────────────────────────────────────────────

    @staticmethod
    async def list_employees(
        db: AsyncSession,
        page: int,
        size: int,
    ) -> PaginatedResponse[Any]:
        """Return employees in creation order, zero-based pages."""
        query = select(Employee).order_by(Employee.created_at, Employee.id)
        return await paginate(db, query, page, size)

"""Leave service layer — leave application, approval workflow, history.

Business logic:
  - Leave application with fail-fast validation and working-day counting
  - Approval with an atomic balance debit, rejection without one
  - Each request leaves PENDING at most once (conditional status update)
  - Paged history per employee and the pending-approval queue
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.constants import LeaveStatus, LeaveTypeName
from hrms.common.exceptions import (
    AlreadyProcessed,
    EmployeeNotFound,
    InsufficientBalance,
    InvalidDateRange,
    LeaveRequestNotFound,
    LeaveTypeNotConfigured,
    NoBalanceConfigured,
    NoWorkingDaysSelected,
    UnknownLeaveType,
)
from hrms.common.pagination import PaginatedResponse
from hrms.employees.service import EmployeeDirectory
from hrms.leave.calendar import count_working_days
from hrms.leave.catalog import LeaveTypeCatalog
from hrms.leave.ledger import LeaveLedger
from hrms.leave.models import LeaveRequest
from hrms.leave.schemas import LeaveBalanceOut, LeaveRequestOut, LeaveTypeOut
from hrms.leave.store import LeaveRequestStore

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# LeaveService
# ═════════════════════════════════════════════════════════════════════


class LeaveService:
    """Async leave operations: types, balances, requests, approvals."""

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def _to_out(db: AsyncSession, leave_req: LeaveRequest) -> LeaveRequestOut:
        names = await LeaveTypeCatalog.names_by_id(db)
        out = LeaveRequestOut.model_validate(leave_req)
        out.leave_type = names.get(leave_req.leave_type_id)
        return out

    @staticmethod
    async def _page_out(
        db: AsyncSession,
        page: PaginatedResponse,
    ) -> PaginatedResponse[LeaveRequestOut]:
        names = await LeaveTypeCatalog.names_by_id(db)
        items: list[LeaveRequestOut] = []
        for leave_req in page.data:
            out = LeaveRequestOut.model_validate(leave_req)
            out.leave_type = names.get(leave_req.leave_type_id)
            items.append(out)
        return PaginatedResponse[LeaveRequestOut](data=items, meta=page.meta)

    @staticmethod
    async def _load_pending(db: AsyncSession, request_id: uuid.UUID) -> LeaveRequest:
        """Load a request that is still awaiting a decision."""
        leave_req = await LeaveRequestStore.get(db, request_id)
        if leave_req is None:
            logger.error("Leave request not found: %s", request_id)
            raise LeaveRequestNotFound(request_id)

        if leave_req.status.is_terminal:
            logger.warning(
                "Leave already processed: %s is %s", request_id, leave_req.status.value,
            )
            raise AlreadyProcessed(request_id, leave_req.status)
        return leave_req

    # ─────────────────────────────────────────────────────────────────
    # Leave Types & Balances
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_leave_types(db: AsyncSession) -> list[LeaveTypeOut]:
        types = await LeaveTypeCatalog.list_types(db)
        return [LeaveTypeOut.model_validate(lt) for lt in types]

    @staticmethod
    async def get_balances(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> list[LeaveBalanceOut]:
        """All balance rows of one employee, labelled with the type name."""
        if not await EmployeeDirectory.exists(db, employee_id):
            raise EmployeeNotFound(employee_id)

        names = await LeaveTypeCatalog.names_by_id(db)
        balances: list[LeaveBalanceOut] = []
        for balance in await LeaveLedger.list_for_employee(db, employee_id):
            out = LeaveBalanceOut.model_validate(balance)
            out.leave_type = names.get(balance.leave_type_id)
            balances.append(out)
        return balances

    # ─────────────────────────────────────────────────────────────────
    # Apply
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def apply_leave(
        db: AsyncSession,
        employee_id: uuid.UUID,
        leave_type_name: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequestOut:
        """Validate and record a PENDING leave request.

        Checks run in a fixed order and the first failure is raised; nothing
        is written unless every check passes. The balance is only read here:
        it is debited on approval, not on application.
        """
        if end_date < start_date:
            logger.warning(
                "Invalid date range for employee=%s: %s to %s",
                employee_id, start_date, end_date,
            )
            raise InvalidDateRange(start_date, end_date)

        if not await EmployeeDirectory.exists(db, employee_id):
            logger.warning("Employee not found: %s", employee_id)
            raise EmployeeNotFound(employee_id)

        try:
            type_name = LeaveTypeName.parse(leave_type_name)
        except ValueError:
            logger.warning("Invalid leave type: %s", leave_type_name)
            raise UnknownLeaveType(leave_type_name)

        leave_type = await LeaveTypeCatalog.find_by_name(db, type_name)
        if leave_type is None:
            logger.warning("Leave type not configured: %s", type_name.value)
            raise LeaveTypeNotConfigured(type_name.value)

        balance = await LeaveLedger.get(db, employee_id, leave_type.id)
        if balance is None:
            logger.warning(
                "No balance configured for employee=%s leave_type=%s",
                employee_id, type_name.value,
            )
            raise NoBalanceConfigured(employee_id, type_name.value)

        total_days = count_working_days(start_date, end_date)
        logger.debug(
            "Calculated %d working day(s) between %s and %s",
            total_days, start_date, end_date,
        )
        if total_days == 0:
            logger.warning(
                "No working days selected for employee=%s: %s to %s",
                employee_id, start_date, end_date,
            )
            raise NoWorkingDaysSelected(start_date, end_date)

        if balance.remaining_days < total_days:
            logger.warning(
                "Insufficient leave balance for employee=%s: available=%d requested=%d",
                employee_id, balance.remaining_days, total_days,
            )
            raise InsufficientBalance(balance.remaining_days, total_days)

        leave_req = LeaveRequest(
            employee_id=employee_id,
            leave_type_id=leave_type.id,
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            reason=reason,
            status=LeaveStatus.PENDING,
        )
        await LeaveRequestStore.create(db, leave_req)

        logger.info(
            "Leave applied id=%s employee=%s type=%s days=%d",
            leave_req.id, employee_id, type_name.value, total_days,
        )
        out = LeaveRequestOut.model_validate(leave_req)
        out.leave_type = type_name
        return out

    # ─────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_history(
        db: AsyncSession,
        employee_id: uuid.UUID,
        page: int,
        size: int,
    ) -> PaginatedResponse[LeaveRequestOut]:
        """One page of an employee's requests, oldest first."""
        if not await EmployeeDirectory.exists(db, employee_id):
            raise EmployeeNotFound(employee_id)

        result = await LeaveRequestStore.list_by_employee(db, employee_id, page, size)
        return await LeaveService._page_out(db, result)

    @staticmethod
    async def get_pending(
        db: AsyncSession,
        page: int,
        size: int,
    ) -> PaginatedResponse[LeaveRequestOut]:
        """One page of requests awaiting a decision, oldest first."""
        result = await LeaveRequestStore.list_by_status(
            db, LeaveStatus.PENDING, page, size,
        )
        return await LeaveService._page_out(db, result)

    # ─────────────────────────────────────────────────────────────────
    # Decisions
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def approve(
        db: AsyncSession,
        request_id: uuid.UUID,
        *,
        remarks: Optional[str] = None,
    ) -> LeaveRequestOut:
        """Approve a pending request and debit its days from the balance.

        The status change and the debit commit together or not at all. A
        concurrent decision on the same request surfaces as AlreadyProcessed,
        a concurrent debit that drained the balance as InsufficientBalance.
        """
        leave_req = await LeaveService._load_pending(db, request_id)

        balance = await LeaveLedger.get(db, leave_req.employee_id, leave_req.leave_type_id)
        if balance is None:
            logger.error(
                "Leave balance not found for employee=%s leave_type=%s",
                leave_req.employee_id, leave_req.leave_type_id,
            )
            raise NoBalanceConfigured(leave_req.employee_id, leave_req.leave_type_id)

        if balance.remaining_days < leave_req.total_days:
            logger.warning(
                "Insufficient balance to approve %s: available=%d requested=%d",
                request_id, balance.remaining_days, leave_req.total_days,
            )
            raise InsufficientBalance(balance.remaining_days, leave_req.total_days)

        async with db.begin_nested():
            leave_req.status = LeaveStatus.APPROVED
            leave_req.reviewed_at = datetime.now(timezone.utc)
            leave_req.reviewer_remarks = remarks
            if not await LeaveRequestStore.update(
                db, leave_req, expected_status=LeaveStatus.PENDING,
            ):
                logger.warning(
                    "Leave already processed: %s is %s",
                    request_id, leave_req.status.value,
                )
                raise AlreadyProcessed(request_id, leave_req.status)

            await LeaveLedger.debit(
                db, leave_req.employee_id, leave_req.leave_type_id, leave_req.total_days,
            )

        logger.info(
            "Leave approved id=%s employee=%s days=%d",
            request_id, leave_req.employee_id, leave_req.total_days,
        )
        return await LeaveService._to_out(db, leave_req)

    @staticmethod
    async def reject(
        db: AsyncSession,
        request_id: uuid.UUID,
        *,
        remarks: Optional[str] = None,
    ) -> LeaveRequestOut:
        """Reject a pending request. The balance is never touched."""
        leave_req = await LeaveService._load_pending(db, request_id)

        leave_req.status = LeaveStatus.REJECTED
        leave_req.reviewed_at = datetime.now(timezone.utc)
        leave_req.reviewer_remarks = remarks
        if not await LeaveRequestStore.update(
            db, leave_req, expected_status=LeaveStatus.PENDING,
        ):
            logger.warning(
                "Leave already processed: %s is %s", request_id, leave_req.status.value,
            )
            raise AlreadyProcessed(request_id, leave_req.status)

        logger.info("Leave rejected id=%s employee=%s", request_id, leave_req.employee_id)
        return await LeaveService._to_out(db, leave_req)

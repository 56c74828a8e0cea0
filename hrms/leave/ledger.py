"""Leave balance ledger — remaining days per (employee, leave type).

The ledger is the only writer of ``leave_balances`` after a row has been
created. Debits are a single conditional UPDATE, so the row lock taken by
the database serializes concurrent debits against the same pair and a
debit can never take ``remaining_days`` below zero.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.exceptions import (
    DuplicateEntitlement,
    InsufficientBalance,
    NoBalanceConfigured,
)
from hrms.leave.models import LeaveBalance

logger = logging.getLogger(__name__)


class LeaveLedger:
    """Async balance operations: get, initialize, debit."""

    @staticmethod
    async def get(
        db: AsyncSession,
        employee_id: uuid.UUID,
        leave_type_id: uuid.UUID,
    ) -> Optional[LeaveBalance]:
        """Return the balance row, or None when no entitlement is configured."""
        result = await db.execute(
            select(LeaveBalance).where(
                LeaveBalance.employee_id == employee_id,
                LeaveBalance.leave_type_id == leave_type_id,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def require(
        db: AsyncSession,
        employee_id: uuid.UUID,
        leave_type_id: uuid.UUID,
    ) -> LeaveBalance:
        balance = await LeaveLedger.get(db, employee_id, leave_type_id)
        if balance is None:
            raise NoBalanceConfigured(employee_id, leave_type_id)
        return balance

    @staticmethod
    async def list_for_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> list[LeaveBalance]:
        result = await db.execute(
            select(LeaveBalance)
            .where(LeaveBalance.employee_id == employee_id)
            .order_by(LeaveBalance.leave_type_id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def initialize(
        db: AsyncSession,
        employee_id: uuid.UUID,
        leave_type_id: uuid.UUID,
        days: int,
    ) -> LeaveBalance:
        """Create the balance row for a pair that has none yet."""
        if days < 0:
            raise ValueError(f"Initial entitlement cannot be negative: {days}")

        if await LeaveLedger.get(db, employee_id, leave_type_id) is not None:
            raise DuplicateEntitlement(employee_id, leave_type_id)

        balance = LeaveBalance(
            employee_id=employee_id,
            leave_type_id=leave_type_id,
            remaining_days=days,
        )
        try:
            async with db.begin_nested():
                db.add(balance)
                await db.flush()
        except IntegrityError as exc:
            # Lost a race with another initializer for the same pair
            raise DuplicateEntitlement(employee_id, leave_type_id) from exc

        logger.debug(
            "Initialized balance employee=%s leave_type=%s days=%d",
            employee_id, leave_type_id, days,
        )
        return balance

    @staticmethod
    async def debit(
        db: AsyncSession,
        employee_id: uuid.UUID,
        leave_type_id: uuid.UUID,
        days: int,
    ) -> LeaveBalance:
        """Atomically subtract *days* if at least that many remain.

        Raises InsufficientBalance (or NoBalanceConfigured when the row is
        missing) without touching the row otherwise.
        """
        if days <= 0:
            raise ValueError(f"Debit must be positive: {days}")

        result = await db.execute(
            update(LeaveBalance)
            .where(
                LeaveBalance.employee_id == employee_id,
                LeaveBalance.leave_type_id == leave_type_id,
                LeaveBalance.remaining_days >= days,
            )
            .values(
                remaining_days=LeaveBalance.remaining_days - days,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )

        balance = await LeaveLedger.get(db, employee_id, leave_type_id)
        if balance is None:
            raise NoBalanceConfigured(employee_id, leave_type_id)
        await db.refresh(balance)

        if result.rowcount != 1:
            logger.warning(
                "Debit refused employee=%s leave_type=%s available=%d requested=%d",
                employee_id, leave_type_id, balance.remaining_days, days,
            )
            raise InsufficientBalance(balance.remaining_days, days)

        logger.debug(
            "Debited %d day(s) employee=%s leave_type=%s remaining=%d",
            days, employee_id, leave_type_id, balance.remaining_days,
        )
        return balance

"""Entitlement initializer — seeds a new employee's balances from policy."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.constants import ENTITLEMENT_POLICY, Department, LeaveTypeName
from hrms.leave.catalog import LeaveTypeCatalog
from hrms.leave.ledger import LeaveLedger
from hrms.leave.models import LeaveBalance

logger = logging.getLogger(__name__)


def initial_days(department: Department, leave_type: LeaveTypeName) -> int:
    """Days granted at onboarding; 0 means the employee is not entitled."""
    days = ENTITLEMENT_POLICY.get(department, {}).get(leave_type)
    if days is None:
        logger.warning(
            "No leave configuration found for department=%s leave_type=%s",
            department.value, leave_type.value,
        )
        return 0
    return days


class EntitlementService:

    @staticmethod
    async def create_employee_entitlements(
        db: AsyncSession,
        employee_id: uuid.UUID,
        department: Department,
    ) -> list[LeaveBalance]:
        """Create one balance row per catalog entry the department grants.

        Zero-day entitlements get no row at all: an absent balance means
        "not entitled". Runs once per employee, at creation.
        """
        created: list[LeaveBalance] = []
        for leave_type in await LeaveTypeCatalog.list_types(db):
            days = initial_days(department, leave_type.name)
            if days == 0:
                logger.debug(
                    "No initial leave assigned for type=%s department=%s",
                    leave_type.name.value, department.value,
                )
                continue

            created.append(
                await LeaveLedger.initialize(db, employee_id, leave_type.id, days)
            )
            logger.debug(
                "Assigned %d day(s) of %s leave to employee=%s",
                days, leave_type.name.value, employee_id,
            )

        logger.info(
            "Initialized %d leave balance(s) for employee=%s (%s)",
            len(created), employee_id, department.value,
        )
        return created

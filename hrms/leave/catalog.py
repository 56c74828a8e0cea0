"""Leave type catalog — the fixed set of leave types and their bootstrap."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.constants import LeaveTypeName
from hrms.leave.models import LeaveType

logger = logging.getLogger(__name__)


class LeaveTypeCatalog:
    """Read access to provisioned leave types plus the idempotent seed."""

    @staticmethod
    async def find_by_name(
        db: AsyncSession,
        name: LeaveTypeName,
    ) -> Optional[LeaveType]:
        result = await db.execute(
            select(LeaveType).where(LeaveType.name == name)
        )
        return result.scalars().first()

    @staticmethod
    async def list_types(db: AsyncSession) -> list[LeaveType]:
        result = await db.execute(select(LeaveType).order_by(LeaveType.name))
        return list(result.scalars().all())

    @staticmethod
    async def names_by_id(db: AsyncSession) -> dict[uuid.UUID, LeaveTypeName]:
        """Map of catalog id → name, used to label requests and balances."""
        result = await db.execute(select(LeaveType.id, LeaveType.name))
        return {row.id: row.name for row in result.all()}

    @staticmethod
    async def bootstrap(db: AsyncSession) -> list[LeaveType]:
        """Insert a catalog row for every LeaveTypeName that is missing.

        Safe to call on every startup: existing rows are left alone, so
        re-running never duplicates. Returns the rows that were created.
        """
        logger.info("Initializing default leave types")

        existing = {lt.name for lt in await LeaveTypeCatalog.list_types(db)}
        created: list[LeaveType] = []
        for name in LeaveTypeName:
            if name in existing:
                logger.debug("Leave type already exists: %s", name.value)
                continue
            leave_type = LeaveType(name=name)
            db.add(leave_type)
            created.append(leave_type)
            logger.debug("Inserted leave type: %s", name.value)

        await db.flush()
        logger.info("Leave type initialization completed (%d created)", len(created))
        return created

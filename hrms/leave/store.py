"""Leave request store — persistence and paged queries for LeaveRequest."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.constants import LeaveStatus
from hrms.common.pagination import PaginatedResponse, paginate
from hrms.leave.models import LeaveRequest

# Columns a status transition may overwrite; identity, dates and
# total_days are fixed at creation.
_MUTABLE_FIELDS = ("status", "reviewed_at", "reviewer_remarks", "reason")


class LeaveRequestStore:
    """Async CRUD for leave requests. Ordering is (created_at, id)."""

    @staticmethod
    async def create(db: AsyncSession, request: LeaveRequest) -> uuid.UUID:
        db.add(request)
        await db.flush()
        return request.id

    @staticmethod
    async def get(
        db: AsyncSession,
        request_id: uuid.UUID,
        *,
        fresh: bool = False,
    ) -> Optional[LeaveRequest]:
        """Load a request by id; ``fresh=True`` bypasses the identity map."""
        query = select(LeaveRequest).where(LeaveRequest.id == request_id)
        if fresh:
            query = query.execution_options(populate_existing=True)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def list_by_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
        page: int,
        size: int,
    ) -> PaginatedResponse[Any]:
        query = (
            select(LeaveRequest)
            .where(LeaveRequest.employee_id == employee_id)
            .order_by(LeaveRequest.created_at, LeaveRequest.id)
        )
        return await paginate(db, query, page, size)

    @staticmethod
    async def list_by_status(
        db: AsyncSession,
        status: LeaveStatus,
        page: int,
        size: int,
    ) -> PaginatedResponse[Any]:
        query = (
            select(LeaveRequest)
            .where(LeaveRequest.status == status)
            .order_by(LeaveRequest.created_at, LeaveRequest.id)
        )
        return await paginate(db, query, page, size)

    @staticmethod
    async def update(
        db: AsyncSession,
        request: LeaveRequest,
        *,
        expected_status: Optional[LeaveStatus] = None,
    ) -> bool:
        """Write the mutable fields of *request* back to its row.

        With *expected_status* the write only happens if the stored status
        still equals it (compare-and-swap). Returns whether a row was
        written. Either way *request* is reloaded afterwards, so on False
        the caller sees the state that won.
        """
        values = {field: getattr(request, field) for field in _MUTABLE_FIELDS}
        values["updated_at"] = datetime.now(timezone.utc)

        stmt = update(LeaveRequest).where(LeaveRequest.id == request.id)
        if expected_status is not None:
            stmt = stmt.where(LeaveRequest.status == expected_status)

        # The unflushed attribute changes on *request* must not reach the
        # database through autoflush; only the conditional UPDATE may write.
        with db.no_autoflush:
            result = await db.execute(
                stmt.values(**values).execution_options(synchronize_session=False)
            )
            await db.refresh(request)
        return result.rowcount == 1

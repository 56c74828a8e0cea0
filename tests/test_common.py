"""Common utilities test suite — pagination, RFC 7807 problem details."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.constants import LeaveStatus, LeaveTypeName
from hrms.common.exceptions import (
    AlreadyProcessed,
    InsufficientBalance,
    InvalidDateRange,
    NoBalanceConfigured,
    ValidationException,
)
from hrms.common.pagination import PaginationMeta, paginate
from hrms.employees.models import Employee
from tests.conftest import seed_employee


# ═════════════════════════════════════════════════════════════════════
# Pagination
# ═════════════════════════════════════════════════════════════════════


class TestPaginationMeta:

    def test_first_page(self):
        meta = PaginationMeta.build(0, 5, 12)
        assert meta.total_pages == 3
        assert meta.has_next is True
        assert meta.has_prev is False

    def test_last_page(self):
        meta = PaginationMeta.build(2, 5, 12)
        assert meta.has_next is False
        assert meta.has_prev is True

    def test_empty(self):
        meta = PaginationMeta.build(0, 5, 0)
        assert meta.total_pages == 0
        assert meta.has_next is False


class TestPaginate:

    async def test_page_beyond_total(self, db: AsyncSession):
        await seed_employee(db)

        query = select(Employee).order_by(Employee.created_at, Employee.id)
        result = await paginate(db, query, 3, 5)

        assert result.data == []
        assert result.meta.total == 1

    async def test_invalid_arguments(self, db: AsyncSession):
        query = select(Employee)
        with pytest.raises(ValidationException) as exc_info:
            await paginate(db, query, -1, 5)
        assert exc_info.value.status_code == 422
        assert "page" in exc_info.value.errors
        with pytest.raises(ValidationException):
            await paginate(db, query, 0, 0)


class TestPaginationAPI:

    async def test_size_over_limit_rejected(self, client):
        resp = await client.get("/api/v1/employees", params={"size": 101})
        assert resp.status_code == 422

    async def test_negative_page_rejected(self, client):
        resp = await client.get("/api/v1/employees", params={"page": -1})
        assert resp.status_code == 422


# ═════════════════════════════════════════════════════════════════════
# Exceptions
# ═════════════════════════════════════════════════════════════════════


class TestExceptions:

    def test_insufficient_balance_context(self):
        exc = InsufficientBalance(1, 5)
        assert exc.status_code == 422
        assert exc.code == "INSUFFICIENT_BALANCE"
        assert "Available: 1" in exc.detail
        assert "Requested: 5" in exc.detail

    def test_invalid_date_range_message(self):
        exc = InvalidDateRange(date(2024, 3, 8), date(2024, 3, 4))
        assert exc.status_code == 422
        assert "2024-03-04" in exc.detail
        assert "end_date" in exc.errors

    def test_already_processed(self):
        exc = AlreadyProcessed(uuid.uuid4(), LeaveStatus.REJECTED)
        assert exc.status_code == 409
        assert "REJECTED" in exc.detail

    def test_no_balance_configured(self):
        exc = NoBalanceConfigured(uuid.uuid4(), LeaveTypeName.EARNED)
        assert exc.status_code == 404
        assert exc.leave_type == LeaveTypeName.EARNED

    async def test_health(self, client):
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

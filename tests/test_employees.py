"""Employee module test suite — onboarding, directory lookups, pagination,
duplicate detection, and API endpoints.

Tests exercise the service layer and the HTTP API (via router).
Uses the shared conftest.py pattern with in-memory SQLite.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.constants import Department
from hrms.common.exceptions import DuplicateEmployee, EmployeeNotFound
from hrms.employees.service import EmployeeDirectory, EmployeeService
from hrms.leave.ledger import LeaveLedger
from tests.conftest import seed_employee


# ═════════════════════════════════════════════════════════════════════
# 1. Create
# ═════════════════════════════════════════════════════════════════════


class TestEmployeeCreate:

    async def test_create_employee_initializes_balances(self, db: AsyncSession, leave_types):
        emp = await EmployeeService.create_employee(
            db, "Asha Rao", "asha@example.com", Department.SUPPORT,
        )

        assert emp.id is not None
        assert emp.is_active is True
        assert len(await LeaveLedger.list_for_employee(db, emp.id)) == 3

    async def test_duplicate_email(self, db: AsyncSession, leave_types):
        await seed_employee(db, email="dup@example.com")

        with pytest.raises(DuplicateEmployee) as exc_info:
            await seed_employee(db, email="dup@example.com")
        assert exc_info.value.status_code == 409

    async def test_create_without_catalog(self, db: AsyncSession):
        """No leave types provisioned → employee exists with no balances."""
        emp = await seed_employee(db)

        assert await EmployeeDirectory.exists(db, emp.id)
        assert await LeaveLedger.list_for_employee(db, emp.id) == []


# ═════════════════════════════════════════════════════════════════════
# 2. Directory
# ═════════════════════════════════════════════════════════════════════


class TestEmployeeDirectory:

    async def test_exists(self, db: AsyncSession):
        emp = await seed_employee(db)

        assert await EmployeeDirectory.exists(db, emp.id) is True
        assert await EmployeeDirectory.exists(db, uuid.uuid4()) is False

    async def test_get_and_require(self, db: AsyncSession):
        emp = await seed_employee(db, name="Ravi Kumar")

        assert (await EmployeeDirectory.get(db, emp.id)).name == "Ravi Kumar"
        assert await EmployeeDirectory.get(db, uuid.uuid4()) is None
        with pytest.raises(EmployeeNotFound):
            await EmployeeDirectory.require(db, uuid.uuid4())

    async def test_list_pages(self, db: AsyncSession):
        for _ in range(7):
            await seed_employee(db)

        first = await EmployeeService.list_employees(db, 0, 5)
        second = await EmployeeService.list_employees(db, 1, 5)

        assert len(first.data) == 5
        assert len(second.data) == 2
        assert first.meta.total == 7
        assert first.meta.has_next is True
        assert second.meta.has_prev is True
        assert {e.id for e in first.data}.isdisjoint({e.id for e in second.data})


# ═════════════════════════════════════════════════════════════════════
# 3. API endpoints
# ═════════════════════════════════════════════════════════════════════


class TestEmployeeAPI:

    async def test_create_and_get(self, client, leave_types):
        resp = await client.post("/api/v1/employees", json={
            "name": "Meera Shah",
            "email": "meera@example.com",
            "department": "TRAINEE",
        })
        assert resp.status_code == 201
        emp = resp.json()
        assert emp["department"] == "TRAINEE"

        resp = await client.get(f"/api/v1/employees/{emp['id']}")
        assert resp.status_code == 200
        assert resp.json()["email"] == "meera@example.com"

        resp = await client.get(f"/api/v1/leave/balances/{emp['id']}")
        assert sorted(b["leave_type"] for b in resp.json()) == ["CASUAL", "SICK"]

    async def test_duplicate_email_conflict(self, client, leave_types):
        payload = {"name": "A", "email": "same@example.com", "department": "SUPPORT"}
        assert (await client.post("/api/v1/employees", json=payload)).status_code == 201

        resp = await client.post("/api/v1/employees", json=payload)
        assert resp.status_code == 409
        assert resp.json()["code"] == "DUPLICATE_EMPLOYEE"

    async def test_invalid_payload(self, client):
        resp = await client.post("/api/v1/employees", json={
            "name": "",
            "email": "not-an-email",
            "department": "SALES",
        })
        assert resp.status_code == 422
        assert set(resp.json()["errors"]) == {"name", "email", "department"}

    async def test_unknown_employee(self, client):
        resp = await client.get(f"/api/v1/employees/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json()["code"] == "EMPLOYEE_NOT_FOUND"

    async def test_list(self, client, db):
        await seed_employee(db)
        await seed_employee(db)
        await db.commit()

        resp = await client.get("/api/v1/employees", params={"size": 1})
        assert resp.status_code == 200
        assert len(resp.json()["data"]) == 1
        assert resp.json()["meta"]["total"] == 2
        assert resp.json()["meta"]["total_pages"] == 2

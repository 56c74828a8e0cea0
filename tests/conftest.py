"""Shared test fixtures — async DB, client, auth helpers, factories.

Reusable across all test modules (employees, leave, auth, common).
Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import os

# Set test JWT_SECRET before any other import touches pydantic-settings
os.environ.setdefault("JWT_SECRET", "test-secret-for-ci-do-not-use-in-production")

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from hrms.auth.service import create_access_token
from hrms.common.constants import Department, UserRole
from hrms.database import Base, get_db
from hrms.main import create_app

# Import ALL model modules so every table is on Base.metadata
import hrms.employees.models  # noqa: F401
import hrms.leave.models  # noqa: F401

# ── SQLite compat: compile PG-specific types ────────────────────────

from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.ext.compiler import compiles


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from hrms.common.rate_limit import limiter

    limiter.reset()
    yield


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    """Create a fresh app instance with DB dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Database session (for direct DB operations in tests) ────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


@pytest.fixture
async def leave_types(db):
    """Provision the leave type catalog and return its rows by name."""
    from hrms.leave.catalog import LeaveTypeCatalog

    await LeaveTypeCatalog.bootstrap(db)
    await db.commit()
    return {lt.name: lt for lt in await LeaveTypeCatalog.list_types(db)}


# ── Model factories ─────────────────────────────────────────────────

_counter = 0


async def seed_employee(
    db: AsyncSession,
    *,
    department: Department = Department.DEVELOPMENT,
    name: str = "Test Employee",
    email: str | None = None,
):
    """Create an employee through the service so balances get initialized."""
    from hrms.employees.service import EmployeeService

    global _counter
    _counter += 1
    return await EmployeeService.create_employee(
        db,
        name,
        email or f"employee{_counter}@example.com",
        department,
    )


# ── Auth helpers ────────────────────────────────────────────────────

@pytest.fixture
def manager_headers() -> dict[str, str]:
    token = create_access_token("manager@example.com", UserRole.manager)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_headers() -> dict[str, str]:
    token = create_access_token("employee@example.com", UserRole.employee)
    return {"Authorization": f"Bearer {token}"}

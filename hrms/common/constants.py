"""Enums and constants for the HRMS leave engine."""

from __future__ import annotations

import enum


# ── Employee ────────────────────────────────────────────────────────

class Department(str, enum.Enum):
    CONSULTING = "CONSULTING"
    SUPPORT = "SUPPORT"
    DEVELOPMENT = "DEVELOPMENT"
    TRAINEE = "TRAINEE"


# ── Auth / Roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    employee = "employee"
    manager = "manager"


# ── Leave ───────────────────────────────────────────────────────────

class LeaveTypeName(str, enum.Enum):
    SICK = "SICK"
    CASUAL = "CASUAL"
    EARNED = "EARNED"

    @classmethod
    def parse(cls, raw: str) -> "LeaveTypeName":
        """Case-insensitive lookup; raises ValueError for unknown names."""
        return cls(raw.strip().upper())


class LeaveStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


# Saturday (5) and Sunday (6) as returned by date.weekday()
WEEKEND_DAYS: frozenset[int] = frozenset({5, 6})

# ── Entitlement policy ──────────────────────────────────────────────

ENTITLEMENT_POLICY: dict[Department, dict[LeaveTypeName, int]] = {
    Department.CONSULTING: {
        LeaveTypeName.SICK: 6,
        LeaveTypeName.CASUAL: 6,
        LeaveTypeName.EARNED: 3,
    },
    Department.SUPPORT: {
        LeaveTypeName.SICK: 6,
        LeaveTypeName.CASUAL: 6,
        LeaveTypeName.EARNED: 3,
    },
    Department.DEVELOPMENT: {
        LeaveTypeName.SICK: 6,
        LeaveTypeName.CASUAL: 6,
        LeaveTypeName.EARNED: 3,
    },
    Department.TRAINEE: {
        LeaveTypeName.SICK: 6,
        LeaveTypeName.CASUAL: 6,
        LeaveTypeName.EARNED: 0,
    },
}

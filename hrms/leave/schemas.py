"""Leave Pydantic v2 schemas — request / response validation.

Naming conventions:
  - *Request            → request bodies (write)
  - *Out                → response bodies (read)
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hrms.common.constants import LeaveStatus, LeaveTypeName


# ═════════════════════════════════════════════════════════════════════
# Leave Type / Balance
# ═════════════════════════════════════════════════════════════════════


class LeaveTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: LeaveTypeName


class LeaveBalanceOut(BaseModel):
    """Remaining days for one (employee, leave type) pair."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: uuid.UUID
    leave_type: Optional[LeaveTypeName] = None
    remaining_days: int


# ═════════════════════════════════════════════════════════════════════
# Leave Request
# ═════════════════════════════════════════════════════════════════════


class LeaveApplyRequest(BaseModel):
    """Payload for applying for leave.

    The leave type is given by name and matched case-insensitively;
    the date range is checked by the service, not here, so that a reversed
    range is reported as an invalid date range before anything else.
    """

    employee_id: uuid.UUID
    leave_type: str = Field(..., min_length=1, max_length=50)
    start_date: date = Field(..., description="Leave start date (inclusive)")
    end_date: date = Field(..., description="Leave end date (inclusive)")
    reason: Optional[str] = Field(None, max_length=1000)


class LeaveDecisionRequest(BaseModel):
    """Optional body for approve / reject."""

    remarks: Optional[str] = Field(None, max_length=1000)


class LeaveRequestOut(BaseModel):
    """Full leave request response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: uuid.UUID
    leave_type: Optional[LeaveTypeName] = None
    start_date: date
    end_date: date
    total_days: int
    status: LeaveStatus
    reason: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewer_remarks: Optional[str] = None
    created_at: Optional[datetime] = None

"""Employee Pydantic v2 schemas — request / response validation.

Naming conventions:
  - *Create            → request bodies (write)
  - *Response          → response bodies (read)
"""


import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hrms.common.constants import Department


class EmployeeCreate(BaseModel):
    """Payload for onboarding a new employee."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    department: Department


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    department: Department
    is_active: bool = True
    created_at: Optional[datetime] = None

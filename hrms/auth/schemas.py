"""Auth Pydantic schemas for decoded token claims."""


from pydantic import BaseModel

from hrms.common.constants import UserRole


class CurrentUser(BaseModel):
    """The caller identified by a validated access token."""

    subject: str
    role: UserRole

"""Auth service — issuing and decoding access tokens.

Tokens are HS256 JWTs carrying ``sub`` (the caller), ``role`` and
``type="access"``. Issuing lives here for tooling and tests; the API itself
only validates tokens.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt

from hrms.common.constants import UserRole
from hrms.config import settings


# ── JWT helpers ─────────────────────────────────────────────────────

def create_access_token(
    subject: str,
    role: UserRole,
    *,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Return an encoded access token for *subject* with *role*."""
    expires_delta = expires_delta or timedelta(hours=settings.JWT_EXPIRY_HOURS)
    payload = {
        "sub": subject,
        "role": role.value,
        "type": "access",
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify *token*; raises jose.JWTError on any failure."""
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
    )

"""Rate limiting configuration using slowapi.

Provides a module-level Limiter instance that routers import for
per-endpoint limits, wired into the FastAPI app in main.py.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Limit applied to endpoints that create records (employees, leave requests).
WRITE_LIMIT = "30/minute"

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["60/minute"],
)

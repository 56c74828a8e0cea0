"""Generic pagination utilities for SQLAlchemy async queries.

Pages are zero-based: ``page=0`` is the first page.
"""


import math
from typing import Any, Generic, Sequence, TypeVar

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, func
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.common.exceptions import ValidationException
from hrms.config import settings

T = TypeVar("T")


# ── FastAPI dependency ──────────────────────────────────────────────

class PaginationParams:
    """Inject via ``Depends(PaginationParams)`` on any list endpoint."""

    def __init__(
        self,
        page: int = Query(default=0, ge=0, description="Page number (0-indexed)"),
        size: int = Query(
            default=settings.DEFAULT_PAGE_SIZE,
            ge=1,
            le=settings.MAX_PAGE_SIZE,
            description=f"Items per page (max {settings.MAX_PAGE_SIZE})",
        ),
    ) -> None:
        self.page = page
        self.size = size


# ── Pydantic response models ───────────────────────────────────────

class PaginationMeta(BaseModel):
    """Metadata block embedded in every paginated response."""

    page: int
    size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, size: int, total: int) -> "PaginationMeta":
        total_pages = math.ceil(total / size) if total else 0
        return cls(
            page=page,
            size=size,
            total=total,
            total_pages=total_pages,
            has_next=page + 1 < total_pages,
            has_prev=page > 0,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    """Standard envelope: ``{"data": [...], "meta": {...}}``."""

    data: Sequence[T]
    meta: PaginationMeta


# ── SQLAlchemy helper ───────────────────────────────────────────────

async def paginate(
    session: AsyncSession,
    query: Select,
    page: int,
    size: int,
) -> PaginatedResponse[Any]:
    """
    Execute *query* with LIMIT/OFFSET for the zero-based *page* and return
    a ``PaginatedResponse`` with data + meta.

    The caller is responsible for giving *query* a total ORDER BY so that
    repeated identical calls return identical pages.
    """
    errors: dict[str, list[str]] = {}
    if page < 0:
        errors["page"] = [f"Page must be 0 or greater, got {page}."]
    if size < 1:
        errors["size"] = [f"Size must be 1 or greater, got {size}."]
    if errors:
        raise ValidationException(errors)

    # ── total count (strip ORDER BY for efficiency) ─────────────────
    count_q = query.with_only_columns(
        func.count(), maintain_column_froms=True,
    ).order_by(None)
    total: int = (await session.execute(count_q)).scalar_one()

    # ── paginated rows ──────────────────────────────────────────────
    rows = (
        await session.execute(query.offset(page * size).limit(size))
    ).scalars().all()

    return PaginatedResponse[Any](
        data=rows,
        meta=PaginationMeta.build(page, size, total),
    )

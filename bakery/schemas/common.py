# bakery/schemas/common.py
import math
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope used by every successful response:

        {"success": true, "message": "...", "data": {...}}
    """

    success: bool = True
    message: str | None = None
    data: T | None = None


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    per_page: int
    total_items: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            per_page=limit,
            total_items=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


def strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def strip_optional(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None

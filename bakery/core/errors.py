# bakery/core/errors.py
"""
Domain errors raised by services.

Every error is an HTTPException so routers need no translation layer;
the handlers in `bakery.main` render them as

    {"success": false, "error": <code>, "message": <str>, "details": {...}}

`code` lets clients tell error kinds apart even when they share an
HTTP status (e.g. stale_price vs total_mismatch, both 400).
"""
from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "bad_request"

    def __init__(self, message: str, **details: Any):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message
        self.details = details


class InvalidReference(AppError):
    """Product / category / branch / payment method missing or inactive."""

    code = "invalid_reference"


class StalePrice(AppError):
    """Client-side price differs from the live catalog price."""

    code = "stale_price"


class TotalMismatch(AppError):
    """Submitted total differs from the server total beyond tolerance."""

    code = "total_mismatch"


class InvalidStatus(AppError):
    code = "invalid_status"


class EmptyUpdate(AppError):
    code = "empty_update"


class ReferenceInUse(AppError):
    """Soft delete refused because active rows still point at the entity."""

    code = "reference_in_use"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class PersistenceFailure(AppError):
    """The write transaction failed and was rolled back."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "persistence_failure"

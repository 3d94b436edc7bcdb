"""
Error kinds raised by the scheduling and coverage services.

They are HTTPExceptions so they travel through routers untouched; the
handler in main.py adds the ``error`` kind to the response body.
"""
from __future__ import annotations

from fastapi import HTTPException


class ShiftError(HTTPException):
    status_code = 400
    code = "shift_error"

    def __init__(self, detail: str):
        super().__init__(status_code=type(self).status_code, detail=detail)


class ValidationError(ShiftError):
    """Missing or malformed fields, start >= end, unknown gate, inactive staff."""
    status_code = 422
    code = "validation_error"


class ConflictError(ShiftError):
    """Overlapping interval for the same staff member."""
    status_code = 409
    code = "conflict_error"


class NotFoundError(ShiftError):
    status_code = 404
    code = "not_found"


class InvalidStateError(ShiftError):
    """Illegal lifecycle transition, e.g. cancelling a completed shift."""
    status_code = 409
    code = "invalid_state"

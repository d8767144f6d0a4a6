"""Uniform JSON envelopes for API responses.

Success: ``{"status": "success", "message": ..., "data": ...}``
Error:   ``{"status": "error", "code": ..., "message": ..., "details": ...}``

``details`` is only populated outside production.
"""
from typing import Any

from fastapi.responses import JSONResponse

from app.utils.config import settings


def success_response(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "success", "message": message, "data": data},
    )


def error_response(status_code: int, code: str, message: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "code": code,
            "message": message,
            "details": None if settings.is_production else details,
        },
    )

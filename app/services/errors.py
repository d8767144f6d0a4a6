"""
Base exception for the service layer.

Every operation failure the API reports is an ``AppError`` subclass carrying a
stable ``code``, a short user-facing ``message`` and optional ``details`` that
are only rendered outside production.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for expected, user-reportable failures."""

    status_code: int = 400
    default_message: str = "Request failed"
    default_code: str = "APP_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

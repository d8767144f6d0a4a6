from fastapi import Request

from app.utils.config import settings


def client_meta(request: Request) -> dict:
    """Origin details stored alongside account activity."""
    return {
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }


def clear_session_cookie(response) -> None:
    response.delete_cookie(
        settings.cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )

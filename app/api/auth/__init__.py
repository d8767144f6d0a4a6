from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api import clear_session_cookie, client_meta
from app.services.activity import record_activity
from app.services.auth import AuthenticationFlow, get_auth_flow, get_request_token
from app.services.auth.schemas import LoginInput, RegisterInput
from app.services.rate_limit import limit_route
from app.utils.base import ActivityAction
from app.utils.config import settings
from app.utils.response import success_response


router = APIRouter()


@router.post("/register")
def register(
    body: RegisterInput,
    request: Request,
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PUBLIC: Create an account. Hashes are never returned."""
    user = flow.register(body)
    record_activity(user["id"], ActivityAction.REGISTERED, **client_meta(request))
    return success_response("User registered successfully", user, status_code=201)


@router.post("/login", dependencies=[Depends(limit_route(60, max_calls=10))])
def login(
    body: LoginInput,
    request: Request,
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PUBLIC | RATE-LIMITED: Exchange credentials for a session token.

    The token is returned in the body and set as an HTTP-only cookie.
    """
    result = flow.login(body.email, body.password)
    record_activity(result.user["id"], ActivityAction.LOGGED_IN, **client_meta(request))

    response = success_response("Login successful", result.model_dump())
    response.set_cookie(
        settings.cookie_name,
        result.token,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        max_age=int(flow.config.session_token_ttl.total_seconds()),
    )
    return response


@router.post("/logout")
def logout(
    request: Request,
    token: str | None = Depends(get_request_token),
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PUBLIC: Revoke all sessions of the token's owner and drop the cookie."""
    user_id = flow.logout(token)
    if user_id:
        record_activity(user_id, ActivityAction.LOGGED_OUT, **client_meta(request))

    response = success_response("Logged out successfully")
    clear_session_cookie(response)
    return response

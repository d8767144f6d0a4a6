from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api import clear_session_cookie, client_meta
from app.services import activity, favorites, movies
from app.services.auth import AuthenticatedUser, AuthenticationFlow, get_auth_flow, get_current_user
from app.services.auth.schemas import (
    ChangePasswordInput,
    ResetPasswordInput,
    SecurityQuestionInput,
    UpdateProfileInput,
)
from app.services.rate_limit import limit_route
from app.utils.base import ActivityAction
from app.utils.response import success_response


router = APIRouter()


@router.get("/profile")
def get_profile(
    current_user: AuthenticatedUser = Depends(get_current_user),
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PROTECTED: Public profile of the caller."""
    return success_response("User fetched successfully", flow.get_profile(current_user.id))


@router.put("/profile")
def update_profile(
    body: UpdateProfileInput,
    request: Request,
    current_user: AuthenticatedUser = Depends(get_current_user),
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PROTECTED: Update name, age or email."""
    changes = body.changes()
    user = flow.update_profile(current_user.id, changes)
    activity.record_activity(current_user.id, ActivityAction.UPDATED_PROFILE, **client_meta(request))
    return success_response("Profile updated successfully", {"user": user, "updated_fields": sorted(changes)})


@router.delete("/profile")
def delete_profile(
    current_user: AuthenticatedUser = Depends(get_current_user),
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PROTECTED: Delete the account with its movies, favorites and history."""
    # Dependents first; the user document goes last
    favorites.delete_for_user(current_user.id)
    movies.delete_for_user(current_user.id)
    activity.delete_for_user(current_user.id)
    flow.delete_account(current_user.id)

    response = success_response("Account deleted successfully")
    clear_session_cookie(response)
    return response


@router.put("/change-password")
def change_password(
    body: ChangePasswordInput,
    request: Request,
    current_user: AuthenticatedUser = Depends(get_current_user),
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PROTECTED: Replace the password. Every session, this one included, ends."""
    flow.change_password(current_user.id, body.current_password, body.new_password)
    activity.record_activity(current_user.id, ActivityAction.CHANGED_PASSWORD, **client_meta(request))

    response = success_response("Password changed successfully. Please log in again.")
    clear_session_cookie(response)
    return response


@router.post("/forgot-password", dependencies=[Depends(limit_route(60, max_calls=10))])
def forgot_password(
    body: SecurityQuestionInput,
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PUBLIC | RATE-LIMITED: Security question for an email.

    Unknown emails get the same 200 with a null question.
    """
    question = flow.request_security_question(body.email)
    return success_response("Security question lookup complete", {"security_question": question})


@router.post("/reset-password-secret", dependencies=[Depends(limit_route(60, max_calls=5))])
def reset_password_with_answer(
    body: ResetPasswordInput,
    request: Request,
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> JSONResponse:
    """PUBLIC | RATE-LIMITED: Reset the password by answering the security question."""
    user_id = flow.reset_password_with_answer(body.email, body.answer, body.new_password)
    activity.record_activity(user_id, ActivityAction.RESET_PASSWORD, **client_meta(request))

    response = success_response("Password reset. Please log in again.")
    clear_session_cookie(response)
    return response


@router.get("/activity")
def get_activity_history(current_user: AuthenticatedUser = Depends(get_current_user)) -> JSONResponse:
    """PROTECTED: Latest 20 account actions."""
    activities = activity.list_activity(current_user.id)
    return success_response("Activity fetched successfully", {"total": len(activities), "activities": activities})

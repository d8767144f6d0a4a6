from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from app.services.auth.config import AuthConfig
from app.services.auth.errors import AuthError
from app.services.auth.flow import AuthenticationFlow, is_strong_password
from app.services.auth.hasher import PasswordHasher
from app.services.auth.schemas import AuthenticatedUser
from app.services.auth.store import CredentialStore
from app.services.auth.tokens import SessionTokenService, TokenClaims
from app.utils.config import settings


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@lru_cache
def get_auth_flow() -> AuthenticationFlow:
    """Process-wide flow built once from settings."""
    return AuthenticationFlow(AuthConfig.from_settings(settings))


def get_request_token(request: Request, bearer: str | None = Depends(oauth2_scheme)) -> str | None:
    """Raw session token from the Authorization header, else the cookie."""
    return bearer or request.cookies.get(settings.cookie_name)


def get_current_user(
    token: str | None = Depends(get_request_token),
    flow: AuthenticationFlow = Depends(get_auth_flow),
) -> AuthenticatedUser:
    """Auth dependency that validates a session token and returns the caller.

    Rejects missing/invalid tokens and tokens whose version was revoked.
    """
    return flow.verify_and_attach_user(token)


__all__ = [
    "AuthConfig",
    "AuthError",
    "AuthenticatedUser",
    "AuthenticationFlow",
    "CredentialStore",
    "PasswordHasher",
    "SessionTokenService",
    "TokenClaims",
    "get_auth_flow",
    "get_current_user",
    "get_request_token",
    "is_strong_password",
    "oauth2_scheme",
]

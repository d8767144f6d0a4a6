"""
Authentication flow.

Orchestrates registration, login, logout, the authenticated-request guard,
password change and security-question recovery on top of the credential
store, the password hasher and the session token service.

A session token is authoritative for a request only if its signature is
valid, it is unexpired, and its embedded token version equals the version
currently stored on the user. Every password-affecting operation bumps that
version in the same write that stores the new hash.
"""

import functools
import logging
import re
from typing import Any, Callable, TypeVar

from app.services.auth.config import AuthConfig
from app.services.auth.errors import (
    AuthError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidTokenError,
    ServerError,
    SessionExpiredError,
    UserNotFoundError,
    ValidationError,
    WeakPasswordError,
    WrongAnswerError,
    WrongCurrentPasswordError,
)
from app.services.auth.hasher import PasswordHasher
from app.services.auth.schemas import AuthenticatedUser, LoginResult, RegisterInput
from app.services.auth.store import CredentialStore
from app.services.auth.tokens import SessionTokenService


logger = logging.getLogger(__name__)

PASSWORD_SYMBOLS = "@$!%*?&"
PASSWORD_PATTERN = re.compile(
    rf"^(?=.*[A-Z])(?=.*[a-z])(?=.*\d)(?=.*[{re.escape(PASSWORD_SYMBOLS)}])[^\x00]{{8,}}$"
)
# bcrypt ignores everything past this many bytes
MAX_SECRET_BYTES = 72

F = TypeVar("F", bound=Callable[..., Any])


def is_hashable_secret(secret: str) -> bool:
    """bcrypt refuses NUL bytes and truncates past MAX_SECRET_BYTES."""
    return isinstance(secret, str) and "\x00" not in secret and len(secret.encode("utf-8")) <= MAX_SECRET_BYTES


def is_strong_password(password: str) -> bool:
    """At least 8 chars with an upper, a lower, a digit and one of @$!%*?&."""
    return is_hashable_secret(password) and PASSWORD_PATTERN.fullmatch(password) is not None


def _guarded(operation: str) -> Callable[[F], F]:
    """Let AuthError through; turn anything else into a logged ServerError."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AuthError:
                raise
            except Exception as exc:
                logger.exception("Unexpected failure during %s", operation)
                raise ServerError(details={"operation": operation, "reason": str(exc)}) from exc

        return wrapper  # type: ignore[return-value]

    return decorator


class AuthenticationFlow:
    def __init__(
        self,
        config: AuthConfig,
        store: CredentialStore | None = None,
        hasher: PasswordHasher | None = None,
        tokens: SessionTokenService | None = None,
    ):
        self.config = config
        self.store = store or CredentialStore()
        self.hasher = hasher or PasswordHasher(rounds=config.bcrypt_rounds)
        self.tokens = tokens or SessionTokenService(config)
        self._dummy_hash: str | None = None

    @_guarded("register")
    def register(self, data: RegisterInput) -> dict:
        """Create an account and return its public fields."""
        if not is_strong_password(data.password):
            raise WeakPasswordError()
        if not is_hashable_secret(data.security_answer):
            raise ValidationError("Security answer contains unsupported characters or is too long")
        if self.store.find_by_email(data.email):
            raise EmailTakenError()

        user = self.store.create(
            {
                "first_name": data.first_name,
                "last_name": data.last_name,
                "age": data.age,
                "email": data.email,
                "password": self.hasher.hash(data.password),
                "security_question": data.security_question,
                "security_answer": self.hasher.hash(data.security_answer),
            }
        )
        logger.info("Registered user %s", user.id)
        return user.to_output()

    @_guarded("login")
    def login(self, email: str, password: str) -> LoginResult:
        user = self.store.find_by_email(email)
        if not user:
            # Burn the same bcrypt cost so response timing doesn't reveal unknown emails.
            self.hasher.verify(password, self._get_dummy_hash())
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()
        if not self.hasher.verify(password, user.password):
            logger.warning("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError()

        token = self.tokens.issue(user)
        return LoginResult(token=token, user=user.to_output())

    @_guarded("logout")
    def logout(self, token: str | None) -> str | None:
        """Revoke every session of the token's owner.

        Missing, malformed or expired tokens are a successful no-op. Returns
        the id of the user whose sessions were revoked, if any.
        """
        if not token:
            return None
        try:
            claims = self.tokens.verify(token)
        except InvalidTokenError:
            logger.debug("Logout with unusable token ignored")
            return None
        user = self.store.bump_version(claims.id)
        return str(user.id) if user else None

    @_guarded("verify_and_attach_user")
    def verify_and_attach_user(self, token: str | None) -> AuthenticatedUser:
        claims = self.tokens.verify(token)
        user = self.store.find_by_id(claims.id)
        if not user:
            raise InvalidTokenError()
        if user.token_version != claims.token_version:
            raise SessionExpiredError()
        return AuthenticatedUser(id=str(user.id), email=user.email)

    @_guarded("change_password")
    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        """Replace the password; every outstanding token stops working."""
        user = self.store.find_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        if not self.hasher.verify(current_password, user.password):
            raise WrongCurrentPasswordError()
        if not is_strong_password(new_password):
            raise WeakPasswordError()

        if not self.store.update_password_and_bump_version(user_id, self.hasher.hash(new_password)):
            raise UserNotFoundError()

    @_guarded("request_security_question")
    def request_security_question(self, email: str) -> str | None:
        """The user's recovery prompt, or None for an unknown email."""
        user = self.store.find_by_email(email)
        return user.security_question if user else None

    @_guarded("reset_password_with_answer")
    def reset_password_with_answer(self, email: str, answer: str, new_password: str) -> str:
        """Set a new password after a correct security answer. Returns the user id."""
        user = self.store.find_by_email(email)
        if not user:
            raise UserNotFoundError()
        if not self.hasher.verify(answer, user.security_answer):
            logger.warning("Password reset failed: wrong answer for user %s", user.id)
            raise WrongAnswerError()
        if not is_strong_password(new_password):
            raise WeakPasswordError()

        if not self.store.update_password_and_bump_version(str(user.id), self.hasher.hash(new_password)):
            raise UserNotFoundError()
        return str(user.id)

    @_guarded("get_profile")
    def get_profile(self, user_id: str) -> dict:
        user = self.store.find_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        return user.to_output()

    @_guarded("update_profile")
    def update_profile(self, user_id: str, changes: dict) -> dict:
        if not changes:
            raise ValidationError("No profile fields to update")
        user = self.store.update_profile(user_id, changes)
        if not user:
            raise UserNotFoundError()
        return user.to_output()

    @_guarded("delete_account")
    def delete_account(self, user_id: str) -> None:
        if not self.store.delete(user_id):
            raise UserNotFoundError()
        logger.info("Deleted user %s", user_id)

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash("not-a-real-password")
        return self._dummy_hash

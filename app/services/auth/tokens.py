from datetime import datetime, timezone

from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel

from app.models.user import User
from app.services.auth.config import AuthConfig
from app.services.auth.errors import InvalidTokenError


ACCESS_TOKEN_TYPE = "access"


class TokenClaims(BaseModel):
    """Identity carried by a verified session token."""
    id: str
    email: str
    token_version: int


class SessionTokenService:
    """Issues and verifies signed, stateless session tokens.

    Tokens embed the user's token_version at issuance. Comparing it against
    the stored value is left to the caller because it needs a store lookup.
    """

    def __init__(self, config: AuthConfig):
        self.config = config

    def issue(self, user: User) -> str:
        """Create a signed JWT with subject, email, token version, expiration and type."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "tv": int(user.token_version),
            "typ": ACCESS_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int((now + self.config.session_token_ttl).timestamp()),
        }
        return jwt.encode(payload, self.config.jwt_secret_key, algorithm=self.config.jwt_algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature, expiry and claim shape. Raises InvalidTokenError."""
        if not token or not isinstance(token, str):
            raise InvalidTokenError("No token, authorization denied")
        try:
            payload = jwt.decode(token, self.config.jwt_secret_key, algorithms=[self.config.jwt_algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenError("Token has expired")
        except JWTError:
            raise InvalidTokenError()

        user_id = payload.get("sub")
        email = payload.get("email")
        token_version = payload.get("tv")
        if (
            not user_id
            or not email
            or payload.get("typ") != ACCESS_TOKEN_TYPE
            or not isinstance(token_version, int)
            or isinstance(token_version, bool)
        ):
            raise InvalidTokenError()
        return TokenClaims(id=user_id, email=email, token_version=token_version)

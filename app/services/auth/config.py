from datetime import timedelta

from pydantic import BaseModel, Field

from app.utils.config import Settings


class AuthConfig(BaseModel):
    """Signing and hashing parameters owned by an AuthenticationFlow."""
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    session_token_ttl: timedelta = timedelta(days=7)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        return cls(
            jwt_secret_key=settings.jwt_secret_key,
            jwt_algorithm=settings.jwt_algorithm,
            session_token_ttl=timedelta(days=settings.session_token_expires_days),
            bcrypt_rounds=settings.bcrypt_rounds,
        )

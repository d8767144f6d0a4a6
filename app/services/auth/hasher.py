from passlib.context import CryptContext


class PasswordHasher:
    """Salted bcrypt hashing for passwords and security answers."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__default_rounds=rounds)

    def hash(self, secret: str) -> str:
        """Hash a plaintext secret; the salt is embedded in the result."""
        return self._context.hash(secret)

    def verify(self, secret: str, hashed: str) -> bool:
        """Verify a plaintext secret against a bcrypt hash.

        Returns False instead of raising for empty, non-string or unrecognised input.
        """
        if not isinstance(secret, str) or not isinstance(hashed, str) or not hashed:
            return False
        try:
            return self._context.verify(secret, hashed)
        except (ValueError, TypeError):
            return False

import logging
from datetime import datetime, timezone
from typing import Any

from bson.objectid import ObjectId
from mongoengine import NotUniqueError
from mongoengine import ValidationError as DocumentValidationError
from pymongo.errors import DuplicateKeyError

from app.models.user import User
from app.services.auth.errors import EmailTakenError, ValidationError


logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "age", "email")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """Owns every read and write of User documents.

    Writes that touch token_version go through a single find-and-modify so a
    bump is never lost to a concurrent read-then-write.
    """

    def create(self, fields: dict[str, Any]) -> User:
        """Insert a new user with token_version 0. Raises EmailTakenError."""
        email = normalize_email(fields["email"])
        # Fast path; the unique index below is what actually guards races.
        if self.find_by_email(email):
            raise EmailTakenError()

        user = User(**{**fields, "email": email, "token_version": 0})
        try:
            user.save(force_insert=True)
        except (NotUniqueError, DuplicateKeyError):
            raise EmailTakenError()
        except DocumentValidationError as exc:
            raise ValidationError("Invalid user data", details={"fields": sorted(exc.errors or {})})
        return user

    def find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        return User.objects(email=normalize_email(email)).first()

    def find_by_id(self, user_id: str) -> User | None:
        if not user_id or not ObjectId.is_valid(str(user_id)):
            return None
        return User.objects(id=user_id).first()

    def update_password_and_bump_version(self, user_id: str, password_hash: str) -> User | None:
        """Replace the password hash and revoke all sessions in one write."""
        user = self._modify(user_id, set__password=password_hash, inc__token_version=1)
        if user:
            logger.info("Password updated and sessions revoked for user %s (token_version=%s)", user.id, user.token_version)
        return user

    def bump_version(self, user_id: str) -> User | None:
        """Atomically increment token_version, invalidating every issued token."""
        user = self._modify(user_id, inc__token_version=1)
        if user:
            logger.info("Sessions revoked for user %s (token_version=%s)", user.id, user.token_version)
        return user

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Set whitelisted profile fields. Raises EmailTakenError on collision."""
        updates = {f"set__{key}": value for key, value in fields.items() if key in PROFILE_FIELDS}
        if "set__email" in updates:
            updates["set__email"] = normalize_email(updates["set__email"])
            existing = self.find_by_email(updates["set__email"])
            if existing and str(existing.id) != str(user_id):
                raise EmailTakenError("Email already in use")
        try:
            return self._modify(user_id, **updates)
        except (NotUniqueError, DuplicateKeyError):
            raise EmailTakenError("Email already in use")

    def delete(self, user_id: str) -> bool:
        if not user_id or not ObjectId.is_valid(str(user_id)):
            return False
        return User.objects(id=user_id).delete() > 0

    def _modify(self, user_id: str, **updates: Any) -> User | None:
        if not ObjectId.is_valid(str(user_id)):
            return None
        return User.objects(id=user_id).modify(
            new=True,
            set__updated_at=datetime.now(timezone.utc),
            **updates,
        )

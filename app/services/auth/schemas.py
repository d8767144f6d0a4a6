from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel


Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
Age = Annotated[int, Field(ge=13, le=120)]
# bcrypt cannot hash NUL bytes
Secret = Annotated[str, StringConstraints(min_length=1, pattern=r"^[^\x00]*$")]
Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class InputModel(BaseModel):
    """Request body: camelCase or snake_case keys, unknown keys rejected."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class RegisterInput(InputModel):
    first_name: Name
    last_name: Name
    age: Age
    email: EmailStr
    password: Secret
    security_question: Text
    security_answer: Secret


class LoginInput(InputModel):
    email: Text
    password: Secret


class ChangePasswordInput(InputModel):
    current_password: Secret
    new_password: Secret


class SecurityQuestionInput(InputModel):
    email: Text


class ResetPasswordInput(InputModel):
    email: Text
    answer: Secret
    new_password: Secret


class UpdateProfileInput(InputModel):
    first_name: Name | None = None
    last_name: Name | None = None
    age: Age | None = None
    email: EmailStr | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class AuthenticatedUser(BaseModel):
    """Identity attached to a request once its token passes the guard."""
    id: str
    email: str


class LoginResult(BaseModel):
    token: str
    user: dict

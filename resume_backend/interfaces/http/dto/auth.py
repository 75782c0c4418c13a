from __future__ import annotations

import re
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from resume_backend.shared.errors.validation_types import ValidationErrorType

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def _require(data: Any, *fields: str, message: str) -> Any:
    if isinstance(data, dict) and any(not data.get(name) for name in fields):
        raise PydanticCustomError(ValidationErrorType.MISSING.value, message, {})
    return data


def _check_password_strength(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise PydanticCustomError(
            ValidationErrorType.PASSWORD_TOO_SHORT.value,
            "Password must be at least {min_length} characters long",
            {"min_length": MIN_PASSWORD_LENGTH},
        )
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PydanticCustomError(
            ValidationErrorType.PASSWORD_TOO_LONG.value,
            "Password must be at most {max_bytes} bytes long",
            {"max_bytes": MAX_PASSWORD_BYTES},
        )
    return value


class CredentialsDTO(BaseModel):
    email: str
    password: str

    @model_validator(mode="before")
    @classmethod
    def _require_fields(cls, data: Any) -> Any:
        return _require(data, "email", "password", message="Email and password are required")


class RegisterRequestDTO(CredentialsDTO):
    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise PydanticCustomError(
                ValidationErrorType.EMAIL_INVALID.value,
                "Invalid email format",
                {},
            )
        return value

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        return _check_password_strength(value)


class LoginRequestDTO(CredentialsDTO):
    """Presence only; strength is not checked at login."""


class UpdatePasswordRequestDTO(BaseModel):
    current_password: str = Field(
        validation_alias=AliasChoices("current_password", "currentPassword")
    )
    new_password: str = Field(validation_alias=AliasChoices("new_password", "newPassword"))

    @model_validator(mode="before")
    @classmethod
    def _require_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            current = data.get("current_password") or data.get("currentPassword")
            new = data.get("new_password") or data.get("newPassword")
            if not current or not new:
                raise PydanticCustomError(
                    ValidationErrorType.MISSING.value,
                    "Current and new password are required",
                    {},
                )
        return data

    @field_validator("new_password")
    @classmethod
    def validate_new_password_length(cls, value: str) -> str:
        return _check_password_strength(value)


class SuccessDTO(BaseModel):
    success: bool = True

"""Pydantic models for authentication request and response contracts."""

from __future__ import annotations

import re

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
_PASSWORD_POLICY = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)(?=.*[^A-Za-z\d]).{8,}$")


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


def _require_utf8_text(value: str, *, label: str) -> str:
    """Reject strings that cannot be encoded as UTF-8 (lone surrogates)."""

    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PydanticCustomError(
            "string_not_utf8",
            "{label} must be valid UTF-8 text",
            {"label": label},
        ) from exc
    return value


def _require_email(value: str) -> str:
    """Reject blank or malformed email addresses with client-facing messages."""

    candidate = _require_utf8_text(value, label="Email").strip()
    if not candidate:
        raise PydanticCustomError("email_required", "Email is required")
    try:
        validate_email(candidate, check_deliverability=False)
    except EmailNotValidError as exc:
        raise PydanticCustomError(
            "email_invalid",
            "Please enter a valid email address",
        ) from exc
    return candidate


def _require_password_length(value: str) -> str:
    if not value:
        raise PydanticCustomError("password_required", "Password is required")
    _require_utf8_text(value, label="Password")
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError(
            "password_too_short",
            "Password must be at least 8 characters",
        )
    return value


class SignUpRequest(StrictModel):
    """Sign-up request body."""

    email: str
    name: str
    password: str

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _require_email(value)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        trimmed = _require_utf8_text(value, label="Name").strip()
        if not trimmed:
            raise PydanticCustomError("name_required", "Name is required")
        if len(trimmed) < NAME_MIN_LENGTH:
            raise PydanticCustomError("name_too_short", "Name must be at least 3 characters")
        if len(trimmed) > NAME_MAX_LENGTH:
            raise PydanticCustomError("name_too_long", "Name must not exceed 50 characters")
        return trimmed

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        _require_password_length(value)
        if _PASSWORD_POLICY.match(value) is None:
            raise PydanticCustomError(
                "password_too_weak",
                "Password must contain at least one letter, one number, "
                "and one special character",
            )
        return value


class SignInRequest(StrictModel):
    """Sign-in request body."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _require_email(value)

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        return _require_password_length(value)


class AuthUserResponse(StrictModel):
    """Public user projection; never carries credential material."""

    id: str
    email: str
    name: str


class AuthTokenResponse(StrictModel):
    """Sign-up/sign-in success body."""

    access_token: str
    user: AuthUserResponse


class CurrentUserResponse(StrictModel):
    """Identity resolved from the caller's bearer token."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str


class FieldErrorResponse(StrictModel):
    """One field-level validation failure."""

    field: str
    message: str


class ErrorResponse(StrictModel):
    """Uniform error body for every non-2xx response."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    message: str
    errors: list[FieldErrorResponse] | None = None

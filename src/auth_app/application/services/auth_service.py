"""Application authentication service for sign-up, sign-in, and token identity."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from auth_app.application.ports.password_hasher_port import PasswordHasherPort
from auth_app.application.ports.token_issuer_port import TokenClaims, TokenIssuerPort
from auth_app.application.ports.user_repository_port import (
    DuplicateEmailError,
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from auth_app.domain.auth.credentials import normalize_user_email, normalize_user_name

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
EMAIL_IN_USE_MESSAGE = "Email already in use"

logger = logging.getLogger(__name__)


class EmailAlreadyInUseError(Exception):
    """Raised when sign-up targets an email that is already registered."""

    def __init__(self) -> None:
        super().__init__(EMAIL_IN_USE_MESSAGE)


class InvalidCredentialsError(PermissionError):
    """Raised for unknown email and wrong password alike."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


@dataclass(frozen=True)
class PublicUser:
    """User projection safe to return to callers."""

    id: str
    email: str
    name: str


@dataclass(frozen=True)
class AuthSession:
    """Access token plus the authenticated user projection."""

    access_token: str
    user: PublicUser


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved from a verified access token."""

    user_id: str
    email: str


class AuthService:
    """Register users, verify credentials, and resolve bearer token identity."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
        token_issuer: TokenIssuerPort,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    async def sign_up(self, *, email: str, name: str, password: str) -> AuthSession:
        """Create one user account and return a fresh access token for it."""

        normalized_email = normalize_user_email(email=email)
        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)

        try:
            user = await self._users.create_user(
                UserCreateInput(
                    email=normalized_email,
                    name=normalize_user_name(name=name),
                    password_hash=password_hash,
                )
            )
        except DuplicateEmailError as exc:
            logger.info("auth_signup_conflict email=%s", normalized_email)
            raise EmailAlreadyInUseError() from exc

        logger.info("auth_signup_success user_id=%s", user.user_id)
        return self._issue_session(user)

    async def sign_in(self, *, email: str, password: str) -> AuthSession:
        """Verify credentials and return a fresh access token."""

        normalized_email = normalize_user_email(email=email)
        user = await self._users.get_by_email(email=normalized_email)
        if user is None:
            logger.info("auth_signin_failed reason=invalid_credentials")
            raise InvalidCredentialsError()

        is_valid = await asyncio.to_thread(
            self._password_hasher.verify_password,
            password=password,
            password_hash=user.password_hash,
        )
        if not is_valid:
            logger.info("auth_signin_failed reason=invalid_credentials")
            raise InvalidCredentialsError()

        logger.info("auth_signin_success user_id=%s", user.user_id)
        return self._issue_session(user)

    def get_current_user(self, *, token: str) -> CurrentUser:
        """Resolve identity claims from an already-extracted bearer token."""

        claims = self._token_issuer.verify_token(token)
        return CurrentUser(user_id=claims.subject, email=claims.email)

    def _issue_session(self, user: UserRecord) -> AuthSession:
        user_id = str(user.user_id)
        access_token = self._token_issuer.issue_token(
            TokenClaims(subject=user_id, email=user.email)
        )
        return AuthSession(
            access_token=access_token,
            user=PublicUser(id=user_id, email=user.email, name=user.name),
        )

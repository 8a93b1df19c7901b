from __future__ import annotations

import pytest

from auth_app.application.ports.token_issuer_port import InvalidAccessTokenError, TokenClaims
from auth_app.application.services.auth_service import AuthService, CurrentUser
from auth_app.infrastructure.http.auth_guard import (
    BearerAuthGuard,
    InvalidAuthTokenError,
    MissingAuthTokenError,
    extract_bearer_token,
)


class RecordingTokenIssuer:
    def __init__(self) -> None:
        self.verified: list[str] = []

    def issue_token(self, claims: TokenClaims) -> str:
        return f"{claims.subject}|{claims.email}"

    def verify_token(self, token: str) -> TokenClaims:
        self.verified.append(token)
        if "|" not in token:
            raise InvalidAccessTokenError("unauthorized")
        subject, email = token.split("|", 1)
        return TokenClaims(subject=subject, email=email)


class UnusedUserRepository:
    async def create_user(self, payload: object) -> object:
        raise AssertionError("store must not be touched")

    async def get_by_email(self, *, email: str) -> object:
        raise AssertionError("store must not be touched")

    async def get_by_id(self, *, user_id: object) -> object:
        raise AssertionError("store must not be touched")


class UnusedPasswordHasher:
    def hash_password(self, password: str) -> str:
        raise AssertionError("hasher must not be touched")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        raise AssertionError("hasher must not be touched")


def _guard(issuer: RecordingTokenIssuer) -> BearerAuthGuard:
    service = AuthService(
        users=UnusedUserRepository(),  # type: ignore[arg-type]
        password_hasher=UnusedPasswordHasher(),
        token_issuer=issuer,
    )
    return BearerAuthGuard(auth_service=service)


def test_extract_bearer_token_accepts_standard_header() -> None:
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_bearer_token("bearer abc") == "abc"
    assert extract_bearer_token("  Bearer   abc  ") == "abc"


@pytest.mark.parametrize("header", [None, "", "   "])
def test_extract_bearer_token_missing_header(header: str | None) -> None:
    with pytest.raises(MissingAuthTokenError):
        extract_bearer_token(header)


@pytest.mark.parametrize(
    "header",
    ["abc.def.ghi", "Basic dXNlcjpwdw==", "Bearer", "Bearer a b", "Token abc"],
)
def test_extract_bearer_token_rejects_other_shapes(header: str) -> None:
    with pytest.raises(InvalidAuthTokenError):
        extract_bearer_token(header)


def test_guard_resolves_current_user_from_bearer_header() -> None:
    issuer = RecordingTokenIssuer()

    current = _guard(issuer).require_current_user(authorization_header="Bearer u-1|a@b.com")

    assert current == CurrentUser(user_id="u-1", email="a@b.com")
    assert issuer.verified == ["u-1|a@b.com"]


def test_guard_never_passes_prefixless_header_to_issuer() -> None:
    issuer = RecordingTokenIssuer()

    with pytest.raises(InvalidAuthTokenError):
        _guard(issuer).require_current_user(authorization_header="u-1|a@b.com")

    assert issuer.verified == []


def test_guard_surfaces_invalid_token_as_permission_error() -> None:
    issuer = RecordingTokenIssuer()

    with pytest.raises(PermissionError):
        _guard(issuer).require_current_user(authorization_header="Bearer tampered")

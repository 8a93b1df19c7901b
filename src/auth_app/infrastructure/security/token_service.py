"""Signed JWT access token service."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from auth_app.application.ports.token_issuer_port import (
    InvalidAccessTokenError,
    TokenClaims,
    TokenIssuerPort,
)

_DEFAULT_ALGORITHM = "HS256"
_DEFAULT_TOKEN_TTL = timedelta(hours=1)
_UNAUTHORIZED = "unauthorized"


class JwtTokenService(TokenIssuerPort):
    """Issue and verify HMAC-signed, time-bound bearer tokens."""

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = _DEFAULT_ALGORITHM,
        token_ttl: timedelta = _DEFAULT_TOKEN_TTL,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("token secret cannot be blank")
        if token_ttl <= timedelta(0):
            raise ValueError("token ttl must be positive")
        self._secret = secret
        self._algorithm = algorithm
        self._token_ttl = token_ttl
        self._now = now or (lambda: datetime.now(tz=UTC))

    def issue_token(self, claims: TokenClaims) -> str:
        """Sign subject/email claims with issued-at and expiry timestamps."""

        issued_at = self._now()
        payload = {
            "sub": claims.subject,
            "email": claims.email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._token_ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> TokenClaims:
        """Return claims for a valid token; every failure collapses to one error."""

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as exc:
            raise InvalidAccessTokenError(_UNAUTHORIZED) from exc

        subject = payload.get("sub")
        email = payload.get("email")
        if not isinstance(subject, str) or not subject:
            raise InvalidAccessTokenError(_UNAUTHORIZED)
        if not isinstance(email, str) or not email:
            raise InvalidAccessTokenError(_UNAUTHORIZED)

        return TokenClaims(subject=subject, email=email)

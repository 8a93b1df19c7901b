"""Port for signed access token issuance and verification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class InvalidAccessTokenError(PermissionError):
    """Raised when an access token fails structural, signature, or expiry checks."""


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims carried by an access token."""

    subject: str
    email: str


class TokenIssuerPort(Protocol):
    """Access token issuance/verification contract."""

    def issue_token(self, claims: TokenClaims) -> str:
        """Return a compact signed token carrying the given claims."""

    def verify_token(self, token: str) -> TokenClaims:
        """Return embedded claims or raise `InvalidAccessTokenError`."""

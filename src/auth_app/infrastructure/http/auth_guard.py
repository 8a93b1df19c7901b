"""Auth header parsing and bearer-guard helpers for protected endpoints."""

from __future__ import annotations

from auth_app.application.services.auth_service import AuthService, CurrentUser


class MissingAuthTokenError(PermissionError):
    """Raised when a bearer token is required but not provided."""


class InvalidAuthTokenError(PermissionError):
    """Raised when the authorization header does not carry a bearer token."""


def extract_bearer_token(authorization_header: str | None) -> str:
    """Extract token from standard `Authorization: Bearer <token>` header."""

    if authorization_header is None or not authorization_header.strip():
        raise MissingAuthTokenError("missing bearer token")

    parts = authorization_header.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise InvalidAuthTokenError("invalid bearer token header")

    return parts[1]


class BearerAuthGuard:
    """Resolve the authenticated caller from the authorization header."""

    def __init__(self, *, auth_service: AuthService) -> None:
        self._auth_service = auth_service

    def require_current_user(self, *, authorization_header: str | None) -> CurrentUser:
        """Return caller identity; header and token failures raise `PermissionError`."""

        token = extract_bearer_token(authorization_header)
        return self._auth_service.get_current_user(token=token)

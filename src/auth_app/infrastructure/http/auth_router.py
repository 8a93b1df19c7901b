"""FastAPI router for sign-up, sign-in, and current-user endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth_app.application.dto.auth_models import (
    AuthTokenResponse,
    AuthUserResponse,
    CurrentUserResponse,
    ErrorResponse,
    SignInRequest,
    SignUpRequest,
)
from auth_app.application.services.auth_service import (
    AuthService,
    AuthSession,
    EmailAlreadyInUseError,
    InvalidCredentialsError,
)
from auth_app.infrastructure.http.auth_guard import BearerAuthGuard

UNAUTHORIZED_MESSAGE = "Unauthorized"

# auto_error=False keeps the 401 body under this router's control.
bearer_scheme = HTTPBearer(auto_error=False, bearerFormat="JWT")


def build_auth_router(*, auth_service: AuthService) -> APIRouter:
    """Build router exposing `/auth/signup`, `/auth/signin`, and `/auth/me`."""

    router = APIRouter(prefix="/auth", tags=["auth"])
    auth_guard = BearerAuthGuard(auth_service=auth_service)

    @router.post(
        "/signup",
        response_model=AuthTokenResponse,
        status_code=status.HTTP_201_CREATED,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
            status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        },
    )
    async def sign_up(payload: SignUpRequest) -> AuthTokenResponse:
        try:
            session = await auth_service.sign_up(
                email=payload.email,
                name=payload.name,
                password=payload.password,
            )
        except EmailAlreadyInUseError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        return _to_token_response(session)

    @router.post(
        "/signin",
        response_model=AuthTokenResponse,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
            status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        },
    )
    async def sign_in(payload: SignInRequest) -> AuthTokenResponse:
        try:
            session = await auth_service.sign_in(email=payload.email, password=payload.password)
        except InvalidCredentialsError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(exc),
            ) from exc
        return _to_token_response(session)

    @router.get(
        "/me",
        response_model=CurrentUserResponse,
        responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
    )
    async def me(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    ) -> CurrentUserResponse:
        try:
            current_user = auth_guard.require_current_user(
                authorization_header=_authorization_header(credentials),
            )
        except PermissionError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=UNAUTHORIZED_MESSAGE,
                headers={"WWW-Authenticate": "Bearer"},
            ) from exc
        return CurrentUserResponse(user_id=current_user.user_id, email=current_user.email)

    return router


def _authorization_header(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    # HTTPBearer yields None for a missing header or a non-bearer scheme.
    if credentials is None:
        return None
    return f"{credentials.scheme} {credentials.credentials}"


def _to_token_response(session: AuthSession) -> AuthTokenResponse:
    return AuthTokenResponse(
        access_token=session.access_token,
        user=AuthUserResponse(
            id=session.user.id,
            email=session.user.email,
            name=session.user.name,
        ),
    )

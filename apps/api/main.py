"""auth-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from datetime import timedelta

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth_app.application.services.auth_service import AuthService
from auth_app.config.settings import Settings, load_http_settings, load_settings
from auth_app.infrastructure.db.session import create_session_factory
from auth_app.infrastructure.db.user_repository import SqlAlchemyUserRepository
from auth_app.infrastructure.http.auth_router import build_auth_router
from auth_app.infrastructure.http.error_handlers import register_error_handlers
from auth_app.infrastructure.http.security_headers import SecurityHeadersMiddleware
from auth_app.infrastructure.logging import configure_logging
from auth_app.infrastructure.security.password_hasher import ScryptPasswordHasher
from auth_app.infrastructure.security.token_service import JwtTokenService

logger = logging.getLogger(__name__)

API_TITLE = "Auth App API"
API_DESCRIPTION = "API documentation for authentication"
API_VERSION = "1.0"


def build_token_service(settings: Settings) -> JwtTokenService:
    """Build JWT token service from the process-wide signing configuration."""

    return JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        token_ttl=timedelta(seconds=settings.jwt_expires_in_seconds),
    )


def build_auth_service(database_url: str, *, token_service: JwtTokenService) -> AuthService:
    """Build authentication service with SQLAlchemy-backed dependencies."""

    session_factory = create_session_factory(database_url)
    return AuthService(
        users=SqlAlchemyUserRepository(session_factory),
        password_hasher=ScryptPasswordHasher(),
        token_issuer=token_service,
    )


def create_app(
    *,
    auth_service: AuthService | None = None,
    api_prefix: str | None = None,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Create FastAPI app exposing the auth routes.

    Only the settings a missing collaborator needs are loaded: an injected
    `auth_service` never requires `JWT_SECRET` or `DATABASE_URL`.
    """

    if api_prefix is None or cors_origins is None:
        http_settings = load_http_settings()
        configure_logging(level=http_settings.log_level)
        if api_prefix is None:
            api_prefix = http_settings.api_prefix
        if cors_origins is None:
            cors_origins = http_settings.cors_origins()
    if auth_service is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)
        auth_service = build_auth_service(
            settings.database_url,
            token_service=build_token_service(settings),
        )

    docs_url = f"{api_prefix}/docs"
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url=docs_url,
        openapi_url=f"{api_prefix}/docs-json",
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, csp_exempt_prefixes=[docs_url])
    register_error_handlers(app)
    app.include_router(build_auth_router(auth_service=auth_service), prefix=api_prefix)

    logger.info(
        "auth_api_configured prefix=%s docs=%s cors_origins=%s",
        api_prefix or "/",
        docs_url,
        cors_origins,
    )
    return app


def run_asgi_server(*, host: str | None = None, port: int | None = None) -> None:
    """Run auth-api as a long-lived ASGI process using application factory mode."""

    settings = load_http_settings()
    uvicorn.run(
        "apps.api.main:create_app",
        host=host or settings.api_host,
        port=port or settings.port,
        factory=True,
    )


def main() -> None:
    """Run auth-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()

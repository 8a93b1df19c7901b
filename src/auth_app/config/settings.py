"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]
PortInt = Annotated[int, Field(gt=0, le=65_535)]

_DEFAULT_CORS_ALLOWED_ORIGINS = "http://localhost:4200,http://localhost:5173"


class HttpSettings(BaseSettings):
    """HTTP surface settings; loadable without signing secrets."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_prefix: str = Field(default="", validation_alias="API_PREFIX")
    cors_allowed_origins: str = Field(
        default=_DEFAULT_CORS_ALLOWED_ORIGINS,
        validation_alias="CORS_ALLOWED_ORIGINS",
    )
    api_host: NonEmptyStr = Field(default="0.0.0.0", validation_alias="API_HOST")
    port: PortInt = Field(default=3_000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("api_prefix")
    @classmethod
    def _validate_api_prefix(cls, value: str) -> str:
        normalized = value.strip().rstrip("/")
        if normalized and not normalized.startswith("/"):
            raise ValueError("API_PREFIX must be empty or start with '/'")
        return normalized

    def cors_origins(self) -> list[str]:
        """Return configured CORS origins as a list, skipping blanks."""

        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


class Settings(HttpSettings):
    """Full application settings, including token signing and storage."""

    jwt_secret: NonEmptyStr = Field(validation_alias="JWT_SECRET")
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        validation_alias="JWT_ALGORITHM",
    )
    jwt_expires_in_seconds: PositiveInt = Field(
        default=3_600,
        validation_alias="JWT_EXPIRES_IN_SECONDS",
    )
    database_url: NonEmptyStr = Field(
        default="sqlite+aiosqlite:///./auth.db",
        validation_alias="DATABASE_URL",
    )


@lru_cache(maxsize=1)
def load_http_settings() -> HttpSettings:
    """Load and cache HTTP surface settings."""

    return HttpSettings()


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()  # type: ignore[call-arg]

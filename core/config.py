"""
OpSkill settings.

Values come from environment variables or a local .env file. Env names are
the upper-case aliases below (e.g. DATABASE_URL, JWT_SECRET_KEY).
"""

from typing import Literal
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "opskill-dev-secret-change-me-in-production-0000"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="opskill", alias="APP_NAME")
    app_env: Literal["development", "test", "staging", "production"] = Field(
        default="development", alias="APP_ENV"
    )
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    # HTTP
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        alias="ALLOWED_ORIGINS",
    )

    # Persistence
    database_url: str = Field(
        default="sqlite+aiosqlite:///./opskill.db", alias="DATABASE_URL"
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # Tokens and password hashing
    jwt_secret_key: str = Field(
        default=DEFAULT_JWT_SECRET, min_length=32, alias="JWT_SECRET_KEY"
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_days: int = Field(
        default=30, ge=1, alias="ACCESS_TOKEN_EXPIRE_DAYS"
    )
    bcrypt_rounds: int = Field(default=10, ge=4, le=16, alias="BCRYPT_ROUNDS")

    # Request logging
    log_request_body: bool = Field(default=False, alias="LOG_REQUEST_BODY")
    log_response_body: bool = Field(default=False, alias="LOG_RESPONSE_BODY")
    log_max_body_size: int = Field(default=1024, alias="LOG_MAX_BODY_SIZE")
    json_logs: bool = Field(default=True, alias="JSON_LOGS")

    @model_validator(mode="after")
    def check_production_secret(self) -> "Settings":
        """Refuse to boot production with the development JWT secret."""
        if self.app_env == "production" and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Shared instance, read at import time
settings = Settings()

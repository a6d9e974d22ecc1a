"""Application settings and configuration.

This module defines the process-level configuration for Orange Forum.
Settings are loaded from environment variables with sensible defaults.
Forum-level settings (forum name, feature flags, SMTP) live in the
``configs`` table instead; see :mod:`orange_forum.services.config_service`.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Orange Forum", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./orangeforum.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Password hashing and reset tokens
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")
    reset_token_length: int = Field(default=64, alias="RESET_TOKEN_LENGTH")
    reset_token_ttl_hours: int = Field(default=48, alias="RESET_TOKEN_TTL_HOURS")

    # Listing defaults
    topics_per_page: int = Field(default=30, alias="TOPICS_PER_PAGE")
    comments_per_page: int = Field(default=50, alias="COMMENTS_PER_PAGE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def reset_token_ttl_seconds(self) -> int:
        """Return the reset token lifetime in seconds."""
        return self.reset_token_ttl_hours * 60 * 60


settings = Settings()  # type: ignore[call-arg]

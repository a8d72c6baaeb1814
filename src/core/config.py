"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="DevConnect API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/devconnect",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="",
        description="Secret key for HS256 token signing; startup fails when empty",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_seconds: int = Field(
        default=360000,
        description="Token lifetime in seconds (100 hours)",
    )

    # Password hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # GitHub repository lookup
    github_api_url: str = Field(default="https://api.github.com")
    github_token: str = Field(
        default="",
        description="Optional GitHub token to raise the anonymous rate limit",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(
        default="console",
        description="'json' for machine-readable logs, 'console' for development",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers usually supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

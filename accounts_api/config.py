"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_JWT_SECRET = "change-me-in-production"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database: DATABASE_URL wins over the individual parts when set
    database_url: str | None = Field(default=None)
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432)
    db_user: str = Field(default="accounts_user")
    db_password: str = Field(default="accounts_password")
    db_name: str = Field(default="accounts")

    # JWT
    jwt_secret: str = Field(default=INSECURE_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=60, gt=0)

    # Password hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Server
    port: int = Field(default=8000)
    environment: str = Field(default="development")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")  # "text" or "json"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if not self.jwt_secret:
            raise ValueError("JWT_SECRET must not be empty")
        if self.environment == "production":
            if self.jwt_secret == INSECURE_JWT_SECRET:
                raise ValueError("JWT_SECRET must be changed in production")
            if "localhost" in (self.database_url or self.db_host):
                raise ValueError("Database should not use localhost in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def uses_insecure_jwt_secret(self) -> bool:
        """True while the documented development secret is still in use."""
        return self.jwt_secret == INSECURE_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

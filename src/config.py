"""Configuration management for the application."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Read and logged at startup only, nothing connects to it
    mongo_uri: str | None = Field(default=None)

    # Storage document
    users_file: Path = Field(default=PACKAGE_DIR / "users.json")

    # Password hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Strip password hashes from responses (off in the shipped demo behaviour)
    redact_passwords: bool = Field(default=False)

    # API
    log_level: str = Field(default="INFO")
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production" and not self.redact_passwords:
            raise ValueError("REDACT_PASSWORDS must be enabled in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

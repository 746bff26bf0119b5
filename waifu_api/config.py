"""
Configuration and settings for the Waifu API.

The settings are loaded from environment variables using pydantic-settings.
See `.env.example` in the project root for available variables.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    # Token configuration
    jwt_secret: str = Field(alias="JWT_SECRET")
    # Shared secret the website uses to issue tokens through `/user`
    access_key: str = Field(alias="ACCESS_KEY")

    # Database configuration
    sql_database_uri: str = Field(default="sqlite:///data/app.db", alias="SQLALCHEMY_DATABASE_URI")

    # Per-IP quota for the content endpoints
    rate_limit_requests: int = Field(default=2, alias="RATE_LIMIT_REQUESTS")
    rate_limit_window_seconds: float = Field(default=1.0, alias="RATE_LIMIT_WINDOW_SECONDS")

    docs_url: str = Field(
        default="https://docs.waifu.it/list-of-endpoints", alias="DOCS_URL"
    )

    # CORS settings (comma-separated list)
    allowed_origins: str = Field(default="*", alias="ALLOWED_ORIGINS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()

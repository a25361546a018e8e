"""Application settings and configuration.

This module defines all configuration options for Feedguard.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Feedguard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Local durable storage for user preferences
    settings_database_url: str = Field(
        default="sqlite:///./feedguard.db",
        alias="SETTINGS_DATABASE_URL",
    )
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    policy_store_key: str = Field(default="moderation-settings", alias="POLICY_STORE_KEY")

    # Blocked-term artifact; the packaged list is used when unset
    blocked_terms_path: Path | None = Field(default=None, alias="BLOCKED_TERMS_PATH")

    # Hosted feed backend
    feed_base_url: str = Field(default="http://localhost:8000", alias="FEED_BASE_URL")
    feed_http_timeout_seconds: float = Field(default=10.0, alias="FEED_HTTP_TIMEOUT_SECONDS")
    feed_page_size: int = Field(default=10, ge=1, le=100, alias="FEED_PAGE_SIZE")
    feed_names: list[str] = Field(
        default=["home", "notifications", "search"],
        alias="FEED_NAMES",
    )

    # Client-side masking of e-mail addresses, URLs and phone numbers
    scrub_contact_details: bool = Field(default=False, alias="SCRUB_CONTACT_DETAILS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()

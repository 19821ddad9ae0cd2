"""
Configuration Management for Activity Log

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The Notion credentials are read once at process start; the API builds a
single client from them and shares it across requests.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NotionSettings(BaseSettings):
    """Notion database configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NOTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    token: str = Field(
        ...,
        description="Notion integration token"
    )
    database_id: str = Field(
        ...,
        description="ID of the Notion database holding the activities"
    )
    api_version: str = Field(
        default="2022-06-28",
        description="Value sent in the Notion-Version header"
    )
    base_url: str = Field(
        default="https://api.notion.com/v1",
        description="Notion REST API root"
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout for a single Notion call"
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Results requested per database query page"
    )

    # Property (column) names in the Notion database
    prop_date: str = Field(default="Date")
    prop_time: str = Field(default="Time")
    prop_category: str = Field(default="Category")
    prop_note: str = Field(default="Note")
    prop_amount: str = Field(default="Amount")

    @field_validator('token', 'database_id')
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only credentials."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (human-readable logs)"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON lines"
    )

    # API server
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000, ge=1, le=65535)

    # Frontend -> API
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL the Streamlit frontend uses to reach the API"
    )
    api_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily so the frontend can start
    # without Notion credentials.

    @property
    def notion(self) -> NotionSettings:
        return NotionSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus
    {setting_name_error: message} for the failing ones.
    """
    results: dict[str, object] = {}
    settings = get_settings()

    for name in ("notion", "app"):
        error: Optional[str] = None
        try:
            getattr(settings, name)
        except ValueError as e:
            error = str(e)
        results[name] = error is None
        if error is not None:
            results[f"{name}_error"] = error

    return results

"""
Configuration and settings for the back office service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Database (Postgres expected, any SQLAlchemy URL works)
    database_url: Optional[str] = Field(default=None)

    # S3-compatible object storage
    s3_endpoint: Optional[str] = Field(default=None)
    s3_region: Optional[str] = Field(default=None)
    s3_bucket: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)
    # Public URL prefix objects are served from, e.g. https://<bucket>.cdn.example
    storage_public_base_url: Optional[str] = Field(default=None)

    # Redis holds custom list orders and the public response cache
    redis_url: Optional[str] = Field(default=None)
    cache_prefix: str = Field(default="cache:")
    cache_ttl_seconds: int = Field(default=3600)

    # Content kinds whose public listing honours the custom order record.
    ordered_kinds: list[str] = Field(
        default_factory=lambda: ["gallery-images", "gallery-videos", "team"]
    )

    # Session / admin login
    secret_key: str = Field(default="change-me")
    jwt_algorithm: str = Field(default="HS256")
    session_cookie_name: str = Field(default="token")
    session_max_age_hours: int = Field(default=720)
    cookie_secure: bool = Field(default=False)
    admin_username: str = Field(default="admin")
    admin_password: Optional[str] = Field(default=None)
    admin_display_name: str = Field(default="Administrator")

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

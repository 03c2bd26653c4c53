"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LINESIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Signature verification
    channel_secret: str | None = Field(
        default=None,
        description="LINE channel secret used to verify webhook signatures",
    )
    signature_header: str = Field(
        default="x-line-signature",
        description="Header carrying the Base64 HMAC-SHA256 signature",
    )

    # Receiver
    callback_path: str = Field(
        default="/callback",
        description="Path of the webhook callback route",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface the receiver binds to",
    )
    port: int = Field(
        default=8080,
        description="Port the receiver listens on",
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Expose Prometheus metrics at /metrics",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level name",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of console output",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

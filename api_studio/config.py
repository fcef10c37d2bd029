"""
Configuration for API Studio.

Settings are read from the environment (prefix ``API_STUDIO_``) or a local
``.env`` file and shared by the session client and the companion service.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the execution and history service",
    )
    request_timeout: float = Field(default=30.0, description="Timeout in seconds")
    database_url: str = Field(default="sqlite:///./api_studio.db")
    history_limit: int = Field(default=100, description="Max history entries listed")
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="API_STUDIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

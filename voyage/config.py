# FILE: voyage/config.py
"""
Configuration management for the Voyage backend
Loads from environment variables with validation
"""
import os
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MONTH_FILTER_MODES = ("any_year", "sentinel_year")


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    # Backend server
    backend_host: str = Field(default="0.0.0.0", alias="BACKEND_HOST")
    backend_port: int = Field(default=5000, alias="BACKEND_PORT")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Data paths
    data_dir: str = Field(default="./data", alias="DATA_DIR")
    memory_dir: str = Field(default="./data/memories", alias="MEMORY_DIR")

    # Authentication (verification only, tokens are issued by the user service)
    auth_secret: str = Field(default="change-me", alias="AUTH_SECRET")
    auth_token_ttl_hours: int = Field(default=24 * 7, alias="AUTH_TOKEN_TTL_HOURS")

    # Filtering
    month_filter_mode: str = Field(
        default="any_year",
        alias="MONTH_FILTER_MODE",
        description="How a month filter without a year is applied: "
                    "'any_year' matches that calendar month in every year, "
                    "'sentinel_year' restricts to that month of the legacy placeholder year"
    )

    # Security
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_rpm: int = Field(default=120, alias="RATE_LIMIT_RPM")
    body_size_limit_mb: int = Field(default=10, alias="BODY_SIZE_LIMIT_MB")

    # CORS
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Outbound client
    api_base_url: str = Field(default="http://localhost:5000", alias="API_BASE_URL")
    client_timeout: float = Field(default=30.0, alias="CLIENT_TIMEOUT")

    # Validators
    @field_validator("month_filter_mode")
    @classmethod
    def validate_month_filter_mode(cls, v):
        if v not in MONTH_FILTER_MODES:
            raise ValueError("month_filter_mode must be 'any_year' or 'sentinel_year'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("log_level must be a standard logging level name")
        return v

    @field_validator("auth_token_ttl_hours", "rate_limit_rpm", "body_size_limit_mb")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Ensure directories exist
        for dir_path in [self.data_dir, self.memory_dir]:
            os.makedirs(dir_path, exist_ok=True)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create singleton settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings (useful for testing)"""
    global _settings
    _settings = None
    return get_settings()

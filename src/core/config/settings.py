#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
comic aggregator cache service. All configuration is centralized here to
ensure consistency across modules.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.config.constants import (
    DEFAULT_CLEANUP_INTERVAL,
    DEFAULT_COMPRESSION_THRESHOLD,
    DEFAULT_MAX_SIZE,
    DEFAULT_TTL_SECONDS,
    SLOW_REQUEST_THRESHOLD,
)


class CacheSettings(BaseSettings):
    """
    Response cache configuration.

    STAGE-2: Cache sizing, expiry and compression
    """

    ENABLE_CACHING: bool = Field(default=True, description="Master switch for the response cache")
    CACHE_DEFAULT_TTL: float = Field(default=DEFAULT_TTL_SECONDS, description="Default entry TTL (seconds)")
    CACHE_MAX_SIZE: int = Field(default=DEFAULT_MAX_SIZE, description="Maximum entries per tier")
    CACHE_CLEANUP_INTERVAL: float = Field(
        default=DEFAULT_CLEANUP_INTERVAL, description="Expiry sweep interval (seconds)"
    )
    CACHE_COMPRESSION_ENABLED: bool = Field(default=True, description="Compress large payloads")
    CACHE_COMPRESSION_THRESHOLD: int = Field(
        default=DEFAULT_COMPRESSION_THRESHOLD, description="Serialized size (bytes) above which payloads are compressed"
    )
    CACHE_EXCLUDED_PATHS: list[str] = Field(
        default=["/api/v1/admin", "/api/v1/health", "/docs", "/redoc", "/openapi.json"],
        description="Path prefixes the response cache never handles",
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """
    General application settings.

    STAGE-0: Application initialization
    """

    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Comic Aggregator API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix for all API routes")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")
    SLOW_REQUEST_THRESHOLD: float = Field(
        default=SLOW_REQUEST_THRESHOLD, description="Seconds before a request is logged as slow"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from src.core.config.settings import get_settings

        settings = get_settings()
        max_size = settings.cache.CACHE_MAX_SIZE
        base_path = settings.app.API_BASE_PATH
    """

    # Cache settings
    ENABLE_CACHING: bool = Field(default=True, description="Master switch for the response cache")
    CACHE_DEFAULT_TTL: float = Field(default=DEFAULT_TTL_SECONDS, description="Default entry TTL (seconds)")
    CACHE_MAX_SIZE: int = Field(default=DEFAULT_MAX_SIZE, description="Maximum entries per tier")
    CACHE_CLEANUP_INTERVAL: float = Field(
        default=DEFAULT_CLEANUP_INTERVAL, description="Expiry sweep interval (seconds)"
    )
    CACHE_COMPRESSION_ENABLED: bool = Field(default=True, description="Compress large payloads")
    CACHE_COMPRESSION_THRESHOLD: int = Field(
        default=DEFAULT_COMPRESSION_THRESHOLD, description="Serialized size (bytes) above which payloads are compressed"
    )
    CACHE_EXCLUDED_PATHS: list[str] = Field(
        default=["/api/v1/admin", "/api/v1/health", "/docs", "/redoc", "/openapi.json"],
        description="Path prefixes the response cache never handles",
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Comic Aggregator API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix for all API routes")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")
    SLOW_REQUEST_THRESHOLD: float = Field(
        default=SLOW_REQUEST_THRESHOLD, description="Seconds before a request is logged as slow"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    # Nested configuration views
    @property
    def cache(self) -> CacheSettings:
        """Get cache settings."""
        return CacheSettings(
            ENABLE_CACHING=self.ENABLE_CACHING,
            CACHE_DEFAULT_TTL=self.CACHE_DEFAULT_TTL,
            CACHE_MAX_SIZE=self.CACHE_MAX_SIZE,
            CACHE_CLEANUP_INTERVAL=self.CACHE_CLEANUP_INTERVAL,
            CACHE_COMPRESSION_ENABLED=self.CACHE_COMPRESSION_ENABLED,
            CACHE_COMPRESSION_THRESHOLD=self.CACHE_COMPRESSION_THRESHOLD,
            CACHE_EXCLUDED_PATHS=self.CACHE_EXCLUDED_PATHS,
        )

    @property
    def logging(self) -> LoggingSettings:
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT,
        )

    @property
    def app(self) -> ApplicationSettings:
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            DEBUG=self.DEBUG,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION,
            API_HOST=self.API_HOST,
            API_PORT=self.API_PORT,
            API_BASE_PATH=self.API_BASE_PATH,
            CORS_ORIGINS=self.CORS_ORIGINS,
            SLOW_REQUEST_THRESHOLD=self.SLOW_REQUEST_THRESHOLD,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings

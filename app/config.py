"""
Application configuration using Pydantic settings.
"""
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Plot storage
    plot_store_backend: Literal["memory", "remote"] = Field(
        default="memory",
        description="Where plots are read from: in-process store or remote field-data API"
    )

    # Field-data API Configuration
    field_data_api_base_url: str = Field(
        default="https://fielddata.example.com",
        description="Base URL for the remote field-data API"
    )
    field_data_api_key: str = Field(
        default="",
        description="API key for authentication"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for API calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )

    # Analysis Parameters
    nested_plot_sizes: list[float] = Field(
        default=[25.0, 100.0, 400.0, 1600.0],
        description="Nested plot areas in m² used to sample the species-area curve"
    )
    index_display_decimals: int = Field(
        default=3,
        description="Decimal places used when diversity indices are exported"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Terra Field Analytics",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    @field_validator("nested_plot_sizes")
    @classmethod
    def _sizes_positive(cls, value: list[float]) -> list[float]:
        if not value:
            raise ValueError("nested_plot_sizes must contain at least one area")
        if any(size <= 0 for size in value):
            raise ValueError(f"nested_plot_sizes must all be positive, got {value}")
        return value


# Global settings instance
settings = Settings()

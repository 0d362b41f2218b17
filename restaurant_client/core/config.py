"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three data modes:
    - FALLBACK: Call the real API, fall back to the mock store on failure
    - STRICT: Call the real API only, surface transport failures
    - MOCK: Use the in-memory mock store only (no network)

The DATA_MODE variable controls how every data-access operation is routed,
enabling seamless switching between offline development and a live backend.

Usage:
    from restaurant_client.core.config import get_settings

    settings = get_settings()
    if settings.data_mode == DataMode.MOCK:
        # Never touches the network
        ...

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local work, usually against the mock store
        PRODUCTION: Live backend
        STAGING: Pre-production backend
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class DataMode(str, Enum):
    """
    How data-access operations reach their data.

    Attributes:
        FALLBACK: Try the remote API, use the mock store if the call fails
        STRICT: Remote API only; transport failures are raised
        MOCK: Mock store only
    """
    FALLBACK = "fallback"
    STRICT = "strict"
    MOCK = "mock"


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging

        # Transport
        api_base_url: Base URL of the ordering REST API
        api_timeout: Per-request timeout in seconds

        # Data routing
        data_mode: fallback / strict / mock

        # Mock store
        mock_min_latency: Minimum simulated latency in seconds
        mock_max_latency: Maximum simulated latency in seconds
        mock_seed_data: Load sample restaurants, orders, ratings and messages

        # Business rules
        verify_order_totals: Reject caller-supplied order totals that do not
            match the item sum

        # Credentials
        credentials_path: JSON file holding the persisted auth state
            (None keeps it in memory only)
        credentials_lock_timeout: Seconds to wait for the credentials file lock
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    app_name: str = Field(
        default="Restaurant Ordering Client",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # ==========================================================================
    # TRANSPORT
    # ==========================================================================

    api_base_url: str = Field(
        default="http://localhost:3001/api",
        description="Base URL of the ordering REST API"
    )
    api_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Request timeout in seconds"
    )

    # ==========================================================================
    # DATA ROUTING
    # ==========================================================================

    data_mode: DataMode = Field(
        default=DataMode.FALLBACK,
        description="How operations reach data: fallback, strict or mock"
    )

    # ==========================================================================
    # MOCK STORE
    # ==========================================================================

    mock_min_latency: float = Field(
        default=0.1,
        ge=0,
        description="Minimum simulated latency in seconds"
    )
    mock_max_latency: float = Field(
        default=0.4,
        ge=0,
        description="Maximum simulated latency in seconds"
    )
    mock_seed_data: bool = Field(
        default=True,
        description="Seed the mock store with sample data at startup"
    )

    # ==========================================================================
    # BUSINESS RULES
    # ==========================================================================

    verify_order_totals: bool = Field(
        default=False,
        description="Recompute order totals and reject mismatching ones"
    )

    # ==========================================================================
    # CREDENTIALS
    # ==========================================================================

    credentials_path: Optional[str] = Field(
        default=None,
        description="File for the persisted auth state (None = in memory)"
    )
    credentials_lock_timeout: int = Field(
        default=5,
        description="Seconds to wait for the credentials file lock"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("data_mode", mode="before")
    @classmethod
    def validate_data_mode(cls, v: str) -> DataMode:
        """Convert string to DataMode enum."""
        if isinstance(v, DataMode):
            return v
        try:
            return DataMode(v.lower())
        except ValueError:
            valid = [e.value for e in DataMode]
            raise ValueError(f"Invalid data_mode. Must be one of: {valid}")

    @model_validator(mode="after")
    def check_latency_range(self) -> "Settings":
        if self.mock_max_latency < self.mock_min_latency:
            raise ValueError("mock_max_latency must be >= mock_min_latency")
        return self

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def uses_network(self) -> bool:
        """Check if operations may reach the remote API."""
        return self.data_mode != DataMode.MOCK

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Report settings that are unsafe for a production deployment.

        Returns:
            List of problems (empty if the configuration is acceptable)
        """
        problems = []

        if self.is_production:
            if self.data_mode == DataMode.FALLBACK:
                problems.append(
                    "DATA_MODE=fallback hides backend outages behind mock data"
                )
            if self.data_mode == DataMode.MOCK:
                problems.append("DATA_MODE=mock never reaches the backend")
            if not self.verify_order_totals:
                problems.append("VERIFY_ORDER_TOTALS is off")

        return problems


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.data_mode)
        DataMode.FALLBACK
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(
    level: int = logging.INFO,
    settings: Optional[Settings] = None,
) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        settings: Settings to read the debug flag from (defaults to cached)

    Returns:
        Configured package logger
    """
    settings = settings or get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("filelock").setLevel(logging.WARNING)

    return logging.getLogger("restaurant_client")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)

"""
Storefront Settings

Every tunable lives here and is read from the environment (or `.env`).
The same settings object is shared by the backend (catalog and order stores)
and by the storefront client (API base URL, delivery fee, display defaults),
so both halves agree on business constants such as the delivery fee.

Usage:
    from storefront.core.config import get_settings

    settings = get_settings()
    print(settings.delivery_fee)

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parents[1]


class EnvironmentMode(str, Enum):
    """Deployment stage. Production hides the interactive API docs."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Storefront settings. Field names map to upper-case environment
    variables (`DELIVERY_FEE`, `CATALOG_FILE`, ...).

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # API Configuration
        api_host: Host to bind the API server
        api_port: Port for the API server

        # Stores
        database_url: SQLAlchemy async URL of the order store
        catalog_file: JSON file served as the restaurant catalog

        # Business Configuration
        delivery_fee: Flat delivery charge added to every order
        currency_symbol: Symbol prefixed to rendered prices

        # Client
        api_base_url: Backend base URL used by the storefront client
        client_timeout_seconds: Request timeout (None disables it)
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

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Reddy's Kitchen",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=5000,
        description="API server port"
    )

    # ==========================================================================
    # ORDER STORE
    # ==========================================================================

    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/storefront.db",
        description="SQLAlchemy async URL for the order store"
    )

    # ==========================================================================
    # CATALOG STORE
    # ==========================================================================

    catalog_file: str = Field(
        default=str(PACKAGE_DIR / "data" / "restaurants.json"),
        description="JSON file holding the restaurant catalog"
    )

    # ==========================================================================
    # REDIS / CELERY
    # ==========================================================================

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL"
    )

    # ==========================================================================
    # ORDER LEDGER (EXCEL EXPORT)
    # ==========================================================================

    data_directory: str = Field(
        default="data",
        description="Directory for data files"
    )
    ledger_filename: str = Field(
        default="orders.xlsx",
        description="Excel ledger filename"
    )
    ledger_lock_timeout: int = Field(
        default=30,
        description="Seconds to wait for the ledger file lock"
    )
    ledger_export_enabled: bool = Field(
        default=False,
        description="Queue every placed order for Excel ledger export"
    )
    ledger_queue: str = Field(
        default="ledger",
        description="Celery queue the export tasks are routed to"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    delivery_fee: float = Field(
        default=40,
        ge=0,
        description="Flat delivery fee"
    )
    currency_symbol: str = Field(
        default="₹",
        description="Currency symbol used when rendering prices"
    )
    placeholder_image_url: str = Field(
        default="https://images.pexels.com/photos/11170284/pexels-photo-11170284.jpeg",
        description="Image used for restaurants without one"
    )
    default_emoji: str = Field(
        default="🍛",
        description="Emoji used for restaurants without one"
    )

    # ==========================================================================
    # STOREFRONT CLIENT
    # ==========================================================================

    api_base_url: str = Field(
        default="http://localhost:5000",
        description="Backend base URL used by the storefront client"
    )
    client_timeout_seconds: Optional[float] = Field(
        default=None,
        description="Client request timeout in seconds (unset = wait indefinitely)"
    )
    order_timestamp_format: str = Field(
        default="%d %b %Y, %I:%M %p",
        description="strftime format for order timestamps"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Accept `ENV_MODE` in any letter case."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_production(self) -> bool:
        """Production deployment: API docs are not served."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def ledger_path(self) -> Path:
        """Full path of the Excel ledger."""
        return Path(self.data_directory) / self.ledger_filename


@lru_cache()
def get_settings() -> Settings:
    """
    Settings for this process, read once from the environment.

    Settings are loaded once per process; call ``get_settings.cache_clear()``
    after changing the environment (tests do this).

    Returns:
        Settings: Configured application settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Send log records from every storefront module to stdout.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-30s │ %(message)s"
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
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("storefront")

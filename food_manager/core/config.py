"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Every variable is prefixed with FOOD_MANAGER_ and can also be placed in a
local .env file.

The ENV_MODE variable only affects validation and logging: the client talks
to whatever API_BASE_URL points at, but outside development a plain-HTTP
base URL is reported as a configuration problem.

Usage:
    from food_manager.core.config import get_settings

    settings = get_settings()
    response = await client.get(settings.items_url)

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local API server, relaxed validation
        PRODUCTION: Live API, HTTPS required
        STAGING: Pre-production API, HTTPS required
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class SessionBackend(str, Enum):
    """Where the session token and user record are kept."""
    FILE = "file"
    MEMORY = "memory"


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging

        # Remote API
        api_base_url: Scheme and host of the menu API
        items_path: Collection endpoint for food items
        login_path: Login endpoint
        transactions_path: Transaction history endpoint
        request_timeout: Seconds before an HTTP request is abandoned
        auth_scheme: Prefix placed before the token in the Authorization header

        # Session
        session_backend: "file" (persists across runs) or "memory"
        session_file: Location of the session file

        # Presentation
        notification_ttl_seconds: Lifetime of a transient notification
        default_unit_name: Unit used when a new item names none
        currency_symbol: Symbol printed before prices
    """

    model_config = SettingsConfigDict(
        env_prefix="FOOD_MANAGER_",
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
        default="Food Manager",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # ==========================================================================
    # REMOTE API
    # ==========================================================================

    api_base_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL of the menu API"
    )
    items_path: str = Field(
        default="/items/items/",
        description="Food item collection endpoint"
    )
    login_path: str = Field(
        default="/users/users/login/",
        description="Login endpoint"
    )
    transactions_path: str = Field(
        default="/transactions/",
        description="Transaction history endpoint"
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds"
    )
    auth_scheme: str = Field(
        default="Token",
        description="Authorization header prefix"
    )

    # ==========================================================================
    # SESSION
    # ==========================================================================

    session_backend: SessionBackend = Field(
        default=SessionBackend.FILE,
        description="Session storage backend"
    )
    session_file: str = Field(
        default="~/.food_manager/session.json",
        description="Path of the persisted session"
    )

    # ==========================================================================
    # PRESENTATION
    # ==========================================================================

    notification_ttl_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Seconds before a notification is dismissed"
    )
    default_unit_name: str = Field(
        default="Full Plate",
        description="Unit name suggested for new items"
    )
    currency_symbol: str = Field(
        default="₹",
        description="Currency symbol for displayed prices"
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

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

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
    def items_url(self) -> str:
        return f"{self.api_base_url}{self.items_path}"

    def item_url(self, item_id: int) -> str:
        """URL of a single food item (trailing slash required by the API)."""
        return f"{self.items_url.rstrip('/')}/{item_id}/"

    @property
    def login_url(self) -> str:
        return f"{self.api_base_url}{self.login_path}"

    @property
    def transactions_url(self) -> str:
        return f"{self.api_base_url}{self.transactions_path}"

    @property
    def session_path(self) -> Path:
        return Path(self.session_file).expanduser()

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Report settings that are unsafe outside development.

        Returns:
            List of problems (empty if the configuration is acceptable)
        """
        problems = []

        if not self.is_development:
            if not self.api_base_url.startswith("https://"):
                problems.append("FOOD_MANAGER_API_BASE_URL must use https")
            if self.session_backend == SessionBackend.MEMORY:
                problems.append("FOOD_MANAGER_SESSION_BACKEND=memory loses logins between runs")

        return problems


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.items_url)
        http://127.0.0.1:8000/items/items/
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-32s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Logs go to stderr so command output on stdout stays clean
    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger("food_manager")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)

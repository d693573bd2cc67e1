"""
Core module initialization.
Exports configuration and logging utilities.
"""

from food_manager.core.config import (
    EnvironmentMode,
    SessionBackend,
    Settings,
    get_logger,
    get_settings,
    setup_logging,
)

__all__ = [
    "get_settings",
    "get_logger",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "SessionBackend",
]

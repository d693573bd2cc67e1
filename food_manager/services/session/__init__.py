"""
Session Store Factory

Provides a single entry point for obtaining the configured session store.

Usage:
    from food_manager.services.session import get_session_store, SessionContext

    session = SessionContext(get_session_store())
    if session.is_authenticated:
        ...

Backend Switching:
    - FOOD_MANAGER_SESSION_BACKEND=file   → FileSessionStore (default)
    - FOOD_MANAGER_SESSION_BACKEND=memory → InMemorySessionStore
"""

import logging
from functools import lru_cache

from food_manager.core.config import SessionBackend, get_settings
from food_manager.services.session.base import BaseSessionStore
from food_manager.services.session.context import SessionContext
from food_manager.services.session.file import FileSessionStore
from food_manager.services.session.memory import InMemorySessionStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_session_store() -> BaseSessionStore:
    """
    Get the configured session store instance.

    The instance is cached so every caller shares the same in-memory
    dictionary when the memory backend is selected.

    Returns:
        BaseSessionStore: Configured session store
    """
    settings = get_settings()

    if settings.session_backend == SessionBackend.MEMORY:
        logger.debug("Session Store: Using InMemorySessionStore")
        return InMemorySessionStore()

    logger.debug(f"Session Store: Using FileSessionStore ({settings.session_path})")
    return FileSessionStore(settings.session_path)


def reset_session_store() -> None:
    """
    Clear the cached session store instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_session_store.cache_clear()
    logger.debug("Session store cache cleared")


__all__ = [
    "get_session_store",
    "reset_session_store",
    "BaseSessionStore",
    "FileSessionStore",
    "InMemorySessionStore",
    "SessionContext",
]

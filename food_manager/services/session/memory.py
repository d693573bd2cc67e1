"""
In-Memory Session Store

Keeps the session in a dictionary for the lifetime of the process. Used by
the test suite and by FOOD_MANAGER_SESSION_BACKEND=memory.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from food_manager.schemas import Session, User
from food_manager.services.session.base import TOKEN_KEY, USER_KEY, BaseSessionStore

logger = logging.getLogger(__name__)


class InMemorySessionStore(BaseSessionStore):
    """Dictionary-backed session store."""

    def __init__(self):
        self._entries: dict[str, str] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    def get(self) -> Optional[Session]:
        token = self._entries.get(TOKEN_KEY)
        if not token:
            return None
        try:
            user = json.loads(self._entries.get(USER_KEY) or "null") or {}
            return Session(token=token, user=user)
        except (json.JSONDecodeError, ValidationError):
            logger.warning("Stored user record is unreadable, ignoring session")
            return None

    def set(self, token: str, user: User) -> None:
        self._entries[TOKEN_KEY] = token
        self._entries[USER_KEY] = user.model_dump_json()

    def clear(self) -> None:
        self._entries.pop(TOKEN_KEY, None)
        self._entries.pop(USER_KEY, None)

"""
Session Context

The one object request-issuing services receive to find out who is logged
in. It is passed explicitly (there is no module-level "current session"),
which keeps every service testable with an in-memory store.
"""

import logging
from typing import Any, Mapping, Optional, Union

from food_manager.schemas import Session, User
from food_manager.services.session.base import BaseSessionStore

logger = logging.getLogger(__name__)


class SessionContext:
    """
    Explicit lifecycle around a session store: create, read, invalidate.

    Example:
        >>> ctx = SessionContext(InMemorySessionStore())
        >>> _ = ctx.create("abc123", {"username": "admin"})
        >>> ctx.read().token
        'abc123'
        >>> ctx.invalidate()
        >>> ctx.is_authenticated
        False
    """

    def __init__(self, store: BaseSessionStore):
        self._store = store

    @property
    def store(self) -> BaseSessionStore:
        return self._store

    def create(self, token: str, user: Union[User, Mapping[str, Any], None] = None) -> Session:
        """Start a session, replacing any existing one."""
        if not isinstance(user, User):
            user = User.model_validate(dict(user or {}))
        session = Session(token=token, user=user)
        self._store.set(session.token, session.user)
        logger.info(f"Session started for {session.user.display_name}")
        return session

    def read(self) -> Optional[Session]:
        return self._store.get()

    def invalidate(self) -> None:
        """End the session. Safe to call when nobody is logged in."""
        self._store.clear()
        logger.info("Session invalidated")

    @property
    def is_authenticated(self) -> bool:
        return self.read() is not None

    @property
    def token(self) -> Optional[str]:
        session = self.read()
        return session.token if session else None

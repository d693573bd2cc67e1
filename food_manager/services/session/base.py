"""
Session Store Abstract Base Class

Defines the contract for keeping the login token and user record between
requests (and, for persistent stores, between runs).

The store is a plain key-value adapter with two entries:
    token: opaque string issued by the login endpoint
    user:  JSON-serialized user profile

Tokens never expire client-side; they are treated as valid until the server
answers 401.
"""

from abc import ABC, abstractmethod
from typing import Optional

from food_manager.schemas import Session, User

TOKEN_KEY = "token"
USER_KEY = "user"


class BaseSessionStore(ABC):
    """
    Abstract base class for session stores.

    Implementations only move bytes around; SessionContext is the object
    the rest of the application talks to.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the name of the storage backend (e.g. "file", "memory")."""
        pass

    @abstractmethod
    def get(self) -> Optional[Session]:
        """
        Read the stored session.

        Returns:
            Session if both token and user entries are present, else None
        """
        pass

    @abstractmethod
    def set(self, token: str, user: User) -> None:
        """Store the token and user, replacing any previous session."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove both entries. Clearing an empty store is a no-op."""
        pass

"""
Error Taxonomy

Every failure a service can raise derives from FoodManagerError. Services
raise; the application coordinator catches, logs, and turns the error into
a transient notification. Nothing here is retried automatically.

    FoodManagerError
    ├── NetworkError            request never completed
    ├── ClientValidationError   rejected before anything was sent
    ├── AuthExpired             401 response or no session at all
    └── ServerRejection         non-OK status, message taken from the body
        ├── FetchError
        │   └── NonJsonResponseError
        ├── CreateError
        ├── UpdateError
        └── LoginError
"""

from typing import Any, Optional


class FoodManagerError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NetworkError(FoodManagerError):
    """The HTTP request could not be completed (DNS, refused, timeout...)."""


class ClientValidationError(FoodManagerError):
    """Input rejected locally before any request was issued."""


class AuthExpired(FoodManagerError):
    """
    The server rejected the session token, or no session exists.

    By the time this is raised the session has already been invalidated.
    """

    def __init__(self, message: str = "Session expired. Please log in again."):
        super().__init__(message)


class ServerRejection(FoodManagerError):
    """The server answered with a non-OK status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class FetchError(ServerRejection):
    """The item collection could not be loaded."""


class NonJsonResponseError(FetchError):
    """The server answered with something other than JSON."""

    def __init__(
        self,
        message: str = "Server returned non-JSON response",
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message, status_code, payload)


class CreateError(ServerRejection):
    """Creating a food item was refused."""


class UpdateError(ServerRejection):
    """Updating a food item was refused."""


class LoginError(ServerRejection):
    """Credentials were refused."""

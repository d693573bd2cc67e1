"""
Login / Logout

Exchanges email and password for a token and stores it in the session
context. Logging out only forgets the token locally; the API has no logout
endpoint.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from food_manager.core.config import Settings, get_settings
from food_manager.errors import ClientValidationError, LoginError, NetworkError
from food_manager.schemas import LoginRequest, Session
from food_manager.services.http import read_error_payload, send_request
from food_manager.services.session import SessionContext

logger = logging.getLogger(__name__)


class AuthService:
    """Login against the users endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        session: SessionContext,
        settings: Optional[Settings] = None,
    ):
        self._client = client
        self._session = session
        self._settings = settings or get_settings()

    async def login(self, email: str, password: str) -> Session:
        """
        Authenticate and start a session.

        Raises:
            ClientValidationError: If the credentials are malformed
            LoginError: With the server's ``detail`` when refused
            NetworkError: If the server could not be reached
        """
        try:
            credentials = LoginRequest(email=email, password=password)
        except ValidationError as e:
            raise ClientValidationError(e.errors()[0]["msg"]) from e

        try:
            response = await send_request(
                self._client,
                "POST",
                self._settings.login_url,
                json=credentials.model_dump(),
            )
        except NetworkError as e:
            raise NetworkError("Network error. Please try again.") from e

        payload = read_error_payload(response)

        if not response.is_success:
            detail = payload.get("detail") if isinstance(payload, dict) else None
            logger.warning(f"Login refused for {credentials.email} ({response.status_code})")
            raise LoginError(
                detail or "Login failed. Please check your credentials.",
                status_code=response.status_code,
                payload=payload,
            )

        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise LoginError("Login response did not include a token", status_code=response.status_code)

        return self._session.create(token, payload.get("user") or {})

    def logout(self) -> None:
        self._session.invalidate()

"""
HTTP Helpers and Authenticated Request Wrapper

Every outbound call in the client goes through ``send_request`` (anonymous)
or ``AuthenticatedClient.send`` (token-bearing), so transport failures are
reported uniformly as NetworkError.

Authenticated calls additionally:
    - refuse to go out when no session exists
    - carry ``Authorization: <scheme> <token>`` and a JSON content type
    - invalidate the session on 401 and raise AuthExpired, leaving the
      decision to send the user back to login to the caller

Any other status, including 4xx/5xx, is handed back untouched for the
caller to interpret.
"""

import logging
from typing import Any, Optional

import httpx

from food_manager.errors import AuthExpired, NetworkError, NonJsonResponseError
from food_manager.services.session import SessionContext

logger = logging.getLogger(__name__)

# Response fields searched, in order, for a human-readable error message
ERROR_MESSAGE_FIELDS = ("message", "detail", "error")

MAX_TEXT_ERROR_LENGTH = 200


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """
    Issue a request without credentials.

    Raises:
        NetworkError: If the request never completed
    """
    logger.debug(f"{method} {url}")
    try:
        return await client.request(method, url, **kwargs)
    except httpx.RequestError as e:
        logger.error(f"{method} {url} failed: {e!r}")
        raise NetworkError(f"Network error: {e}") from e


def is_json_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return "application/json" in content_type


def read_json(response: httpx.Response) -> Any:
    """
    Decode a JSON body.

    Raises:
        NonJsonResponseError: If the content type is not JSON or the body
            does not parse
    """
    if not is_json_response(response):
        raise NonJsonResponseError(status_code=response.status_code)
    try:
        return response.json()
    except ValueError as e:
        raise NonJsonResponseError(
            "Server returned malformed JSON",
            status_code=response.status_code,
        ) from e


def read_error_payload(response: httpx.Response) -> Any:
    """
    Decode whatever the server sent back, tolerating non-JSON bodies.

    A text/HTML body (a proxy error page, a framework debug page) is wrapped
    as ``{"message": <first 200 characters>}``.
    """
    if is_json_response(response):
        try:
            return response.json()
        except ValueError:
            pass
    return {"message": response.text[:MAX_TEXT_ERROR_LENGTH]}


def extract_error_message(payload: Any, default: str) -> str:
    """
    Pick the first non-empty human-readable message out of an error body.

    Looks at ``message``, then ``detail``, then ``error``.

    Example:
        >>> extract_error_message({"detail": "invalid price"}, "Failed")
        'invalid price'
    """
    if isinstance(payload, dict):
        for field in ERROR_MESSAGE_FIELDS:
            value = payload.get(field)
            if value:
                return value if isinstance(value, str) else str(value)
    return default


class AuthenticatedClient:
    """
    Wraps an httpx client with token authentication.

    Attributes:
        session: Explicit session context the token is read from
        auth_scheme: Prefix before the token ("Token" for DRF token auth)
    """

    def __init__(
        self,
        session: SessionContext,
        client: httpx.AsyncClient,
        auth_scheme: str = "Token",
    ):
        self.session = session
        self.auth_scheme = auth_scheme
        self._client = client

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {
            "Authorization": f"{self.auth_scheme} {token}",
            "Content-Type": "application/json",
        }

    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Issue an authenticated request.

        Raises:
            AuthExpired: If there is no session, or the server answered 401
                (the session is invalidated before this is raised)
            NetworkError: If the request never completed
        """
        session = self.session.read()
        if session is None:
            raise AuthExpired("Not logged in")

        merged = {**(headers or {}), **self._auth_headers(session.token)}
        response = await send_request(self._client, method, url, headers=merged, **kwargs)

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.warning(f"{method} {url} returned 401, ending session")
            self.session.invalidate()
            raise AuthExpired()

        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.send("GET", url, **kwargs)

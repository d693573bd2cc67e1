"""Tests for the request helpers and the authenticated wrapper."""

import httpx
import pytest

from food_manager.errors import AuthExpired, NetworkError, NonJsonResponseError
from food_manager.services.http import (
    AuthenticatedClient,
    extract_error_message,
    read_error_payload,
    read_json,
    send_request,
)

from conftest import API, mock_client


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"message": "m", "detail": "d", "error": "e"}, "m"),
        ({"detail": "invalid price"}, "invalid price"),
        ({"message": "", "detail": None, "error": "boom"}, "boom"),
        ({"price": ["A valid number is required."]}, "fallback"),
        (["not", "a", "dict"], "fallback"),
        (None, "fallback"),
    ],
)
def test_extract_error_message(payload, expected):
    assert extract_error_message(payload, "fallback") == expected


def test_read_json_rejects_non_json():
    response = httpx.Response(200, text="<html>oops</html>")
    with pytest.raises(NonJsonResponseError):
        read_json(response)


def test_read_json_rejects_malformed_json():
    response = httpx.Response(200, content=b"{", headers={"content-type": "application/json"})
    with pytest.raises(NonJsonResponseError, match="malformed"):
        read_json(response)


def test_read_error_payload_wraps_text():
    response = httpx.Response(502, text="x" * 500)
    assert read_error_payload(response) == {"message": "x" * 200}


def test_read_error_payload_decodes_json():
    response = httpx.Response(400, json={"detail": "nope"})
    assert read_error_payload(response) == {"detail": "nope"}


@pytest.mark.asyncio
async def test_send_request_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(NetworkError):
            await send_request(client, "GET", f"{API}/items/items/")


@pytest.mark.asyncio
async def test_authenticated_request_headers(logged_in):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    async with mock_client(handler) as client:
        wrapper = AuthenticatedClient(logged_in, client)
        response = await wrapper.send("GET", f"{API}/transactions/", headers={"X-Trace": "1"})

    assert response.status_code == 200
    assert seen[0].headers["Authorization"] == "Token abc123"
    assert seen[0].headers["Content-Type"] == "application/json"
    assert seen[0].headers["X-Trace"] == "1"


@pytest.mark.asyncio
async def test_custom_auth_scheme(logged_in):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    async with mock_client(handler) as client:
        await AuthenticatedClient(logged_in, client, auth_scheme="Bearer").get(f"{API}/transactions/")

    assert seen[0].headers["Authorization"] == "Bearer abc123"


@pytest.mark.asyncio
async def test_401_clears_session_before_next_request(logged_in):
    """After a 401 no further request goes out with the dead token."""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"detail": "Invalid token."})

    async with mock_client(handler) as client:
        wrapper = AuthenticatedClient(logged_in, client)

        with pytest.raises(AuthExpired):
            await wrapper.get(f"{API}/transactions/")
        assert logged_in.read() is None

        with pytest.raises(AuthExpired):
            await wrapper.get(f"{API}/transactions/")

    assert len(calls) == 1


@pytest.mark.asyncio
async def test_no_session_means_no_request(session):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    async with mock_client(handler) as client:
        with pytest.raises(AuthExpired):
            await AuthenticatedClient(session, client).get(f"{API}/transactions/")

    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 403, 404, 500])
async def test_other_statuses_pass_through(logged_in, status):
    def handler(request):
        return httpx.Response(status, json={"detail": "x"})

    async with mock_client(handler) as client:
        response = await AuthenticatedClient(logged_in, client).get(f"{API}/transactions/")

    assert response.status_code == status
    assert logged_in.is_authenticated

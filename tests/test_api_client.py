"""
Тесты API клиента: заголовки, нормализация ответов в конверт, ошибки транспорта
"""

import pytest
import requests

from friendship_app.api_client import APIClient
from friendship_app.constants import MSG_CONNECTION_ERROR, MSG_MALFORMED_RESPONSE, MSG_NO_SESSION
from friendship_app.envelope import Failure, Success

from conftest import BASE_URL, TOKEN, FakeResponse


@pytest.mark.asyncio
async def test_authenticated_call_sends_bearer_and_json_headers(client, server):
    server.reply("GET", "/api/v1/friendship/friends", data=[])

    envelope = await client.get_friends()

    assert envelope == Success([])
    call = server.calls[0]
    assert call.headers["Content-Type"] == "application/json"
    assert call.headers["Authorization"] == f"Bearer {TOKEN}"


@pytest.mark.asyncio
async def test_plain_call_has_no_authorization(client, server):
    server.reply("POST", "/api/v1/auth/user/login", data={"token": "t"})

    await client.login("alice", "secret")

    call = server.calls[0]
    assert "Authorization" not in call.headers
    assert call.json == {"username": "alice", "password": "secret"}


@pytest.mark.asyncio
async def test_failure_envelope_keeps_diagnostic_text(client, server):
    server.reply("POST", "/api/v1/friendship/request/bob", status="FAILURE", data="User not found")

    envelope = await client.send_request("bob")

    assert isinstance(envelope, Failure)
    assert envelope.detail == "User not found"
    assert envelope.message("fallback") == "User not found"


@pytest.mark.asyncio
async def test_failure_without_data_uses_default_message(client, server):
    server.reply("PUT", "/api/v1/friendship/accept/carol", status="FAILURE")

    envelope = await client.accept_request("carol")

    assert isinstance(envelope, Failure)
    assert envelope.detail is None
    assert envelope.message("fallback") == "fallback"


@pytest.mark.asyncio
async def test_non_2xx_never_yields_success(client, server):
    server.reply("DELETE", "/api/v1/friendship/delete/dave", status="SUCCESS", status_code=500)

    envelope = await client.delete_friend("dave")

    assert isinstance(envelope, Failure)
    assert envelope.status_code == 500


@pytest.mark.asyncio
async def test_non_2xx_without_envelope_body(client, server):
    server.reply_raw("GET", "/api/v1/friendship/requests", FakeResponse(401, text="Unauthorized"))

    envelope = await client.get_requests()

    assert envelope == Failure(detail=None, status_code=401)


@pytest.mark.asyncio
async def test_2xx_with_non_json_body_is_malformed(client, server):
    server.reply_raw("GET", "/api/v1/friendship/friends", FakeResponse(200, text="<html>"))

    envelope = await client.get_friends()

    assert isinstance(envelope, Failure)
    assert envelope.detail == MSG_MALFORMED_RESPONSE


@pytest.mark.asyncio
async def test_2xx_with_unknown_status_is_malformed(client, server):
    server.reply_raw(
        "GET", "/api/v1/friendship/friends", FakeResponse(200, {"status": "MAYBE", "data": []})
    )

    envelope = await client.get_friends()

    assert isinstance(envelope, Failure)
    assert envelope.detail == MSG_MALFORMED_RESPONSE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        requests.exceptions.ConnectionError("connection refused"),
        requests.exceptions.Timeout("timed out"),
    ],
)
async def test_transport_failure_becomes_failure_envelope(client, server, exc):
    server.fail_transport("GET", "/api/v1/friendship/friends", exc)

    envelope = await client.get_friends()

    assert isinstance(envelope, Failure)
    assert envelope.detail == MSG_CONNECTION_ERROR
    assert envelope.status_code is None


@pytest.mark.asyncio
async def test_authenticated_call_without_session_skips_network(anonymous_client, server):
    envelope = await anonymous_client.get_friends()

    assert envelope == Failure(detail=MSG_NO_SESSION)
    assert server.calls == []


@pytest.mark.asyncio
async def test_username_is_quoted_in_path(client, server):
    server.reply("PUT", "/api/v1/friendship/decline/a%2Fb%20c", data=None)

    envelope = await client.decline_request("a/b c")

    assert envelope == Success(None)
    assert server.calls[0].path == "/api/v1/friendship/decline/a%2Fb%20c"


@pytest.mark.asyncio
async def test_default_timeout_is_transport_default(server):
    client = APIClient(base_url=BASE_URL, timeout=None)
    server.reply("POST", "/api/v1/auth/user/register", data=None)

    await client.register({"username": "alice"})

    assert server.calls[0].timeout is None


def test_base_url_trailing_slash_is_stripped():
    client = APIClient(base_url=f"{BASE_URL}/")
    assert client.base_url == BASE_URL

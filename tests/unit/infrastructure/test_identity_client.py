"""
Name: Identity Client Tests

Responsibilities:
  - Map sign-in responses to Session / InvalidCredentials / NetworkError
  - Treat 401/403 on get_user as "no session"
  - Persist the session file atomically and remove it on sign-out
"""

import json

import httpx
import pytest
from sst_console.crosscutting.exceptions import InvalidCredentials, NetworkError
from sst_console.domain.entities import Session
from sst_console.infrastructure.identity_client import HttpIdentityClient

pytestmark = pytest.mark.unit


def _client(handler, session_file="") -> HttpIdentityClient:
    return HttpIdentityClient(
        "https://backend.test/",
        "anon",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        session_file=session_file,
    )


class TestSignIn:
    @pytest.mark.asyncio
    async def test_password_grant(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "access_token": "at",
                    "refresh_token": "rt",
                    "user": {"id": "u-1", "email": "ana@acme.test"},
                },
            )

        session = await _client(handler).sign_in_with_password("ana@acme.test", "pw")

        assert seen["url"] == "https://backend.test/auth/v1/token?grant_type=password"
        assert seen["body"] == {"email": "ana@acme.test", "password": "pw"}
        assert session == Session(
            access_token="at", refresh_token="rt", user_id="u-1", email="ana@acme.test"
        )

    @pytest.mark.asyncio
    async def test_rejected_credentials(self):
        def handler(request):
            return httpx.Response(400, json={"error_description": "Invalid login credentials"})

        with pytest.raises(InvalidCredentials) as exc_info:
            await _client(handler).sign_in_with_password("ana@acme.test", "bad")

        assert exc_info.value.message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_unreachable_host(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(NetworkError):
            await _client(handler).sign_in_with_password("ana@acme.test", "pw")


class TestGetUser:
    @pytest.mark.asyncio
    async def test_expired_token_is_none(self):
        def handler(request):
            assert request.headers["authorization"] == "Bearer old"
            return httpx.Response(401, json={"msg": "JWT expired"})

        assert await _client(handler).get_user("old") is None

    @pytest.mark.asyncio
    async def test_valid_token(self):
        def handler(request):
            return httpx.Response(200, json={"id": "u-1", "email": "ana@acme.test"})

        assert (await _client(handler).get_user("at"))["id"] == "u-1"


class TestSessionFile:
    def test_persist_load_and_clear(self, tmp_path):
        path = tmp_path / "state" / "session.json"
        client = _client(lambda r: httpx.Response(200), session_file=str(path))
        session = Session(access_token="at", user_id="u-1", email="ana@acme.test")

        client.persist_session(session)
        assert client.load_persisted_session() == session

        client.persist_session(None)
        assert not path.exists()
        assert client.load_persisted_session() is None

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text('{"access_token": 1', encoding="utf-8")

        assert _client(lambda r: httpx.Response(200), session_file=str(path)).load_persisted_session() is None

    def test_disabled_without_path(self):
        client = _client(lambda r: httpx.Response(200))

        client.persist_session(Session(access_token="at", user_id="u", email="e"))
        assert client.load_persisted_session() is None

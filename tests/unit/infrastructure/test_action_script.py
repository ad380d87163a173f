"""
Name: Action Script Client Tests

Responsibilities:
  - Validate bounded retry with linear backoff (tenacity)
  - Validate fallback mode vs strict mode
  - Ensure the logging wrapper never propagates failures
"""

import asyncio
import json

import httpx
import pytest
from sst_console.crosscutting.exceptions import ActionScriptError
from sst_console.infrastructure.action_script import (
    FALLBACK_MESSAGE,
    ActionScriptClient,
    utc_timestamp,
)
from sst_console.infrastructure.retry import RetryPolicy

pytestmark = pytest.mark.unit

URL = "https://script.test/audit"


class _Recorder:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _client(recorder, policy=None, delays=None):
    async def fake_sleep(seconds):
        delays.append(seconds)

    return ActionScriptClient(
        URL,
        policy or RetryPolicy(),
        client=httpx.AsyncClient(transport=httpx.MockTransport(recorder)),
        sleep=fake_sleep,
    )


class TestRetryPolicy:
    def test_linear_delays(self):
        policy = RetryPolicy(backoff_ms=1_000)

        assert [policy.delay_for(n) for n in (1, 2, 3)] == [1.0, 2.0, 3.0]

    def test_invalid_attempts(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)

    def test_default_timeout_is_fifteen_seconds(self):
        assert RetryPolicy().timeout_ms == 15_000
        assert RetryPolicy().timeout_seconds == 15.0


class TestSend:
    @pytest.mark.asyncio
    async def test_unconfigured_is_noop_success(self):
        client = ActionScriptClient("")

        result = await client.send({"action": "LOGIN"})

        assert result.success is True
        assert result.attempts == 0

    @pytest.mark.asyncio
    async def test_first_attempt_success(self):
        recorder = _Recorder([httpx.Response(200, json={"ok": True})])
        delays = []

        result = await _client(recorder, delays=delays).send({"action": "LOGIN"})

        assert result.success is True
        assert result.data == {"ok": True}
        assert result.attempts == 1
        assert delays == []

    @pytest.mark.asyncio
    async def test_exhausted_with_fallback(self):
        recorder = _Recorder([httpx.Response(500), httpx.Response(500)])
        delays = []

        result = await _client(recorder, delays=delays).send({"action": "LOGIN"})

        assert len(recorder.requests) == 2
        assert delays == [1.0]
        assert result.success is True
        assert result.fallback is True
        assert result.data == {"fallback": True}
        assert result.message == FALLBACK_MESSAGE
        assert result.attempts == 2

    @pytest.mark.asyncio
    async def test_backoff_grows_linearly(self):
        recorder = _Recorder(
            [
                httpx.ConnectError("down"),
                httpx.Response(502),
                httpx.Response(200, json={"ok": True}),
            ]
        )
        delays = []

        result = await _client(
            recorder, RetryPolicy(max_attempts=3), delays=delays
        ).send({"action": "LOGIN"})

        assert delays == [1.0, 2.0]
        assert result.attempts == 3
        assert result.fallback is False

    @pytest.mark.asyncio
    async def test_exhausted_without_fallback_raises(self):
        recorder = _Recorder([httpx.Response(500), httpx.Response(500)])
        delays = []
        client = _client(recorder, RetryPolicy(fallback_mode=False), delays=delays)

        with pytest.raises(ActionScriptError):
            await client.send({"action": "LOGIN"})

    @pytest.mark.asyncio
    async def test_hung_attempt_is_cancelled_at_timeout(self):
        started = []
        cancelled = []

        async def hang(request: httpx.Request) -> httpx.Response:
            started.append(request)
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.append(request)
                raise
            return httpx.Response(200, json={"ok": True})

        delays = []
        client = _client(hang, RetryPolicy(timeout_ms=50), delays=delays)

        result = await asyncio.wait_for(client.send({"action": "LOGIN"}), timeout=2)

        assert len(started) == 2
        assert len(cancelled) == 2
        assert delays == [1.0]
        assert result.fallback is True
        assert result.attempts == 2

    @pytest.mark.asyncio
    async def test_non_json_response_is_retried(self):
        recorder = _Recorder(
            [httpx.Response(200, text="ok"), httpx.Response(200, json={"ok": 1})]
        )
        delays = []

        result = await _client(recorder, delays=delays).send({"action": "LOGIN"})

        assert result.attempts == 2
        assert result.data == {"ok": 1}


class TestLogUserAction:
    @pytest.mark.asyncio
    async def test_payload_shape(self):
        recorder = _Recorder([httpx.Response(200, json={})])

        await _client(recorder, delays=[]).log_user_action(
            "LOGIN", "ana@acme.test", {"sessionInfo": {"userAgent": "pytest"}}
        )

        payload = recorder.requests[0]
        assert payload["action"] == "LOGIN"
        assert payload["user"] == "ana@acme.test"
        assert payload["data"] == {"sessionInfo": {"userAgent": "pytest"}}
        assert payload["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_strict_mode_failure_is_swallowed(self):
        recorder = _Recorder([httpx.Response(500), httpx.Response(500)])
        client = _client(recorder, RetryPolicy(fallback_mode=False), delays=[])

        await client.log_user_action("LOGOUT", "ana@acme.test")

        assert len(recorder.requests) == 2


def test_utc_timestamp_has_milliseconds():
    stamp = utc_timestamp()

    assert stamp.endswith("Z")
    assert len(stamp.split(".")[1]) == 4

"""Unit tests for best-effort audit logging."""

import pytest
from sst_console.audit import log_to_action_script

pytestmark = pytest.mark.unit


class TestLogToActionScript:
    @pytest.mark.asyncio
    async def test_none_client_is_noop(self):
        await log_to_action_script(None, "LOGIN", "ana@acme.test")

    @pytest.mark.asyncio
    async def test_sanitizes_payload(self, action_log):
        class Weird:
            def __str__(self):
                return "weird"

        await log_to_action_script(
            action_log, "UPDATE_USER", "ana@acme.test", {"updates": ("name",), "obj": Weird()}
        )

        assert action_log.calls == [
            {
                "action": "UPDATE_USER",
                "user": "ana@acme.test",
                "data": {"updates": ["name"], "obj": "weird"},
            }
        ]

    @pytest.mark.asyncio
    async def test_failures_never_propagate(self, action_log):
        action_log.fail = True

        await log_to_action_script(action_log, "LOGOUT", "ana@acme.test", {})

        assert action_log.actions() == ["LOGOUT"]

    @pytest.mark.asyncio
    async def test_unknown_action_is_dropped_without_raising(self, action_log):
        await log_to_action_script(action_log, "DROP_TABLE", "ana@acme.test")

        assert action_log.calls == []

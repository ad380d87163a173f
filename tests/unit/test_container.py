"""
Name: Container Lifecycle Tests

Responsibilities:
  - Ensure closing the shared HTTP client also drops every singleton holding it
  - Ensure a second startup gets a fresh, open client
"""

import pytest
from sst_console import container

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _fresh_container():
    container.get_http_client.cache_clear()
    for factory in container._HTTP_DEPENDENTS:
        factory.cache_clear()
    yield
    container.get_http_client.cache_clear()
    for factory in container._HTTP_DEPENDENTS:
        factory.cache_clear()


class TestCloseHttpClient:
    @pytest.mark.asyncio
    async def test_dependents_are_rebuilt_after_close(self):
        first_client = container.get_http_client()
        first_gateway = container.get_session_gateway()
        first_audit = container.get_action_script_client()

        await container.close_http_client()

        assert first_client.is_closed
        assert container.get_http_client() is not first_client
        assert not container.get_http_client().is_closed
        assert container.get_session_gateway() is not first_gateway
        assert container.get_action_script_client() is not first_audit

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        await container.close_http_client()

        assert container.get_http_client.cache_info().currsize == 0

    @pytest.mark.asyncio
    async def test_toast_center_survives_close(self):
        toasts = container.get_toast_center()
        container.get_http_client()

        await container.close_http_client()

        assert container.get_toast_center() is toasts

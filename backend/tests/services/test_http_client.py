"""Tests for the shared HTTP client."""

import pytest

from ideaforge.services import http_client


class TestSharedHttpClient:
    @pytest.mark.asyncio
    async def test_reused_until_closed(self):
        first = http_client.get_http_client()
        assert http_client.get_http_client() is first

        await http_client.close_http_client()
        assert first.is_closed

        second = http_client.get_http_client()
        assert second is not first
        await http_client.close_http_client()

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        await http_client.close_http_client()
        await http_client.close_http_client()

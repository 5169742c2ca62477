"""Tests for SessionContext: loading the user and keeping the last good snapshot.

The upstream /auth/me call is mocked with AsyncMock; no network required.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from gatekeeper.auth.dependencies import SessionRegistry
from gatekeeper.auth.session import SessionContext
from gatekeeper.errors import SessionUnavailableError

ME_PAYLOAD = {
    "data": {
        "uuid": "u-1",
        "name": "Alice",
        "email": "alice@example.com",
        "created_at": "2024-01-01T00:00:00Z",
        "roles": [{"uuid": "r-1", "name": "admin", "display_name": "Administrator"}],
        "permissions": [{"uuid": "p-1", "name": "view-users", "display_name": "View users"}],
    }
}


def _make_http_response(data, status_code=200):
    mock = MagicMock()
    mock.json.return_value = data
    mock.raise_for_status = MagicMock()
    mock.status_code = status_code
    return mock


def _client(*responses) -> AsyncMock:
    client = AsyncMock()
    client.get = AsyncMock(side_effect=list(responses))
    return client


class TestRefresh:
    async def test_starts_loading(self):
        ctx = SessionContext(_client(), token="t")
        assert ctx.snapshot.status == "loading"

    async def test_no_token_is_unauthenticated(self):
        client = _client()
        snapshot = await SessionContext(client).refresh()
        assert snapshot.status == "unauthenticated"
        client.get.assert_not_awaited()

    async def test_loads_user(self):
        client = _client(_make_http_response(ME_PAYLOAD))
        snapshot = await SessionContext(client, token="tok").refresh()

        assert snapshot.status == "authenticated"
        assert snapshot.user.name == "Alice"
        assert [r.name for r in snapshot.roles] == ["admin"]
        assert snapshot.permission_names == frozenset({"view-users"})
        _, kwargs = client.get.call_args
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}

    async def test_missing_roles_and_permissions_are_empty(self):
        payload = {"data": {"uuid": "u-2", "name": "Bob", "roles": None}}
        snapshot = await SessionContext(_client(_make_http_response(payload)), "tok").refresh()
        assert snapshot.roles == ()
        assert snapshot.permission_names == frozenset()

    async def test_rejected_token_is_unauthenticated(self):
        client = _client(_make_http_response(ME_PAYLOAD), _make_http_response({}, 401))
        ctx = SessionContext(client, token="tok")
        await ctx.refresh()
        snapshot = await ctx.refresh()
        assert snapshot.status == "unauthenticated"
        assert snapshot.user is None

    async def test_first_load_failure_raises(self):
        client = AsyncMock()
        client.get = AsyncMock(side_effect=httpx.ConnectError("refused"))
        ctx = SessionContext(client, token="tok")
        with pytest.raises(SessionUnavailableError):
            await ctx.refresh()
        assert ctx.snapshot.status == "loading"

    async def test_failed_refresh_keeps_last_known_good(self, caplog):
        client = AsyncMock()
        client.get = AsyncMock(
            side_effect=[_make_http_response(ME_PAYLOAD), httpx.ConnectError("refused")]
        )
        ctx = SessionContext(client, token="tok")
        first = await ctx.refresh()
        with caplog.at_level(logging.WARNING):
            second = await ctx.refresh()
        assert second is first
        assert second.permission_names == frozenset({"view-users"})
        assert "keeping last known snapshot" in caplog.text

    async def test_malformed_payload_keeps_last_known_good(self):
        client = _client(_make_http_response(ME_PAYLOAD), _make_http_response({"oops": 1}))
        ctx = SessionContext(client, token="tok")
        first = await ctx.refresh()
        assert await ctx.refresh() is first

    async def test_logout_drops_user(self):
        ctx = SessionContext(_client(_make_http_response(ME_PAYLOAD)), token="tok")
        await ctx.refresh()
        ctx.logout()
        assert ctx.snapshot.status == "unauthenticated"
        assert ctx.token is None


class TestSessionRegistry:
    def test_reuses_context_per_token(self):
        registry = SessionRegistry()
        client = AsyncMock()
        assert registry.get("a", client) is registry.get("a", client)
        assert registry.get("a", client) is not registry.get("b", client)

    def test_evicts_least_recently_used(self):
        registry = SessionRegistry(max_sessions=2)
        client = AsyncMock()
        first = registry.get("a", client)
        registry.get("b", client)
        registry.get("a", client)
        registry.get("c", client)
        assert len(registry) == 2
        assert registry.get("a", client) is first

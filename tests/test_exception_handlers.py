"""Tests for error rendering."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from httpx import ASGITransport, AsyncClient

from healthref.api.main import app


async def test_unknown_route_returns_json_error(client):
    resp = await client.get("/nonexistent")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


async def test_wrong_method_returns_json_error(client):
    resp = await client.get("/api/referral")
    assert resp.status_code == 405
    assert "error" in resp.json()


async def test_unhandled_exception_returns_generic_500(mock_session):
    """Starlette re-raises after the handler runs, so ask httpx not to."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        with patch(
            "healthref.api.routes.referral.lookups.list_states",
            new_callable=AsyncMock,
            side_effect=RuntimeError("boom"),
        ):
            resp = await ac.get("/api/states")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}

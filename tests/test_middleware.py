"""Tests for request logging middleware."""

from __future__ import annotations

import logging

from conftest import scalars_result

from healthref.services.metrics import metrics


async def test_response_time_header_on_success(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    float(resp.headers["X-Response-Time-Ms"])


async def test_response_time_header_on_404(client):
    resp = await client.get("/nonexistent")
    assert resp.status_code == 404
    assert "X-Response-Time-Ms" in resp.headers


async def test_request_id_generated(client):
    resp = await client.get("/")
    assert len(resp.headers["x-request-id"]) == 32


async def test_request_id_propagated(client):
    resp = await client.get("/", headers={"X-Request-ID": "trace-abc-123"})
    assert resp.headers["x-request-id"] == "trace-abc-123"


async def test_access_log_line(client, mock_session, caplog):
    mock_session.execute.return_value = scalars_result([])
    with caplog.at_level(logging.INFO, logger="healthref.access"):
        await client.get("/api/states")
    assert any(
        "GET /api/states 200" in r.getMessage() for r in caplog.records
    )


async def test_requests_counted(client):
    await client.get("/")
    await client.get("/nonexistent")
    assert metrics.total_requests == 2
    assert metrics.status_codes == {200: 1, 404: 1}

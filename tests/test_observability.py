"""Tests for /, /health and /metrics."""

from __future__ import annotations

from conftest import make_facility, rows_result


async def test_root_liveness(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.text == "Healthcare Referral API is running!"
    assert resp.headers["content-type"].startswith("text/plain")


async def test_health_ok(client, mock_session):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"


async def test_health_degraded(client, mock_session):
    mock_session.execute.side_effect = ConnectionRefusedError("refused")
    resp = await client.get("/health")
    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "degraded"
    assert body["database"] == "unreachable"


async def test_metrics_structure(client):
    resp = await client.get("/metrics")
    assert resp.status_code == 200
    data = resp.json()
    assert "total_requests" in data
    assert set(data["referral"]) == {"resolved", "failed", "candidates_dropped"}
    assert "p50" in data["latency_ms"]
    assert "uptime_seconds" in data


async def test_metrics_count_referrals(client, mock_session):
    mock_session.execute.side_effect = [
        rows_result([make_facility()]),
        rows_result([make_facility("CHC", "CHC", "13.0", "77.6"), make_facility("Bad", "CHC", "?", "?")]),
    ]
    await client.post(
        "/api/referral",
        json={
            "selectedState": "Karnataka",
            "selectedDistrict": "Bengaluru Urban",
            "selectedSubdistrict": "Anekal",
            "selectedFacilityName": "PHC Alpha",
        },
    )
    data = (await client.get("/metrics")).json()
    assert data["referral"]["resolved"] == 1
    assert data["referral"]["candidates_dropped"] == 1

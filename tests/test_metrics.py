"""Tests for the MetricsCollector."""

from __future__ import annotations

from healthref.services.metrics import MetricsCollector


def test_inc_request():
    m = MetricsCollector()
    m.inc_request(200)
    m.inc_request(200)
    m.inc_request(404)
    assert m.total_requests == 3
    assert m.status_codes == {200: 2, 404: 1}


def test_inc_referral():
    m = MetricsCollector()
    m.inc_referral(True)
    m.inc_referral(False)
    m.inc_referral(False)
    assert m.referrals_resolved == 1
    assert m.referrals_failed == 2


def test_inc_candidates_dropped():
    m = MetricsCollector()
    m.inc_candidates_dropped()
    m.inc_candidates_dropped(3)
    assert m.candidates_dropped == 4


def test_inc_store_error():
    m = MetricsCollector()
    m.inc_store_error()
    assert m.store_errors == 1


def test_latency_percentiles_empty():
    assert MetricsCollector().get_latency_percentiles() == {
        "p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0,
    }


def test_latency_percentiles_populated():
    m = MetricsCollector()
    for i in range(1, 101):
        m.record_latency(float(i))
    p = m.get_latency_percentiles()
    assert 50.0 <= p["p50"] <= 51.0
    assert p["p90"] >= 90.0
    assert p["p99"] >= 99.0


def test_latency_single_sample():
    m = MetricsCollector()
    m.record_latency(7.25)
    assert set(m.get_latency_percentiles().values()) == {7.25}


def test_snapshot_and_reset():
    m = MetricsCollector()
    m.inc_request(200)
    m.inc_referral(True)
    m.record_latency(5.0)
    s = m.snapshot()
    assert s["total_requests"] == 1
    assert s["referral"]["resolved"] == 1
    assert "p50" in s["latency_ms"]

    m.reset()
    s = m.snapshot()
    assert s["total_requests"] == 0
    assert s["referral"]["resolved"] == 0
    assert s["latency_ms"]["p50"] == 0.0


def test_latency_bounding():
    m = MetricsCollector()
    for i in range(10_001):
        m.record_latency(float(i))
    assert len(m._latencies) == 5_000

"""In-process request and referral counters."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class MetricsCollector:
    """Counters plus a bounded latency sample buffer.

    All mutation happens under ``_lock``.  Once ``_MAX_LATENCY_SAMPLES`` is
    exceeded the buffer is cut down to its most recent half.
    """

    _MAX_LATENCY_SAMPLES: int = field(default=10_000, repr=False)

    total_requests: int = field(default=0, init=False)
    status_codes: dict[int, int] = field(default_factory=dict, init=False)
    referrals_resolved: int = field(default=0, init=False)
    referrals_failed: int = field(default=0, init=False)
    candidates_dropped: int = field(default=0, init=False)
    store_errors: int = field(default=0, init=False)

    _latencies: list[float] = field(default_factory=list, init=False, repr=False)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _start_time: float = field(default_factory=time.monotonic, init=False, repr=False)

    # -- Counters ----------------------------------------------------------

    def inc_request(self, status_code: int) -> None:
        with self._lock:
            self.total_requests += 1
            self.status_codes[status_code] = self.status_codes.get(status_code, 0) + 1

    def inc_referral(self, success: bool) -> None:
        with self._lock:
            if success:
                self.referrals_resolved += 1
            else:
                self.referrals_failed += 1

    def inc_candidates_dropped(self, count: int = 1) -> None:
        with self._lock:
            self.candidates_dropped += count

    def inc_store_error(self) -> None:
        with self._lock:
            self.store_errors += 1

    # -- Latency -----------------------------------------------------------

    def record_latency(self, ms: float) -> None:
        with self._lock:
            self._latencies.append(ms)
            if len(self._latencies) > self._MAX_LATENCY_SAMPLES:
                half = self._MAX_LATENCY_SAMPLES // 2
                self._latencies = self._latencies[-half:]

    def get_latency_percentiles(self) -> dict[str, float]:
        with self._lock:
            return self._percentiles_unlocked()

    def _percentiles_unlocked(self) -> dict[str, float]:
        if not self._latencies:
            return {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
        s = sorted(self._latencies)
        last = len(s) - 1
        return {
            name: round(s[min(int(len(s) * q), last)], 2)
            for name, q in (("p50", 0.50), ("p90", 0.90), ("p95", 0.95), ("p99", 0.99))
        }

    # -- Snapshot / reset --------------------------------------------------

    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self._start_time, 2)

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "uptime_seconds": round(time.monotonic() - self._start_time, 2),
                "total_requests": self.total_requests,
                "status_codes": dict(self.status_codes),
                "referral": {
                    "resolved": self.referrals_resolved,
                    "failed": self.referrals_failed,
                    "candidates_dropped": self.candidates_dropped,
                },
                "store_errors": self.store_errors,
                "latency_ms": self._percentiles_unlocked(),
            }

    def reset(self) -> None:
        with self._lock:
            self.total_requests = 0
            self.status_codes.clear()
            self.referrals_resolved = 0
            self.referrals_failed = 0
            self.candidates_dropped = 0
            self.store_errors = 0
            self._latencies.clear()
            self._start_time = time.monotonic()


metrics = MetricsCollector()

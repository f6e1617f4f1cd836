"""Structured fetch logging and quote-fetch metrics aggregation."""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)


@dataclass
class FetchSnapshot:
    uptime_seconds: float
    total_fetches: int
    failed_fetches: int
    error_rate: float
    avg_latency_ms: float
    last_fetch_at: float | None


class FetchMetrics:
    def __init__(self, started_at: float | None = None) -> None:
        self.started_at = started_at or time.time()
        self._lock = threading.Lock()
        self.total_fetches = 0
        self.failed_fetches = 0
        self.total_latency_ms = 0.0
        self.last_fetch_at: float | None = None

    def record(self, latency_ms: float, success: bool) -> None:
        with self._lock:
            self.total_fetches += 1
            if not success:
                self.failed_fetches += 1
            self.total_latency_ms += max(0.0, latency_ms)
            self.last_fetch_at = time.time()

    def snapshot(self) -> FetchSnapshot:
        with self._lock:
            fetches = self.total_fetches
            failed = self.failed_fetches
            avg_latency = (self.total_latency_ms / fetches) if fetches else 0.0
            error_rate = (failed / fetches) if fetches else 0.0
            last = self.last_fetch_at
        return FetchSnapshot(
            uptime_seconds=max(0.0, time.time() - self.started_at),
            total_fetches=fetches,
            failed_fetches=failed,
            error_rate=error_rate,
            avg_latency_ms=avg_latency,
            last_fetch_at=last,
        )


def log_fetch_event(
    symbol: str,
    latency_ms: float,
    success: bool,
    warning: str | None = None,
) -> None:
    payload: dict[str, object] = {
        "event": "quote_fetch",
        "symbol": symbol,
        "latency_ms": round(latency_ms, 3),
        "success": success,
        "timestamp": int(time.time()),
    }
    if warning:
        payload["warning"] = warning
    LOGGER.info(json.dumps(payload, ensure_ascii=True))

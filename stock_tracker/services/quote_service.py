"""Quote snapshot retrieval for a single ticker."""

from __future__ import annotations

import logging
import time

from stock_tracker.portfolio.models import QuoteSnapshot
from stock_tracker.providers.finnhub import FinnhubClient
from stock_tracker.providers.http import ProviderError
from stock_tracker.runtime.monitoring import FetchMetrics, log_fetch_event

LOGGER = logging.getLogger(__name__)


class QuoteService:
    """Turns the two Finnhub lookups into one ``QuoteSnapshot``.

    ``fetch`` never raises. A failed quote lookup yields ``None`` so callers
    keep whatever market data they already had; a failed metrics lookup only
    drops the 52-week fields. Finnhub has no 24h/1w high-low, so those are
    always ``None``.
    """

    def __init__(self, client: FinnhubClient | None, metrics: FetchMetrics | None = None) -> None:
        self.client = client
        self.metrics = metrics

    def _record(self, symbol: str, started: float, success: bool, warning: str | None = None) -> None:
        latency_ms = (time.perf_counter() - started) * 1000.0
        if self.metrics is not None:
            self.metrics.record(latency_ms=latency_ms, success=success)
        log_fetch_event(symbol=symbol, latency_ms=latency_ms, success=success, warning=warning)

    def fetch(self, ticker: str) -> QuoteSnapshot | None:
        symbol = ticker.strip().upper()
        started = time.perf_counter()
        if self.client is None:
            LOGGER.warning("quote fetch skipped: symbol=%s reason=no_api_key", symbol)
            self._record(symbol, started, success=False, warning="no_api_key")
            return None

        try:
            quote = self.client.get_quote(symbol)
        except ProviderError as error:
            LOGGER.warning(
                "quote lookup failed: symbol=%s code=%s status=%s",
                symbol,
                error.code,
                error.status,
            )
            self._record(symbol, started, success=False, warning=error.code)
            return None
        except Exception:
            LOGGER.exception("quote lookup unexpected failure: symbol=%s", symbol)
            self._record(symbol, started, success=False, warning="unexpected")
            return None

        high_52w: float | None = None
        low_52w: float | None = None
        warning: str | None = None
        try:
            financials = self.client.get_key_financials(symbol)
            high_52w = financials.week_52_high
            low_52w = financials.week_52_low
        except ProviderError as error:
            warning = f"metrics_{error.code.lower()}"
            LOGGER.info(
                "metrics lookup failed, 52-week range omitted: symbol=%s code=%s status=%s",
                symbol,
                error.code,
                error.status,
            )
        except Exception:
            warning = "metrics_unexpected"
            LOGGER.exception("metrics lookup unexpected failure: symbol=%s", symbol)

        self._record(symbol, started, success=True, warning=warning)
        return QuoteSnapshot(
            current_price=quote.price,
            prev_close=quote.previous_close,
            high_52w=high_52w,
            low_52w=low_52w,
        )

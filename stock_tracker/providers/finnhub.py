"""Finnhub API client with normalized response models."""

from __future__ import annotations

from typing import Any

from stock_tracker.providers.http import ProviderError, fetch_json
from stock_tracker.providers.models import NormalizedKeyFinancials, NormalizedQuote

FINNHUB_BASE_URL = "https://finnhub.io/api/v1"
TOKEN_HEADER = "X-Finnhub-Token"


def _num(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class FinnhubClient:
    """Thin wrapper around the two Finnhub REST endpoints the tracker reads.

    The token travels in the ``X-Finnhub-Token`` header so request URLs can be
    logged without leaking it.
    """

    def __init__(self, api_key: str, timeout_seconds: float = 15.0, base_url: str = FINNHUB_BASE_URL) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")

    def _request(self, endpoint: str, query: dict[str, str | int | float | None]) -> dict:
        params: dict[str, str | int | float] = {}
        for key, value in query.items():
            if value is not None:
                params[key] = value
        data = fetch_json(
            f"{self.base_url}{endpoint}",
            provider="finnhub",
            timeout_seconds=self.timeout_seconds,
            headers={TOKEN_HEADER: self.api_key},
            params=params,
        )
        if not isinstance(data, dict):
            raise ProviderError("finnhub", "BAD_RESPONSE", "Provider returned an unexpected payload shape.")
        if data.get("error"):
            text = str(data["error"])
            lower = text.lower()
            if "limit" in lower:
                raise ProviderError("finnhub", "RATE_LIMIT", text)
            if "token" in lower or "auth" in lower:
                raise ProviderError("finnhub", "AUTH", text)
            raise ProviderError("finnhub", "UPSTREAM", text)
        return data

    def get_quote(self, symbol: str) -> NormalizedQuote:
        data = self._request("/quote", {"symbol": symbol})
        return NormalizedQuote(
            symbol=symbol,
            price=_num(data.get("c")),
            previous_close=_num(data.get("pc")),
            change=_num(data.get("d")),
            percent_change=_num(data.get("dp")),
            high=_num(data.get("h")),
            low=_num(data.get("l")),
            open=_num(data.get("o")),
            timestamp=int(data["t"]) if _num(data.get("t")) is not None else None,
            source="finnhub",
        )

    def get_key_financials(self, symbol: str) -> NormalizedKeyFinancials:
        data = self._request("/stock/metric", {"symbol": symbol, "metric": "all"})
        metrics = data.get("metric")
        if not isinstance(metrics, dict):
            metrics = {}
        return NormalizedKeyFinancials(
            symbol=symbol,
            week_52_high=_num(metrics.get("52WeekHigh")),
            week_52_low=_num(metrics.get("52WeekLow")),
            source="finnhub",
        )

"""Normalized data models returned by market-data providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ProviderName = Literal["finnhub"]


@dataclass
class NormalizedQuote:
    symbol: str
    price: float | None
    previous_close: float | None
    change: float | None = None
    percent_change: float | None = None
    high: float | None = None
    low: float | None = None
    open: float | None = None
    timestamp: int | None = None
    source: ProviderName = "finnhub"


@dataclass
class NormalizedKeyFinancials:
    symbol: str
    week_52_high: float | None = None
    week_52_low: float | None = None
    source: ProviderName = "finnhub"

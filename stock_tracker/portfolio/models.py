"""Typed portfolio models."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields

MARKET_FIELDS = (
    "current_price",
    "prev_close",
    "high_52w",
    "low_52w",
    "high_24h",
    "low_24h",
    "high_1w",
    "low_1w",
)


@dataclass(frozen=True)
class QuoteSnapshot:
    """Market-data fields returned by one refresh fetch for one ticker."""

    current_price: float | None = None
    prev_close: float | None = None
    high_52w: float | None = None
    low_52w: float | None = None
    high_24h: float | None = None
    low_24h: float | None = None
    high_1w: float | None = None
    low_1w: float | None = None


@dataclass
class Position:
    """A tracked holding plus whatever market data the last fetch produced."""

    ticker: str
    buy_price: float
    shares: int
    current_price: float | None = None
    prev_close: float | None = None
    high_52w: float | None = None
    low_52w: float | None = None
    high_24h: float | None = None
    low_24h: float | None = None
    high_1w: float | None = None
    low_1w: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.ticker, str) or not self.ticker.strip():
            raise ValueError("Ticker must be a non-empty string.")
        self.ticker = self.ticker.strip().upper()
        if isinstance(self.shares, bool) or not isinstance(self.shares, int) or self.shares <= 0:
            raise ValueError("Shares must be a positive integer.")
        if isinstance(self.buy_price, bool) or not isinstance(self.buy_price, (int, float)):
            raise ValueError("Buy price must be numeric.")
        self.buy_price = float(self.buy_price)
        if not math.isfinite(self.buy_price) or self.buy_price < 0:
            raise ValueError("Buy price must be zero or greater.")

    def apply_quote(self, snapshot: QuoteSnapshot) -> None:
        for name in MARKET_FIELDS:
            setattr(self, name, getattr(snapshot, name))

    def market_data(self) -> QuoteSnapshot:
        return QuoteSnapshot(**{name: getattr(self, name) for name in MARKET_FIELDS})

    def copy(self) -> Position:
        return Position(**{item.name: getattr(self, item.name) for item in fields(self)})


@dataclass
class ValidationIssue:
    field: str
    message: str
    code: str = "invalid_value"


@dataclass
class PositionMetrics:
    ticker: str
    shares: int
    buy_price: float
    current_price: float | None
    prev_close: float | None
    cost_basis: float
    market_value: float
    day_gain: float
    day_gain_percent: float
    total_gain: float
    total_gain_percent: float


@dataclass
class PortfolioSummary:
    position_count: int
    value: float
    cost: float
    gain: float
    gain_percent: float
    day_gain: float
    day_gain_percent: float

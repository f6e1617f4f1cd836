"""Portfolio tracking domain package."""

from stock_tracker.portfolio.models import Position, QuoteSnapshot
from stock_tracker.portfolio.store import IndexOutOfRange, PortfolioStore

__all__ = ["IndexOutOfRange", "PortfolioStore", "Position", "QuoteSnapshot"]

"""Gain/loss derivations over positions and whole portfolios.

Everything here is a pure function of its arguments. Absent market fields are
read as zero through ``current_price_or_zero`` and ``prev_close_or_zero`` only,
and every ratio goes through ``_safe_percent`` so a zero denominator yields
``0.0`` instead of an exception, ``inf`` or ``nan``.
"""

from __future__ import annotations

from typing import Iterable

from stock_tracker.portfolio.models import PortfolioSummary, Position, PositionMetrics


def current_price_or_zero(position: Position) -> float:
    return position.current_price if position.current_price is not None else 0.0


def prev_close_or_zero(position: Position) -> float:
    return position.prev_close if position.prev_close is not None else 0.0


def _safe_percent(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100.0


def calculate_cost_basis(position: Position) -> float:
    return position.buy_price * position.shares


def calculate_market_value(position: Position) -> float:
    return current_price_or_zero(position) * position.shares


def calculate_day_gain(position: Position) -> float:
    """Per-share change since the previous close."""
    return current_price_or_zero(position) - prev_close_or_zero(position)


def calculate_day_gain_percent(position: Position) -> float:
    if prev_close_or_zero(position) == 0:
        return 0.0
    denominator = position.prev_close if position.prev_close is not None else 1.0
    return calculate_day_gain(position) / denominator * 100.0


def calculate_total_gain(position: Position) -> float:
    return (current_price_or_zero(position) - position.buy_price) * position.shares


def calculate_total_gain_percent(position: Position) -> float:
    return _safe_percent(current_price_or_zero(position) - position.buy_price, position.buy_price)


def calculate_portfolio_value(positions: Iterable[Position]) -> float:
    return sum((calculate_market_value(position) for position in positions), 0.0)


def calculate_portfolio_cost(positions: Iterable[Position]) -> float:
    return sum((calculate_cost_basis(position) for position in positions), 0.0)


def calculate_portfolio_gain(positions: Iterable[Position]) -> float:
    items = list(positions)
    return calculate_portfolio_value(items) - calculate_portfolio_cost(items)


def calculate_portfolio_gain_percent(positions: Iterable[Position]) -> float:
    items = list(positions)
    return _safe_percent(calculate_portfolio_gain(items), calculate_portfolio_cost(items))


def calculate_portfolio_day_gain(positions: Iterable[Position]) -> float:
    return sum((calculate_day_gain(position) * position.shares for position in positions), 0.0)


def calculate_prev_close_value(positions: Iterable[Position]) -> float:
    return sum((prev_close_or_zero(position) * position.shares for position in positions), 0.0)


def calculate_portfolio_day_gain_percent(positions: Iterable[Position]) -> float:
    items = list(positions)
    return _safe_percent(calculate_portfolio_day_gain(items), calculate_prev_close_value(items))


def summarize_position(position: Position) -> PositionMetrics:
    return PositionMetrics(
        ticker=position.ticker,
        shares=position.shares,
        buy_price=position.buy_price,
        current_price=position.current_price,
        prev_close=position.prev_close,
        cost_basis=calculate_cost_basis(position),
        market_value=calculate_market_value(position),
        day_gain=calculate_day_gain(position),
        day_gain_percent=calculate_day_gain_percent(position),
        total_gain=calculate_total_gain(position),
        total_gain_percent=calculate_total_gain_percent(position),
    )


def summarize_portfolio(positions: Iterable[Position]) -> PortfolioSummary:
    items = list(positions)
    return PortfolioSummary(
        position_count=len(items),
        value=calculate_portfolio_value(items),
        cost=calculate_portfolio_cost(items),
        gain=calculate_portfolio_gain(items),
        gain_percent=calculate_portfolio_gain_percent(items),
        day_gain=calculate_portfolio_day_gain(items),
        day_gain_percent=calculate_portfolio_day_gain_percent(items),
    )

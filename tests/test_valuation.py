import math

import pytest

from stock_tracker.portfolio.models import Position
from stock_tracker.portfolio.valuation import (
    calculate_cost_basis,
    calculate_day_gain,
    calculate_day_gain_percent,
    calculate_portfolio_cost,
    calculate_portfolio_day_gain,
    calculate_portfolio_day_gain_percent,
    calculate_portfolio_gain,
    calculate_portfolio_gain_percent,
    calculate_portfolio_value,
    calculate_total_gain,
    calculate_total_gain_percent,
    summarize_portfolio,
    summarize_position,
)


def _aapl() -> Position:
    return Position(ticker="AAPL", buy_price=100.0, shares=10, current_price=110.0, prev_close=105.0)


def test_single_position_gain_scenario() -> None:
    position = _aapl()
    assert calculate_total_gain(position) == pytest.approx(100.0)
    assert calculate_total_gain_percent(position) == pytest.approx(10.0)
    assert calculate_day_gain(position) == pytest.approx(5.0)
    assert round(calculate_day_gain_percent(position), 2) == 4.76
    assert calculate_cost_basis(position) == 1000.0


def test_unquoted_position_treats_price_as_zero() -> None:
    position = Position(ticker="AAPL", buy_price=100.0, shares=10)
    assert calculate_total_gain(position) == -1000.0
    assert calculate_total_gain_percent(position) == -100.0
    assert calculate_day_gain(position) == 0.0
    assert calculate_day_gain_percent(position) == 0.0


def test_day_gain_percent_is_zero_when_prev_close_is_zero() -> None:
    position = Position(ticker="NEW", buy_price=5.0, shares=1, current_price=10.0, prev_close=0.0)
    assert calculate_day_gain(position) == 10.0
    assert calculate_day_gain_percent(position) == 0.0


def test_day_gain_without_current_price_uses_zero_minus_prev_close() -> None:
    position = Position(ticker="MSFT", buy_price=50.0, shares=2, prev_close=40.0)
    assert calculate_day_gain(position) == -40.0
    assert calculate_portfolio_day_gain([position]) == -80.0


def test_zero_buy_price_gives_zero_total_gain_percent() -> None:
    position = Position(ticker="GIFT", buy_price=0.0, shares=3, current_price=12.0)
    assert calculate_total_gain(position) == 36.0
    assert calculate_total_gain_percent(position) == 0.0


def test_portfolio_cost_is_exact_sum() -> None:
    positions = [
        Position(ticker="A", buy_price=10.1, shares=3),
        Position(ticker="B", buy_price=0.33, shares=7),
        Position(ticker="C", buy_price=1234.5678, shares=1),
    ]
    expected = 0.0
    for position in positions:
        expected += position.buy_price * position.shares
    assert calculate_portfolio_cost(positions) == expected


def test_portfolio_metrics() -> None:
    positions = [
        _aapl(),
        Position(ticker="MSFT", buy_price=200.0, shares=5, current_price=180.0, prev_close=190.0),
    ]
    assert calculate_portfolio_value(positions) == pytest.approx(1100.0 + 900.0)
    assert calculate_portfolio_cost(positions) == pytest.approx(2000.0)
    assert calculate_portfolio_gain(positions) == pytest.approx(0.0)
    assert calculate_portfolio_gain_percent(positions) == pytest.approx(0.0)
    assert calculate_portfolio_day_gain(positions) == pytest.approx(50.0 - 50.0)
    assert calculate_portfolio_day_gain_percent(positions) == pytest.approx(0.0)


def test_portfolio_day_gain_percent_weights_by_prev_close() -> None:
    positions = [
        _aapl(),
        Position(ticker="MSFT", buy_price=200.0, shares=5, current_price=200.0, prev_close=190.0),
    ]
    # day gain 50 + 50, prev close value 1050 + 950
    assert calculate_portfolio_day_gain_percent(positions) == pytest.approx(100.0 / 2000.0 * 100.0)


def test_empty_portfolio_ratios_are_zero() -> None:
    assert calculate_portfolio_cost([]) == 0.0
    assert calculate_portfolio_gain_percent([]) == 0.0
    assert calculate_portfolio_day_gain_percent([]) == 0.0


def test_ratios_are_zero_without_prev_close_or_cost() -> None:
    positions = [
        Position(ticker="A", buy_price=0.0, shares=1, current_price=5.0),
        Position(ticker="B", buy_price=0.0, shares=2, current_price=7.0),
    ]
    assert calculate_portfolio_gain_percent(positions) == 0.0
    assert calculate_portfolio_day_gain_percent(positions) == 0.0
    summary = summarize_portfolio(positions)
    assert all(math.isfinite(value) for value in (summary.gain_percent, summary.day_gain_percent))


def test_summaries() -> None:
    metrics = summarize_position(_aapl())
    assert metrics.ticker == "AAPL"
    assert metrics.market_value == pytest.approx(1100.0)
    assert metrics.total_gain == pytest.approx(100.0)

    summary = summarize_portfolio([_aapl()])
    assert summary.position_count == 1
    assert summary.value == pytest.approx(1100.0)
    assert summary.gain_percent == pytest.approx(10.0)
    assert summary.day_gain == pytest.approx(50.0)
    assert round(summary.day_gain_percent, 2) == 4.76

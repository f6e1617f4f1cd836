from stock_tracker.lib.formatters import (
    FINANCIAL_DISCLAIMER,
    format_response,
    line_money,
    line_percent,
    position_detail_lines,
)
from stock_tracker.portfolio.models import Position


def test_format_response_includes_disclaimer() -> None:
    output = format_response("Title", ["a", "b"], warning="Y")
    assert "Title" in output
    assert "Warning: Y" in output
    assert FINANCIAL_DISCLAIMER in output


def test_line_helpers() -> None:
    assert line_money("Price", 10.123) == "Price: $10.12"
    assert line_money("Price", None) == "Price: $n/a"
    assert line_percent("Gain", 4.7619) == "Gain: 4.76%"


def test_position_detail_lines_only_show_complete_ranges() -> None:
    position = Position(ticker="AAPL", buy_price=100.0, shares=10, current_price=110.0, high_52w=150.0)
    lines = position_detail_lines(position)
    assert lines[:4] == ["Ticker: AAPL", "Buy Price: $100.00", "Shares: 10", "Current Price: $110.00"]
    assert not any(line.startswith("52w") for line in lines)

    position.low_52w = 90.0
    assert "52w Low: $90.00" in position_detail_lines(position)

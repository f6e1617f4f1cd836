"""Response formatting helpers."""

from __future__ import annotations

from stock_tracker.portfolio.models import Position, PositionMetrics

FINANCIAL_DISCLAIMER = "Informational use only. This is not financial advice."


def _fmt_number(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{decimals}f}"


def _fmt_percent(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f}%"


def format_response(
    title: str,
    lines: list[str],
    warning: str | None = None,
    include_disclaimer: bool = True,
) -> str:
    chunks: list[str] = [title]
    if warning:
        chunks.append(f"Warning: {warning}")
    chunks.extend(lines)
    if include_disclaimer:
        chunks.extend(["---", FINANCIAL_DISCLAIMER])
    return "\n".join(chunks)


def line_money(label: str, value: float | None) -> str:
    return f"{label}: ${_fmt_number(value)}"


def line_percent(label: str, value: float | None) -> str:
    return f"{label}: {_fmt_percent(value)}"


def _range_lines(label: str, high: float | None, low: float | None) -> list[str]:
    # A range is only shown when both ends are known.
    if high is None or low is None:
        return []
    return [line_money(f"{label} High", high), line_money(f"{label} Low", low)]


def position_detail_lines(position: Position) -> list[str]:
    lines = [
        f"Ticker: {position.ticker}",
        line_money("Buy Price", position.buy_price),
        f"Shares: {position.shares}",
    ]
    if position.current_price is not None:
        lines.append(line_money("Current Price", position.current_price))
    if position.prev_close is not None:
        lines.append(line_money("Previous Close", position.prev_close))
    lines.extend(_range_lines("52w", position.high_52w, position.low_52w))
    lines.extend(_range_lines("24h", position.high_24h, position.low_24h))
    lines.extend(_range_lines("1w", position.high_1w, position.low_1w))
    return lines


def position_metric_lines(metrics: PositionMetrics) -> list[str]:
    return [
        line_money("Cost Basis", metrics.cost_basis),
        line_money("Market Value", metrics.market_value),
        line_money("Day Gain", metrics.day_gain),
        line_percent("Day Gain %", metrics.day_gain_percent),
        line_money("Total Gain", metrics.total_gain),
        line_percent("Total Gain %", metrics.total_gain_percent),
    ]

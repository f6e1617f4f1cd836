"""Validation of raw position input before it reaches the store."""

from __future__ import annotations

import math

from stock_tracker.portfolio.models import Position, ValidationIssue


def _as_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_whole(value: object) -> int | None:
    number = _as_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def validate_position_input(ticker: object, buy_price: object, shares: object) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if not isinstance(ticker, str) or not ticker.strip():
        issues.append(ValidationIssue(field="ticker", code="missing_ticker", message="Enter ticker."))

    price = _as_number(buy_price)
    if price is None:
        issues.append(
            ValidationIssue(field="buy_price", code="invalid_buy_price", message="Buy price must be a number.")
        )
    elif price < 0:
        issues.append(
            ValidationIssue(field="buy_price", code="invalid_buy_price", message="Buy price must be zero or greater.")
        )

    count = _as_whole(shares)
    if count is None or count <= 0:
        issues.append(
            ValidationIssue(field="shares", code="invalid_shares", message="Shares must be a positive integer.")
        )
    return issues


def parse_position_input(ticker: object, buy_price: object, shares: object) -> Position:
    """Build a Position from form-style input, raising ValueError on any issue."""
    issues = validate_position_input(ticker, buy_price, shares)
    if issues:
        raise ValueError("; ".join(f"{issue.field}: {issue.message}" for issue in issues))
    return Position(
        ticker=str(ticker),
        buy_price=_as_number(buy_price),  # type: ignore[arg-type]
        shares=_as_whole(shares),  # type: ignore[arg-type]
    )

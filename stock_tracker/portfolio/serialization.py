"""Persisted JSON form of the position list."""

from __future__ import annotations

import json
import math
from typing import Any

from stock_tracker.persistence.key_value import CorruptState
from stock_tracker.portfolio.models import Position


def position_to_json(position: Position) -> dict[str, Any]:
    return {
        "ticker": position.ticker,
        "buyPrice": position.buy_price,
        "shares": position.shares,
    }


def position_from_json(item: Any, index: int = 0) -> Position:
    if not isinstance(item, dict):
        raise CorruptState(f"Entry {index} is not an object.")
    ticker = item.get("ticker")
    buy_price = item.get("buyPrice")
    shares = item.get("shares")
    if not isinstance(ticker, str):
        raise CorruptState(f"Entry {index} has no ticker string.")
    if isinstance(buy_price, bool) or not isinstance(buy_price, (int, float)):
        raise CorruptState(f"Entry {index} has a non-numeric buyPrice.")
    # JSON writers may emit 10.0 for an integral share count.
    if isinstance(shares, float) and shares.is_integer():
        shares = int(shares)
    if isinstance(shares, bool) or not isinstance(shares, int):
        raise CorruptState(f"Entry {index} has a non-integer shares value.")

    prev_close = item.get("prevClose")
    if prev_close is not None and (
        isinstance(prev_close, bool) or not isinstance(prev_close, (int, float)) or not math.isfinite(prev_close)
    ):
        raise CorruptState(f"Entry {index} has a non-numeric prevClose.")

    try:
        position = Position(ticker=ticker, buy_price=buy_price, shares=shares)
    except ValueError as error:
        raise CorruptState(f"Entry {index} is invalid: {error}") from error
    position.prev_close = float(prev_close) if prev_close is not None else None
    return position


def encode_positions(positions: list[Position]) -> str:
    return json.dumps([position_to_json(position) for position in positions], ensure_ascii=True)


def decode_positions(raw: str) -> list[Position]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as error:
        raise CorruptState("Stored portfolio is not valid JSON.") from error
    if not isinstance(data, list):
        raise CorruptState("Stored portfolio must be a JSON array.")
    return [position_from_json(item, index) for index, item in enumerate(data)]

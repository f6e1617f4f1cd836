"""Portfolio MCP tools: the caller surface of the position store."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from stock_tracker.lib.formatters import format_response, position_detail_lines, position_metric_lines
from stock_tracker.portfolio.models import Position
from stock_tracker.portfolio.store import IndexOutOfRange
from stock_tracker.portfolio.validation import parse_position_input
from stock_tracker.portfolio.valuation import summarize_portfolio, summarize_position
from stock_tracker.runtime.response import error_response, success_response

if TYPE_CHECKING:
    from stock_tracker.tools.registry import ToolServices

STALE_QUOTE_WARNING = "Quote unavailable; market data may be missing or stale."


def position_payload(index: int, position: Position) -> dict[str, Any]:
    return {
        "index": index,
        "position": asdict(position),
        "metrics": asdict(summarize_position(position)),
    }


def portfolio_payload(positions: list[Position], loading: bool = False) -> dict[str, Any]:
    return {
        "summary": asdict(summarize_portfolio(positions)),
        "positions": [position_payload(index, position) for index, position in enumerate(positions)],
        "loading": loading,
    }


def register_portfolio_tools(mcp: FastMCP, services: ToolServices) -> None:
    store = services.portfolio

    @mcp.tool(description="List tracked positions with their gain/loss metrics.")
    def list_positions() -> str:
        return success_response(portfolio_payload(store.positions, loading=store.loading))

    @mcp.tool(description="Add a position (ticker, buy price per share, share count) and fetch its quote.")
    def add_position(ticker: str, buy_price: float, shares: int) -> str:
        try:
            position = parse_position_input(ticker, buy_price, shares)
        except ValueError as error:
            return error_response("INVALID_INPUT", str(error))
        index, added = store.add(position)
        warning = STALE_QUOTE_WARNING if added.current_price is None else None
        return success_response(position_payload(index, added), warning=warning)

    @mcp.tool(description="Replace the position at a zero-based index and refetch its quote.")
    def edit_position(index: int, ticker: str, buy_price: float, shares: int) -> str:
        try:
            position = parse_position_input(ticker, buy_price, shares)
            edited = store.edit(index, position)
        except IndexOutOfRange as error:
            return error_response("INDEX_OUT_OF_RANGE", str(error))
        except ValueError as error:
            return error_response("INVALID_INPUT", str(error))
        warning = STALE_QUOTE_WARNING if edited.current_price is None else None
        return success_response(position_payload(index, edited), warning=warning)

    @mcp.tool(description="Delete the position at a zero-based index.")
    def delete_position(index: int) -> str:
        try:
            removed = store.delete(index)
        except IndexOutOfRange as error:
            return error_response("INDEX_OUT_OF_RANGE", str(error))
        return success_response({"deleted": asdict(removed), "remaining": len(store)})

    @mcp.tool(description="Refetch quotes for every position, one ticker at a time.")
    def refresh_portfolio() -> str:
        updated = store.refresh_all()
        payload = portfolio_payload(store.positions, loading=store.loading)
        payload["updated"] = updated
        warning = None if updated == payload["summary"]["position_count"] else STALE_QUOTE_WARNING
        return success_response(payload, warning=warning)

    @mcp.tool(description="Show one position's market data, 52-week range and metrics.")
    def get_position_detail(index: int) -> str:
        try:
            position = store.get(index)
        except IndexOutOfRange as error:
            return error_response("INDEX_OUT_OF_RANGE", str(error))
        payload = position_payload(index, position)
        lines = position_detail_lines(position) + position_metric_lines(summarize_position(position))
        payload["text"] = format_response(f"{position.ticker} Details", lines)
        return success_response(payload)

    @mcp.tool(description="Portfolio value, cost, total gain and day gain.")
    def portfolio_summary() -> str:
        return success_response(asdict(summarize_portfolio(store.positions)))

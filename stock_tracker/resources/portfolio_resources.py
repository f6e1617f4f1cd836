"""Portfolio resource definitions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from stock_tracker.tools.portfolio_tools import portfolio_payload, position_payload

if TYPE_CHECKING:
    from stock_tracker.tools.registry import ToolServices

CURRENT_PORTFOLIO_URI = "portfolio://current"
POSITION_TEMPLATE_URI = "portfolio://positions/{index}"


def register_portfolio_resources(mcp: FastMCP, services: "ToolServices") -> None:
    store = services.portfolio

    @mcp.resource(
        CURRENT_PORTFOLIO_URI,
        name="current-portfolio",
        title="Current Portfolio",
        description="Portfolio summary plus every position with its latest market data and metrics.",
        mime_type="application/json",
    )
    def current_portfolio_resource() -> str:
        return json.dumps(portfolio_payload(store.positions, loading=store.loading), ensure_ascii=True)

    @mcp.resource(
        POSITION_TEMPLATE_URI,
        name="portfolio-position",
        title="Portfolio Position By Index",
        description="One position by zero-based index.",
        mime_type="application/json",
    )
    def position_by_index(index: str) -> str:
        positions = store.positions
        if not index.isdigit() or int(index) >= len(positions):
            raise ValueError("Position not found for the given index.")
        payload = position_payload(int(index), positions[int(index)])
        return json.dumps(payload, ensure_ascii=True)

"""Domain tool registry entrypoint."""

from __future__ import annotations

from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from stock_tracker.config.settings import Settings
from stock_tracker.persistence.key_value import KeyValueStorage
from stock_tracker.portfolio.store import PortfolioStore
from stock_tracker.providers.finnhub import FinnhubClient
from stock_tracker.runtime.monitoring import FetchMetrics
from stock_tracker.services.quote_service import QuoteService
from stock_tracker.tools.portfolio_tools import register_portfolio_tools


@dataclass
class ToolServices:
    portfolio: PortfolioStore
    metrics: FetchMetrics


def build_tool_services(settings: Settings) -> ToolServices:
    client = (
        FinnhubClient(settings.finnhub_api_key, settings.request_timeout_seconds, settings.finnhub_base_url)
        if settings.finnhub_api_key
        else None
    )
    metrics = FetchMetrics()
    store = PortfolioStore(
        storage=KeyValueStorage(settings.state_path),
        quotes=QuoteService(client, metrics=metrics),
        storage_key=settings.storage_key,
        refresh_on_load=settings.refresh_on_load,
    )
    return ToolServices(portfolio=store, metrics=metrics)


def register_all_tools(mcp: FastMCP, services: ToolServices) -> None:
    register_portfolio_tools(mcp, services)

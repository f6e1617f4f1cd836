"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_STATE_PATH = os.path.join("~", ".stock_tracker", "state.json")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the tracker and its stdio/HTTP MCP surface."""

    app_name: str = "stock-tracker"
    app_version: str = "1.0.0"
    transport_mode: str = "auto"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    finnhub_api_key: str | None = None
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    request_timeout_seconds: float = 15.0
    state_path: str = DEFAULT_STATE_PATH
    storage_key: str = "stocks"
    refresh_on_load: bool = True
    log_level: str = "INFO"


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _as_float(value: str | None, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    timeout = _as_float(os.getenv("REQUEST_TIMEOUT_SECONDS"), 15.0)
    return Settings(
        transport_mode=os.getenv("TRANSPORT_MODE", "auto").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        finnhub_api_key=os.getenv("FINNHUB_API_KEY") or None,
        finnhub_base_url=os.getenv("FINNHUB_BASE_URL", "https://finnhub.io/api/v1").rstrip("/"),
        request_timeout_seconds=timeout if timeout > 0 else 15.0,
        state_path=os.path.expanduser(os.getenv("PORTFOLIO_STATE_PATH") or DEFAULT_STATE_PATH),
        storage_key=os.getenv("PORTFOLIO_STORAGE_KEY") or "stocks",
        refresh_on_load=_as_bool(os.getenv("REFRESH_ON_LOAD"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )

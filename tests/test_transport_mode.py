import asyncio

from stock_tracker.config.settings import Settings
from stock_tracker.main import build_server, resolve_http_transport, resolve_transport_mode
from stock_tracker.tools.registry import build_tool_services


def test_resolve_transport_mode_auto_local(monkeypatch) -> None:
    monkeypatch.delenv("RENDER", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    assert resolve_transport_mode("auto") == "stdio"


def test_resolve_transport_mode_auto_hosted(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "10000")
    assert resolve_transport_mode("auto") == "http"


def test_resolve_http_transport_default() -> None:
    assert resolve_http_transport("invalid") == "sse"


def test_build_server_registers_tools_and_resources(tmp_path) -> None:
    settings = Settings(state_path=str(tmp_path / "state.json"))
    services = build_tool_services(settings)
    mcp = build_server(settings, services)

    tools = {tool.name for tool in asyncio.run(mcp.list_tools())}
    resources = {str(resource.uri) for resource in asyncio.run(mcp.list_resources())}
    assert "add_position" in tools
    assert "portfolio://current" in resources
    assert services.portfolio.load() == []

import os

from stock_tracker.config import settings as settings_module
from stock_tracker.config.settings import get_settings
from stock_tracker.runtime.monitoring import FetchMetrics


def test_settings_read_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: False)
    monkeypatch.setenv("FINNHUB_API_KEY", "abc")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "4.5")
    monkeypatch.setenv("PORTFOLIO_STATE_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("REFRESH_ON_LOAD", "no")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.finnhub_api_key == "abc"
    assert settings.request_timeout_seconds == 4.5
    assert settings.state_path == str(tmp_path / "s.json")
    assert settings.refresh_on_load is False
    assert settings.log_level == "DEBUG"
    assert settings.storage_key == "stocks"


def test_settings_fall_back_on_bad_values(monkeypatch) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: False)
    monkeypatch.delenv("FINNHUB_API_KEY", raising=False)
    monkeypatch.delenv("PORTFOLIO_STATE_PATH", raising=False)
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("PORT", "eighty")

    settings = get_settings()

    assert settings.finnhub_api_key is None
    assert settings.request_timeout_seconds == 15.0
    assert settings.port == 8000
    assert settings.state_path == os.path.expanduser(os.path.join("~", ".stock_tracker", "state.json"))


def test_fetch_metrics_snapshot() -> None:
    metrics = FetchMetrics()
    metrics.record(latency_ms=10.0, success=True)
    metrics.record(latency_ms=30.0, success=False)
    snapshot = metrics.snapshot()
    assert snapshot.total_fetches == 2
    assert snapshot.failed_fetches == 1
    assert snapshot.error_rate == 0.5
    assert snapshot.avg_latency_ms == 20.0
    assert snapshot.last_fetch_at is not None

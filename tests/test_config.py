"""Settings tests."""

from src.config import Settings


def test_defaults(monkeypatch):
    for name in ("API_KEY", "USER_AGENT", "HTTP_TIMEOUT_SECONDS", "PREVIEW_LENGTH"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.api_key == ""
    assert settings.user_agent == "Mozilla/5.0"
    assert settings.http_timeout_seconds == 10.0
    assert settings.preview_length == 100
    assert settings.result_ttl_seconds == 3600


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("API_KEY", "k")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("PREVIEW_LENGTH", "40")
    settings = Settings(_env_file=None)
    assert settings.api_key == "k"
    assert settings.http_timeout_seconds == 2.5
    assert settings.preview_length == 40

"""Tests for settings parsing."""

from commons_proxy.config import DEFAULT_BLACKLIST, Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "ALLOWED_ORIGINS", "RATE_LIMIT_MAX", "SAFE_SEARCH_BLACKLIST"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.allowed_origins == []
    assert settings.rate_limit_max == 30
    assert settings.rate_limit == "30/60 seconds"
    assert settings.safe_search_blacklist == DEFAULT_BLACKLIST
    assert settings.upstream_timeout == 15.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, ,https://b.example")
    monkeypatch.setenv("RATE_LIMIT_MAX", "5")
    monkeypatch.setenv("SAFE_SEARCH_BLACKLIST", "gore,violence")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.allowed_origins == ["https://a.example", "https://b.example"]
    assert settings.rate_limit == "5/60 seconds"
    assert settings.safe_search_blacklist == ["gore", "violence"]


def test_empty_origins_env_allows_any(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "")
    assert Settings(_env_file=None).allowed_origins == []

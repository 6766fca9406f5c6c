"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from codearena.config import RAPIDAPI_URL, Config

_ENV_VARS = (
    "JUDGE0_URL",
    "JUDGE0_API_KEY",
    "RAPIDAPI_KEY",
    "JUDGE0_HOST",
    "CODEARENA_LANGUAGE",
    "CODEARENA_CATALOG",
    "CODEARENA_POLL_INTERVAL",
    "CODEARENA_MAX_POLL_ATTEMPTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    config = Config.from_env()
    assert config.judge0_url == RAPIDAPI_URL
    assert config.language == "python"
    assert config.uses_rapidapi
    assert config.rapidapi_host == "judge0-ce.p.rapidapi.com"


def test_env_values(monkeypatch):
    monkeypatch.setenv("JUDGE0_URL", "http://judge0.local:2358")
    monkeypatch.setenv("JUDGE0_API_KEY", "tok")
    monkeypatch.setenv("CODEARENA_LANGUAGE", "cpp")
    monkeypatch.setenv("CODEARENA_POLL_INTERVAL", "0.25")
    monkeypatch.setenv("CODEARENA_MAX_POLL_ATTEMPTS", "5")
    config = Config.from_env()
    assert config.judge0_url == "http://judge0.local:2358"
    assert config.judge0_api_key == "tok"
    assert config.language == "cpp"
    assert config.poll_interval == 0.25
    assert config.max_poll_attempts == 5
    assert not config.uses_rapidapi


def test_rapidapi_key_fallback(monkeypatch):
    monkeypatch.setenv("RAPIDAPI_KEY", "rapid")
    assert Config.from_env().judge0_api_key == "rapid"


def test_explicit_host(monkeypatch):
    monkeypatch.setenv("JUDGE0_URL", "https://proxy.example.com")
    monkeypatch.setenv("JUDGE0_HOST", "judge0-extra.p.rapidapi.com")
    config = Config.from_env()
    assert config.uses_rapidapi
    assert config.rapidapi_host == "judge0-extra.p.rapidapi.com"


def test_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("CODEARENA_LANGUAGE", "cpp")
    config = Config.from_env(language="javascript", judge0_url=None)
    assert config.language == "javascript"
    assert config.judge0_url == RAPIDAPI_URL


def test_unsupported_language():
    with pytest.raises(ValueError, match="ruby"):
        Config.from_env(language="ruby")

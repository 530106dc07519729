"""Tests for environment-driven settings."""

import pytest

from lifeup_agent.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LIFEUP_HOST", "LIFEUP_PORT", "LIFEUP_API_TOKEN", "LIFEUP_TIMEOUT", "SAFE_MODE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.LIFEUP_HOST == "localhost"
    assert settings.LIFEUP_PORT == 13276
    assert settings.LIFEUP_API_TOKEN == ""
    assert settings.LIFEUP_TIMEOUT == 10.0
    assert settings.SAFE_MODE is False
    assert settings.base_url == "http://localhost:13276"


@pytest.mark.parametrize(
    "raw,host",
    [
        ("192.168.1.5", "192.168.1.5"),
        ("http://192.168.1.5", "192.168.1.5"),
        ("https://phone.local/", "phone.local"),
        ("  10.0.0.2  ", "10.0.0.2"),
    ],
)
def test_host_scheme_and_slash_are_stripped(raw, host):
    assert Settings(_env_file=None, LIFEUP_HOST=raw).LIFEUP_HOST == host


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LIFEUP_HOST", "http://10.0.0.7")
    monkeypatch.setenv("LIFEUP_PORT", "8080")
    monkeypatch.setenv("SAFE_MODE", "true")
    settings = Settings(_env_file=None)
    assert settings.base_url == "http://10.0.0.7:8080"
    assert settings.SAFE_MODE is True
